"""Practice use cases with the completion endpoint stubbed out."""

from unittest.mock import AsyncMock, patch

import pytest

from englearn.schemas.practice import ScoreReport
from englearn.services.practice_service import PracticeService, check_answers, count_words
from englearn.utils.exceptions import TransportFailure
from englearn.utils.llm_validation import TenseQuestion, WritingPrompt
from tests.factories import (
    StubCompletion,
    make_feedback,
    make_question,
    make_reading,
    make_writing_prompt,
)


def _questions(letters):
    return [TenseQuestion.model_validate(make_question(letter, i)) for i, letter in enumerate(letters)]


class TestCheckAnswers:
    def test_four_out_of_five(self):
        report = check_answers(_questions("ABCDA"), ["A", "B", "X", "D", "A"])

        assert isinstance(report, ScoreReport)
        assert report.correct == 4
        assert report.total == 5
        assert report.percentage == 80
        assert [r.correct for r in report.results] == [True, True, False, True, True]

    def test_dict_answers_and_unanswered(self):
        report = check_answers(_questions("ABC"), {0: "A", 2: "B"})
        assert report.correct == 1
        assert report.results[1].chosen is None
        assert report.percentage == 33

    def test_empty_quiz(self):
        report = check_answers([], [])
        assert report.correct == 0 and report.total == 0 and report.percentage == 0


def test_count_words():
    assert count_words("  Hello   there,\nlearner ") == 3
    assert count_words("") == 0


class TestTenseQuestions:
    @pytest.mark.asyncio
    async def test_success(self):
        stub = StubCompletion(reply=[make_question(l, i) for i, l in enumerate("ABCDA")])
        service = PracticeService(stub)

        result = await service.generate_tense_questions("demo", "Past Simple", 5)

        assert result.success
        assert len(result.value) == 5
        assert len(stub.requests) == 1
        assert "Past Simple" in stub.requests[0].prompt

    @pytest.mark.asyncio
    async def test_wrong_count_is_reported_not_raised(self):
        stub = StubCompletion(reply=[make_question() for _ in range(4)])
        result = await PracticeService(stub).generate_tense_questions("demo", ["Past Simple"], 5)

        assert not result.success
        assert result.value is None
        assert result.error_code == "SCHEMA_VIOLATION"
        assert result.stage == "validate"
        assert result.message == "Failed to parse questions. Please try again."

    @pytest.mark.asyncio
    async def test_transport_failure_mentions_api_key(self):
        stub = StubCompletion(error=TransportFailure())
        result = await PracticeService(stub).generate_tense_questions("demo", "Past Simple", 5)

        assert not result.success
        assert result.stage == "transport"
        assert "check your API key" in result.message

    @pytest.mark.asyncio
    async def test_no_tense_selected_skips_network(self):
        stub = StubCompletion(reply="[]")
        result = await PracticeService(stub).generate_tense_questions("demo", [], 5)

        assert not result.success
        assert result.stage == "input"
        assert result.message == "Please select at least one tense type"
        assert stub.requests == []


class TestReading:
    @pytest.mark.asyncio
    async def test_health_and_wellness_beginner(self):
        stub = StubCompletion(reply=make_reading())
        result = await PracticeService(stub).generate_reading_exercise("demo", "beginner", "Health and Wellness")

        assert result.success
        assert isinstance(result.value.passage, str)
        assert len(result.value.questions) == 5
        assert all(len(q.options) == 4 for q in result.value.questions)
        sent = stub.requests[0]
        assert sent.model == "demo"
        assert "Health and Wellness" in sent.prompt

    @pytest.mark.asyncio
    async def test_missing_fifth_question(self):
        stub = StubCompletion(reply=make_reading(question_count=4))
        result = await PracticeService(stub).generate_reading_exercise("demo", "beginner", "Health and Wellness")

        assert not result.success
        assert result.error_code == "SCHEMA_VIOLATION"
        assert "questions" in result.message

    @pytest.mark.asyncio
    async def test_fenced_reply_with_broken_json_gets_fence_hint(self):
        stub = StubCompletion(reply='```json\n{"passage": "x", "questions": [}\n```')
        result = await PracticeService(stub).generate_reading_exercise("demo", "beginner", "Health and Wellness")

        assert result.stage == "decode"
        assert result.message == "The AI returned formatted text instead of pure JSON. Please try again."

    @pytest.mark.asyncio
    async def test_prose_reply_suggests_other_model(self):
        stub = StubCompletion(reply="I am unable to write that passage.")
        result = await PracticeService(stub).generate_reading_exercise("demo", "beginner", "Health and Wellness")

        assert result.stage == "locate"
        assert "different model" in result.message

    @pytest.mark.asyncio
    async def test_unknown_level_is_input_error(self):
        stub = StubCompletion(reply=make_reading())
        result = await PracticeService(stub).generate_reading_exercise("demo", "expert", "Health and Wellness")

        assert result.stage == "input"
        assert stub.requests == []


class TestWriting:
    @pytest.mark.asyncio
    async def test_prompt_then_evaluation(self):
        prompt_stub = StubCompletion(reply=make_writing_prompt())
        prompt_result = await PracticeService(prompt_stub).generate_writing_prompt(
            "demo", "intermediate", "Letter", "Travel and Culture"
        )
        assert prompt_result.success
        assert isinstance(prompt_result.value, WritingPrompt)

        eval_stub = StubCompletion(reply=make_feedback(7))
        feedback = await PracticeService(eval_stub).evaluate_writing(
            "demo", "intermediate", "Letter", prompt_result.value, "Dear Ana, last summer I visited Bali."
        )

        assert feedback.success
        assert feedback.value.overall_score == 7
        sent = eval_stub.requests[0]
        assert "Describe a place you like to visit" in sent.prompt
        assert "Use the past tense, Write three paragraphs" in sent.prompt
        assert sent.temperature == 0.3

    @pytest.mark.asyncio
    async def test_empty_text_is_rejected_before_call(self):
        stub = StubCompletion(reply=make_feedback())
        result = await PracticeService(stub).evaluate_writing("demo", "beginner", "Essay", "Any prompt", "   ")

        assert not result.success
        assert result.message == "Please write something before requesting evaluation."
        assert stub.requests == []

    @pytest.mark.asyncio
    async def test_bad_feedback_has_evaluation_message(self):
        data = make_feedback()
        del data["grammar"]
        result = await PracticeService(StubCompletion(reply=data)).evaluate_writing(
            "demo", "beginner", "Essay", "Any prompt", "My essay."
        )
        assert result.message == "Failed to parse the evaluation response. Please try again."


class TestParagraphFlow:
    @pytest.mark.asyncio
    async def test_generate_translate_correct(self):
        stub = StubCompletion(reply="  Climate change is a global challenge.  ")
        service = PracticeService(stub)

        paragraph = await service.generate_paragraph("demo", "Write a short paragraph about climate change")
        assert paragraph.value == "Climate change is a global challenge."

        await service.translate("demo", paragraph.value)
        await service.correct_translation("demo", paragraph.value, "Perubahan iklim adalah tantangan global.")

        prompts = [r.prompt for r in stub.requests]
        assert prompts[0] == "Write a short paragraph about climate change"
        assert prompts[1].startswith("Translate this English text to Indonesian")
        assert "Perubahan iklim" in prompts[2]

    @pytest.mark.asyncio
    async def test_translation_failure_message(self):
        result = await PracticeService(StubCompletion(error=TransportFailure())).translate("demo", "Hello")
        assert result.message == "Failed to translate paragraph. Please try again."

    @pytest.mark.asyncio
    async def test_correction_requires_user_translation(self):
        stub = StubCompletion(reply="ok")
        result = await PracticeService(stub).correct_translation("demo", "Hello", "")
        assert result.stage == "input"
        assert stub.requests == []


@pytest.mark.asyncio
async def test_default_service_uses_completion_client():
    with patch("englearn.services.practice_service.complete", new=AsyncMock(return_value="Hi there.")) as mock_complete:
        service = PracticeService()
        result = await service.generate_paragraph("demo", "Say hello")

    assert result.value == "Hi there."
    mock_complete.assert_awaited_once()
    assert mock_complete.await_args.args[0].model == "demo"
