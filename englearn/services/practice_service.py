"""
Practice use cases: render a prompt, make one completion call, parse the reply.

Every operation returns a PracticeResult; transport and parse errors are
recovered here and never escape to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, List, Mapping, Optional, Sequence, TypeVar, Union

from englearn.llm.client import CompletionRequest, complete
from englearn.llm.models import ModelOption, list_models
from englearn.llm.prompts import (
    build_correction_request,
    build_evaluation_request,
    build_paragraph_request,
    build_reading_request,
    build_tense_questions_request,
    build_translation_request,
    build_writing_prompt_request,
)
from englearn.schemas.practice import QuestionResult, ScoreReport
from englearn.utils.exceptions import (
    InputError,
    MalformedJson,
    NoJsonFound,
    PracticeError,
    SchemaViolation,
    TransportFailure,
    log_error,
)
from englearn.utils.json_parser import has_braces, has_code_fence
from englearn.utils.llm_validation import (
    ReadingExercise,
    TenseQuestion,
    WritingFeedback,
    WritingPrompt,
    parse_reading_exercise,
    parse_tense_questions,
    parse_writing_feedback,
    parse_writing_prompt,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

CompleteFn = Callable[[CompletionRequest], Awaitable[str]]


@dataclass
class PracticeResult(Generic[T]):
    """Outcome of one practice action: a value, or a classified error."""

    success: bool
    value: Optional[T] = None
    error: Optional[PracticeError] = None
    message: Optional[str] = None
    raw: Optional[str] = field(default=None, repr=False)

    @property
    def stage(self) -> Optional[str]:
        return self.error.stage if self.error is not None else None

    @property
    def error_code(self) -> Optional[str]:
        return self.error.error_code if self.error is not None else None

    @classmethod
    def ok(cls, value: T, raw: Optional[str] = None) -> "PracticeResult[T]":
        return cls(success=True, value=value, raw=raw)

    @classmethod
    def fail(cls, error: PracticeError, message: str, raw: Optional[str] = None) -> "PracticeResult[T]":
        return cls(success=False, error=error, message=message, raw=raw)


# What the learner is told when the call itself fails, per screen
_TRANSPORT_MESSAGES: Dict[str, str] = {
    "paragraph": "Failed to generate paragraph. Please check your API key and try again.",
    "translate": "Failed to translate paragraph. Please try again.",
    "correct": "Failed to check your translation. Please try again.",
    "tense": "Failed to generate questions. Please check your API key and try again.",
    "reading": "Failed to generate reading passage. Please check your internet connection and try again.",
    "writing_prompt": "Failed to generate writing prompt. Please check your internet connection and try again.",
    "evaluation": "Failed to evaluate writing. Please check your internet connection and try again.",
}


def user_message(action: str, error: PracticeError, raw: Optional[str] = None) -> str:
    """Map a classified error to a short message for the learner."""
    if isinstance(error, TransportFailure):
        return _TRANSPORT_MESSAGES.get(action, "Generation failed. Please try again.")
    if isinstance(error, InputError):
        return error.message
    if action == "tense":
        return "Failed to parse questions. Please try again."
    if action == "evaluation":
        return "Failed to parse the evaluation response. Please try again."
    if raw is not None and has_code_fence(raw):
        return "The AI returned formatted text instead of pure JSON. Please try again."
    if isinstance(error, NoJsonFound) or (raw is not None and not has_braces(raw)):
        return "The AI did not return a valid JSON response. Please try again with a different model."
    if isinstance(error, MalformedJson):
        return "Failed to parse the AI response. The response may be incomplete or malformed. Please try again."
    if isinstance(error, SchemaViolation):
        return f"The AI response was incomplete ({error.field}: {error.reason}). Please try again."
    return "Something went wrong. Please try again."


class PracticeService:
    """Runs practice actions against one completion function."""

    def __init__(self, complete_fn: Optional[CompleteFn] = None):
        self._complete: CompleteFn = complete_fn or complete

    async def _run(
        self,
        action: str,
        request: CompletionRequest,
        parse: Optional[Callable[[str], Any]] = None,
    ) -> PracticeResult:
        raw: Optional[str] = None
        try:
            raw = await self._complete(request)
            value = parse(raw) if parse is not None else raw.strip()
            return PracticeResult.ok(value, raw=raw)
        except PracticeError as e:
            if raw is not None:
                logger.warning(f"{action}: {e.stage} stage failed; raw response: {raw[:300]!r}")
            else:
                log_error(e, logger=logger)
            return PracticeResult.fail(e, user_message(action, e, raw), raw=raw)

    @staticmethod
    def _reject(action: str, error: InputError) -> PracticeResult:
        log_error(error, logger=logger, level="info")
        return PracticeResult.fail(error, user_message(action, error))

    def list_models(self) -> List[ModelOption]:
        return list_models()

    async def generate_paragraph(self, model: str, topic: str, count: int = 1) -> PracticeResult[str]:
        if not topic or not topic.strip():
            return self._reject("paragraph", InputError("Please choose a topic first.", field="topic"))
        return await self._run("paragraph", build_paragraph_request(model, topic, count))

    async def translate(self, model: str, text: str) -> PracticeResult[str]:
        if not text or not text.strip():
            return self._reject("translate", InputError("Generate a paragraph before translating.", field="text"))
        return await self._run("translate", build_translation_request(model, text))

    async def correct_translation(
        self, model: str, english_text: str, user_translation: str
    ) -> PracticeResult[str]:
        if not english_text or not english_text.strip():
            return self._reject("correct", InputError("Generate a paragraph first.", field="english_text"))
        if not user_translation or not user_translation.strip():
            return self._reject("correct", InputError("Please write your translation first.", field="user_translation"))
        return await self._run("correct", build_correction_request(model, english_text, user_translation))

    async def generate_tense_questions(
        self, model: str, tense_types: Union[str, Sequence[str]], count: int
    ) -> PracticeResult[List[TenseQuestion]]:
        selected = [tense_types] if isinstance(tense_types, str) else list(tense_types)
        if not any(t and t.strip() for t in selected):
            return self._reject("tense", InputError("Please select at least one tense type", field="tense_types"))
        if count < 1:
            return self._reject("tense", InputError("Question count must be at least 1", field="count"))
        request = build_tense_questions_request(model, tense_types, count)
        return await self._run("tense", request, lambda raw: parse_tense_questions(raw, expected_count=count))

    async def generate_reading_exercise(self, model: str, level: str, topic: str) -> PracticeResult[ReadingExercise]:
        try:
            request = build_reading_request(model, level, topic)
        except ValueError as e:
            return self._reject("reading", InputError(str(e), field="level"))
        return await self._run("reading", request, parse_reading_exercise)

    async def generate_writing_prompt(
        self, model: str, level: str, writing_type: str, topic: str
    ) -> PracticeResult[WritingPrompt]:
        try:
            request = build_writing_prompt_request(model, level, writing_type, topic)
        except ValueError as e:
            return self._reject("writing_prompt", InputError(str(e), field="level"))
        return await self._run("writing_prompt", request, parse_writing_prompt)

    async def evaluate_writing(
        self,
        model: str,
        level: str,
        writing_type: str,
        prompt_context: Union[WritingPrompt, str, None],
        user_text: str,
    ) -> PracticeResult[WritingFeedback]:
        if not user_text or not user_text.strip():
            return self._reject(
                "evaluation", InputError("Please write something before requesting evaluation.", field="user_text")
            )
        if isinstance(prompt_context, WritingPrompt):
            prompt_text, requirements = prompt_context.prompt, list(prompt_context.requirements)
        else:
            prompt_text, requirements = prompt_context or "", []
        try:
            request = build_evaluation_request(model, level, writing_type, prompt_text, requirements, user_text)
        except ValueError as e:
            return self._reject("evaluation", InputError(str(e), field="level"))
        return await self._run("evaluation", request, parse_writing_feedback)


def check_answers(
    questions: Sequence[TenseQuestion],
    answers: Union[Sequence[Optional[str]], Mapping[int, str]],
) -> ScoreReport:
    """Score answers against each question's correct letter, in question order."""
    results: List[QuestionResult] = []
    for index, question in enumerate(questions):
        if isinstance(answers, Mapping):
            chosen = answers.get(index)
        else:
            chosen = answers[index] if index < len(answers) else None
        results.append(
            QuestionResult(
                index=index,
                chosen=chosen,
                expected=question.correct_answer,
                correct=chosen == question.correct_answer,
            )
        )
    correct = sum(1 for r in results if r.correct)
    total = len(results)
    percentage = int(correct * 100 / total + 0.5) if total else 0
    return ScoreReport(correct=correct, total=total, percentage=percentage, results=results)


def count_words(text: str) -> int:
    return len(text.split()) if text else 0


_service: Optional[PracticeService] = None


def get_practice_service() -> PracticeService:
    global _service
    if _service is None:
        _service = PracticeService()
    return _service

