"""
Pydantic models for LLM response validation.

Every structured entity the app shows is validated here in full; a response
that fails any field, count or enum check is rejected as a whole.
"""

import logging
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, ValidationError, field_validator

from englearn.enums import OPTION_LETTERS, READING_QUESTION_COUNT
from englearn.utils.exceptions import SchemaViolation
from englearn.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

Score = Annotated[StrictInt, Field(ge=1, le=10)]


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


def _non_empty(v: str) -> str:
    if not v or not v.strip():
        raise ValueError("must not be empty")
    return v.strip()


class TenseQuestion(_WireModel):
    question: str
    options: List[str] = Field(min_length=4, max_length=4)
    correct_answer: Literal["A", "B", "C", "D"] = Field(alias="correctAnswer")
    explanation: str

    @field_validator("question", "explanation")
    @classmethod
    def validate_text(cls, v):
        return _non_empty(v)

    @field_validator("options")
    @classmethod
    def validate_options(cls, v):
        if any(not o or not o.strip() for o in v):
            raise ValueError("options must not be empty")
        try:
            letters = [parse_option_letter(o) for o in v]
        except SchemaViolation as e:
            raise ValueError(e.reason)
        if letters != list(OPTION_LETTERS):
            raise ValueError(f"option letters must be {', '.join(OPTION_LETTERS)} in order, got {', '.join(letters)}")
        return v

    @field_validator("correct_answer", mode="before")
    @classmethod
    def strip_answer(cls, v):
        return v.strip() if isinstance(v, str) else v


class ReadingExercise(_WireModel):
    passage: str
    questions: List[TenseQuestion] = Field(
        min_length=READING_QUESTION_COUNT, max_length=READING_QUESTION_COUNT
    )

    @field_validator("passage")
    @classmethod
    def validate_passage(cls, v):
        return _non_empty(v)


class WritingPrompt(_WireModel):
    title: str
    prompt: str
    requirements: List[str] = Field(min_length=1)
    word_count: str = Field(alias="wordCount")
    time_limit: str = Field(alias="timeLimit")
    tips: List[str]

    @field_validator("title", "prompt")
    @classmethod
    def validate_text(cls, v):
        return _non_empty(v)

    @field_validator("word_count", "time_limit", mode="before")
    @classmethod
    def number_as_text(cls, v):
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class GrammarFeedback(_WireModel):
    score: Score
    issues: List[str]


class AspectFeedback(_WireModel):
    score: Score
    feedback: str


class WritingFeedback(_WireModel):
    overall_score: Score = Field(alias="overallScore")
    strengths: List[str]
    improvements: List[str]
    grammar: GrammarFeedback
    vocabulary: AspectFeedback
    structure: AspectFeedback
    content: AspectFeedback


def _violation_from(error: ValidationError) -> SchemaViolation:
    first = error.errors()[0]
    field = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
    return SchemaViolation(field, first.get("msg", "invalid value"), details={"error_count": error.error_count()})


def _validate(model: Any, data: Any):
    try:
        if isinstance(model, TypeAdapter):
            return model.validate_python(data)
        return model.model_validate(data)
    except ValidationError as e:
        violation = _violation_from(e)
        logger.warning(f"LLM response failed validation: {violation.message}")
        raise violation from e


_QUESTION_LIST = TypeAdapter(List[TenseQuestion])


def parse_tense_questions(raw: str, expected_count: Optional[int] = None) -> List[TenseQuestion]:
    """Parse a JSON array of tense questions, optionally of an exact length."""
    data = extract_json(raw, "array")
    if not isinstance(data, list):
        raise SchemaViolation("questions", "expected a JSON array")
    if not data:
        raise SchemaViolation("questions", "array is empty")
    if expected_count is not None and len(data) != expected_count:
        raise SchemaViolation("questions", f"expected {expected_count} questions, got {len(data)}")
    return _validate(_QUESTION_LIST, data)


def parse_reading_exercise(raw: str) -> ReadingExercise:
    return _validate(ReadingExercise, extract_json(raw, "object"))


def parse_writing_prompt(raw: str) -> WritingPrompt:
    return _validate(WritingPrompt, extract_json(raw, "object"))


def parse_writing_feedback(raw: str) -> WritingFeedback:
    return _validate(WritingFeedback, extract_json(raw, "object"))


def parse_option_letter(option: str) -> str:
    """Return the answer letter of an option such as "B. Have, gone"."""
    if not isinstance(option, str) or "." not in option:
        raise SchemaViolation("options", f"option {option!r} has no letter prefix")
    letter = option.split(".", 1)[0].strip().upper()
    if letter not in OPTION_LETTERS:
        raise SchemaViolation("options", f"option letter {letter!r} is not one of {', '.join(OPTION_LETTERS)}")
    return letter
