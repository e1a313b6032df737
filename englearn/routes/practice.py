from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from englearn.enums import (
    LEVEL_DESCRIPTIONS,
    PARAGRAPH_PROMPTS,
    QUESTION_COUNTS,
    READING_TOPICS,
    TENSE_TYPES,
    WRITING_TOPICS,
    WRITING_TYPES,
)
from englearn.schemas.practice import (
    CheckAnswersRequest,
    CorrectRequest,
    EvaluateRequest,
    ModelOut,
    ParagraphRequest,
    ReadingRequest,
    ScoreReport,
    TenseQuestionsRequest,
    TextOut,
    TranslateRequest,
    WordCountOut,
    WordCountRequest,
    WritingPromptRequest,
)
from englearn.services.practice_service import (
    PracticeResult,
    PracticeService,
    check_answers,
    count_words,
    get_practice_service,
)
from englearn.utils.exceptions import InputError, TransportFailure

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["practice"])


def _dump(value: Any) -> Any:
    if isinstance(value, list):
        return [_dump(v) for v in value]
    if hasattr(value, "model_dump"):
        return value.model_dump(by_alias=True)
    return value


def _unwrap(result: PracticeResult) -> Any:
    if result.success:
        return result.value
    if isinstance(result.error, TransportFailure):
        status = 502
    elif isinstance(result.error, InputError):
        status = 400
    else:
        status = 422
    raise HTTPException(
        status,
        {
            "error_code": result.error_code,
            "stage": result.stage,
            "message": result.message,
        },
    )


@router.get("/models", response_model=List[ModelOut])
def models(service: PracticeService = Depends(get_practice_service)):
    return [ModelOut(id=m.id, name=m.name) for m in service.list_models()]


@router.get("/options")
def options() -> Dict[str, Any]:
    return {
        "tense_types": TENSE_TYPES,
        "question_counts": QUESTION_COUNTS,
        "levels": [{"id": lv.value, "description": desc} for lv, desc in LEVEL_DESCRIPTIONS.items()],
        "reading_topics": READING_TOPICS,
        "writing_types": WRITING_TYPES,
        "writing_topics": WRITING_TOPICS,
        "paragraph_prompts": PARAGRAPH_PROMPTS,
    }


@router.post("/paragraph", response_model=TextOut)
async def paragraph(payload: ParagraphRequest, service: PracticeService = Depends(get_practice_service)):
    text = _unwrap(await service.generate_paragraph(payload.model, payload.topic, payload.count))
    return TextOut(text=text)


@router.post("/translate", response_model=TextOut)
async def translate(payload: TranslateRequest, service: PracticeService = Depends(get_practice_service)):
    return TextOut(text=_unwrap(await service.translate(payload.model, payload.text)))


@router.post("/correct", response_model=TextOut)
async def correct(payload: CorrectRequest, service: PracticeService = Depends(get_practice_service)):
    result = await service.correct_translation(payload.model, payload.english_text, payload.user_translation)
    return TextOut(text=_unwrap(result))


@router.post("/tense/questions")
async def tense_questions(payload: TenseQuestionsRequest, service: PracticeService = Depends(get_practice_service)):
    result = await service.generate_tense_questions(payload.model, payload.tense_types, payload.count)
    return {"questions": _dump(_unwrap(result))}


@router.post("/tense/check", response_model=ScoreReport)
def tense_check(payload: CheckAnswersRequest):
    return check_answers(payload.questions, payload.answers)


@router.post("/reading")
async def reading(payload: ReadingRequest, service: PracticeService = Depends(get_practice_service)):
    result = await service.generate_reading_exercise(payload.model, payload.level.value, payload.topic)
    return _dump(_unwrap(result))


@router.post("/reading/check", response_model=ScoreReport)
def reading_check(payload: CheckAnswersRequest):
    return check_answers(payload.questions, payload.answers)


@router.post("/writing/prompt")
async def writing_prompt(payload: WritingPromptRequest, service: PracticeService = Depends(get_practice_service)):
    result = await service.generate_writing_prompt(
        payload.model, payload.level.value, payload.writing_type, payload.topic
    )
    return _dump(_unwrap(result))


@router.post("/writing/evaluate")
async def writing_evaluate(payload: EvaluateRequest, service: PracticeService = Depends(get_practice_service)):
    result = await service.evaluate_writing(
        payload.model,
        payload.level.value,
        payload.writing_type,
        payload.prompt,
        payload.user_text,
    )
    return _dump(_unwrap(result))


@router.post("/writing/count", response_model=WordCountOut)
def writing_count(payload: WordCountRequest):
    return WordCountOut(words=count_words(payload.text))
