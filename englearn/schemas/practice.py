from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from englearn.enums import Level
from englearn.utils.llm_validation import TenseQuestion, WritingPrompt


class QuestionResult(BaseModel):
    index: int
    chosen: Optional[str] = None
    expected: str
    correct: bool


class ScoreReport(BaseModel):
    correct: int
    total: int
    percentage: int
    results: List[QuestionResult] = []


class ModelOut(BaseModel):
    id: str
    name: str


class ParagraphRequest(BaseModel):
    model: str
    topic: str
    count: int = Field(default=1, ge=1, le=10)


class TranslateRequest(BaseModel):
    model: str
    text: str


class CorrectRequest(BaseModel):
    model: str
    english_text: str
    user_translation: str


class TextOut(BaseModel):
    text: str


class TenseQuestionsRequest(BaseModel):
    model: str
    tense_types: List[str]
    count: int = Field(default=5, ge=1, le=50)


class CheckAnswersRequest(BaseModel):
    questions: List[TenseQuestion]
    answers: Union[List[Optional[str]], Dict[int, str]]


class ReadingRequest(BaseModel):
    model: str
    level: Level = Level.BEGINNER
    topic: str


class WritingPromptRequest(BaseModel):
    model: str
    level: Level = Level.BEGINNER
    writing_type: str
    topic: str


class EvaluateRequest(BaseModel):
    model: str
    level: Level = Level.BEGINNER
    writing_type: str
    prompt: Union[WritingPrompt, str]
    user_text: str


class WordCountRequest(BaseModel):
    text: str


class WordCountOut(BaseModel):
    words: int
