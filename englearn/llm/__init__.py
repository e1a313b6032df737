"""
LLM module - completion client, model registry and prompt builders.
"""

from .client import CompletionRequest, complete
from .models import ModelOption, list_models
from .prompts import (
    build_correction_request,
    build_evaluation_request,
    build_paragraph_request,
    build_reading_request,
    build_tense_questions_request,
    build_translation_request,
    build_writing_prompt_request,
)

__all__ = [
    "CompletionRequest",
    "complete",
    "ModelOption",
    "list_models",
    "build_correction_request",
    "build_evaluation_request",
    "build_paragraph_request",
    "build_reading_request",
    "build_tense_questions_request",
    "build_translation_request",
    "build_writing_prompt_request",
]
