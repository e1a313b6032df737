from __future__ import annotations

from typing import Dict

from fastapi import APIRouter

from englearn.config import get_settings


router = APIRouter(tags=["system"])


@router.get("/health")
def health() -> Dict[str, str]:
    return {
        "status": "ok",
        "llm_configured": "yes" if get_settings().openrouter_api_key else "no",
    }
