from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional


def _b(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    v2 = v.strip().lower()
    return v2 in ("1", "true", "yes", "on", "y")


def _f(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default


def _s(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    return v.strip()


def _level(name: str, default: str = "INFO") -> str:
    v = (_s(name) or default).upper()
    return v if isinstance(logging.getLevelName(v), int) else default


DEFAULT_BASE_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_APP_TITLE = "English Learning App"
DEFAULT_TRANSLATION_LANG = "Indonesian"


@dataclass
class _Settings:
    openrouter_api_key: Optional[str]
    models_json: Optional[str]
    base_url: str
    app_title: str
    referer: Optional[str]
    timeout: float
    translation_lang: str
    cors_allow_all: bool
    log_level: str


def load_settings() -> _Settings:
    """Build settings from the current environment."""
    return _Settings(
        openrouter_api_key=_s("OPENROUTER_API_KEY"),
        models_json=_s("ENGLEARN_MODELS"),
        base_url=_s("OPENROUTER_BASE_URL", DEFAULT_BASE_URL) or DEFAULT_BASE_URL,
        app_title=_s("OPENROUTER_APP_TITLE", DEFAULT_APP_TITLE) or DEFAULT_APP_TITLE,
        referer=_s("OPENROUTER_REFERER"),
        timeout=_f("ENGLEARN_LLM_TIMEOUT", 60.0),
        translation_lang=_s("ENGLEARN_TRANSLATION_LANG", DEFAULT_TRANSLATION_LANG)
        or DEFAULT_TRANSLATION_LANG,
        cors_allow_all=_b("ENGLEARN_CORS_ALLOW_ALL", True),
        log_level=_level("ENGLEARN_LOG_LEVEL"),
    )


_SETTINGS: Optional[_Settings] = None


def get_settings() -> _Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = load_settings()
    return _SETTINGS


def reload_settings() -> _Settings:
    """Re-read the environment; used after env changes (tests, startup)."""
    global _SETTINGS
    _SETTINGS = load_settings()
    return _SETTINGS
