"""
Shared fixtures.

Only the completion endpoint is ever stubbed; everything between the prompt
builders and the parsers runs for real.
"""

import json

import pytest

from englearn.config import reload_settings


@pytest.fixture(autouse=True)
def llm_env(monkeypatch):
    """Deterministic environment for every test."""
    monkeypatch.setenv("OPENROUTER_API_KEY", "test-key")
    monkeypatch.setenv("ENGLEARN_MODELS", json.dumps({"demo": "Demo Model", "other/model:free": "Other"}))
    monkeypatch.delenv("OPENROUTER_REFERER", raising=False)
    monkeypatch.delenv("OPENROUTER_BASE_URL", raising=False)
    monkeypatch.delenv("ENGLEARN_TRANSLATION_LANG", raising=False)
    reload_settings()
    yield
    monkeypatch.undo()
    reload_settings()
