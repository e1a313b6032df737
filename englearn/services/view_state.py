"""
Per-screen view state, changed only through named transitions.

The record is plain pydantic data so any front end (or a test) can hold it,
serialize it, and drive it with the same actions:

    idle -> generating -> ready -> scored
                      \\-> failed (parameters editable again)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from englearn.enums import Screen
from englearn.schemas.practice import ScoreReport
from englearn.services.practice_service import PracticeResult


class Phase(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"
    SCORED = "scored"
    FAILED = "failed"


class InvalidTransition(Exception):
    def __init__(self, action: str, phase: Phase):
        super().__init__(f"Cannot {action} while {phase.value}")
        self.action = action
        self.phase = phase


class ViewState(BaseModel):
    screen: Screen
    phase: Phase = Phase.IDLE
    params: Dict[str, Any] = Field(default_factory=dict)
    result: Optional[Any] = None
    error: Optional[str] = None
    error_stage: Optional[str] = None
    answers: Dict[int, str] = Field(default_factory=dict)
    score: Optional[ScoreReport] = None

    @property
    def busy(self) -> bool:
        return self.phase == Phase.GENERATING

    @property
    def editable(self) -> bool:
        return not self.busy

    def _require(self, action: str, *allowed: Phase) -> None:
        if self.phase not in allowed:
            raise InvalidTransition(action, self.phase)

    def start_generate(self, **params: Any) -> "ViewState":
        if self.busy:
            raise InvalidTransition("start_generate", self.phase)
        return self.model_copy(
            update={
                "phase": Phase.GENERATING,
                "params": dict(params) or self.params,
                "error": None,
                "error_stage": None,
            }
        )

    def generate_succeeded(self, result: Any) -> "ViewState":
        self._require("generate_succeeded", Phase.GENERATING)
        return self.model_copy(
            update={
                "phase": Phase.READY,
                "result": result,
                "answers": {},
                "score": None,
            }
        )

    def generate_failed(self, message: str, stage: Optional[str] = None) -> "ViewState":
        # Prior result stays so the learner keeps what was already fetched
        self._require("generate_failed", Phase.GENERATING)
        return self.model_copy(update={"phase": Phase.FAILED, "error": message, "error_stage": stage})

    def apply(self, outcome: PracticeResult) -> "ViewState":
        if outcome.success:
            return self.generate_succeeded(outcome.value)
        return self.generate_failed(outcome.message or "Generation failed.", outcome.stage)

    def _require_answerable(self, action: str) -> None:
        # A failed regeneration leaves the earlier exercise answerable
        if self.phase == Phase.FAILED and self.result is not None:
            return
        self._require(action, Phase.READY)

    def select_answer(self, index: int, letter: str) -> "ViewState":
        self._require_answerable("select_answer")
        answers = dict(self.answers)
        answers[index] = letter
        return self.model_copy(update={"answers": answers})

    def scored(self, report: ScoreReport) -> "ViewState":
        self._require_answerable("scored")
        return self.model_copy(update={"phase": Phase.SCORED, "score": report})

    def reset(self) -> "ViewState":
        if self.busy:
            raise InvalidTransition("reset", self.phase)
        return ViewState(screen=self.screen)
