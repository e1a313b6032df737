"""
Selectable model registry, read from the ENGLEARN_MODELS mapping.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import List, Optional

from englearn.config import get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelOption:
    """A remote model id and the label shown to the learner."""

    id: str
    name: str


FALLBACK_MODEL = ModelOption(id="no-model", name="No Model")


def list_models(raw: Optional[str] = None) -> List[ModelOption]:
    """Return one ModelOption per key of the configured id -> name mapping.

    Falls back to a single "No Model" entry when the mapping is missing or
    malformed; never raises.
    """
    if raw is None:
        raw = get_settings().models_json

    if not raw:
        logger.warning("ENGLEARN_MODELS is not set, using fallback model list")
        return [FALLBACK_MODEL]

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Failed to parse ENGLEARN_MODELS: {e}")
        return [FALLBACK_MODEL]

    if not isinstance(data, dict) or not data:
        logger.warning("ENGLEARN_MODELS must be a non-empty JSON object")
        return [FALLBACK_MODEL]

    options: List[ModelOption] = []
    for model_id, name in data.items():
        if not isinstance(name, str) or not str(model_id).strip():
            logger.warning(f"Invalid ENGLEARN_MODELS entry for {model_id!r}")
            return [FALLBACK_MODEL]
        options.append(ModelOption(id=str(model_id), name=name))
    return options


def default_model(raw: Optional[str] = None) -> ModelOption:
    return list_models(raw)[0]


def get_model_by_id(model_id: str, raw: Optional[str] = None) -> Optional[ModelOption]:
    for model in list_models(raw):
        if model.id == model_id:
            return model
    return None
