from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings, reload_settings
from .llm.models import list_models
from .routes.health import router as health_router
from .routes.practice import router as practice_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = reload_settings()
    logging.basicConfig(level=settings.log_level)
    if not settings.openrouter_api_key:
        logger.warning("OPENROUTER_API_KEY not set; every generation request will fail")
    models = list_models()
    logger.info(f"Loaded {len(models)} selectable model(s): {', '.join(m.id for m in models)}")
    yield


app = FastAPI(lifespan=lifespan, title="English Learning Practice", version="0.1.0")

if get_settings().cors_allow_all:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(health_router)
app.include_router(practice_router)
