"""FastAPI application factory for the intent endpoint."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from src.api.routes import router
from src.config.settings import Settings
from src.intent.llm_parser import LLMParserError, llm_config_from_settings

logger = logging.getLogger(__name__)


def create_api(settings: Settings, *, client: httpx.AsyncClient | None = None) -> FastAPI:
    """Create the HTTP application.

    Note:
        When `client` is omitted, the app opens its own outbound `httpx.AsyncClient` in the
        lifespan and closes it on shutdown. An injected client is left open for its owner.
    """

    try:
        llm_config = llm_config_from_settings(settings)
    except LLMParserError:
        logger.info("GROQ_API_KEY not set; serving heuristic intents only")
        llm_config = None

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if client is not None:
            app.state.http_client = client
            yield
            return

        async with httpx.AsyncClient() as owned:
            app.state.http_client = owned
            yield

    api = FastAPI(title="Search Intent API", lifespan=lifespan)
    api.state.settings = settings
    api.state.llm_config = llm_config
    api.include_router(router)
    return api
