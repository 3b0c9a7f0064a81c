"""HTTP routes for the intent endpoint.

Hard contract: model-side failures never surface as 5xx. The only error response is `400` for a
body that is not JSON.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.intent.parser import refine
from src.intent.schema import ErrorResponse, ResolutionEnvelope, SearchIntentRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.post(
    "/api/search-intent",
    response_model=ResolutionEnvelope,
    responses={400: {"model": ErrorResponse}},
)
async def search_intent(request: Request) -> ResolutionEnvelope | JSONResponse:
    """Refine a free-text query into an intent envelope."""

    try:
        body = await request.json()
    except ValueError:
        logger.info("rejected reason=invalid_json")
        return JSONResponse(status_code=400, content=ErrorResponse(error="Invalid JSON body").model_dump())

    query = SearchIntentRequest.model_validate(body).text if isinstance(body, dict) else ""
    return await refine(
        query,
        config=request.app.state.llm_config,
        client=request.app.state.http_client,
    )
