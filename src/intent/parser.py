"""Intent refinement orchestration (LLM optional; heuristic fallback)."""

from __future__ import annotations

import logging

import httpx

from src.intent.llm_parser import LLMConfig, LLMParserError, parse_intent_json_via_llm
from src.intent.rules_parser import extract
from src.intent.schema import ResolutionEnvelope, normalize_intent

logger = logging.getLogger(__name__)


async def refine(
        text: str,
        *,
        config: LLMConfig | None,
        client: httpx.AsyncClient,
) -> ResolutionEnvelope:
    """Refine free text into an intent envelope.

    Strategy:
        1) Empty/whitespace input short-circuits to `source="empty"` with no intent.
        2) Without an LLM config, return the heuristic intent (no network call).
        3) Otherwise ask the LLM for intent JSON and normalize it.
        4) On any failure or invalid payload, return the heuristic intent. Remote and heuristic
           data are never merged.

    Never raises for upstream failures.
    """

    trimmed = (text or "").strip()
    if not trimmed:
        return ResolutionEnvelope(intent=None, source="empty")

    fallback = extract(trimmed)
    if config is None:
        logger.debug("fallback stage=refine reason=llm_disabled")
        return ResolutionEnvelope(intent=fallback, source="heuristic")

    try:
        payload = await parse_intent_json_via_llm(trimmed, config=config, client=client)
        intent = normalize_intent(payload)
        if intent is None:
            raise LLMParserError(f"LLM payload is not an object: {type(payload).__name__}")
    except (LLMParserError, ValueError) as exc:
        # Invalid LLM output must never reach the caller; fall back to the heuristic intent.
        logger.warning("fallback stage=refine model=%s reason=%s", config.model, exc)
        return ResolutionEnvelope(intent=fallback, source="heuristic")

    return ResolutionEnvelope(intent=intent, source="groq")
