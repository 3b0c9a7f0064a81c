"""Search intent schema (Pydantic models).

This schema is the contract between the extractors (heuristic/LLM), the HTTP endpoint and the
place-ranking query built downstream. Model output is untrusted: it only becomes a `ParsedIntent`
after passing through `normalize_intent`.
"""

from __future__ import annotations

import math
from numbers import Real
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from src.intent.normalize import sanitize_token
from src.intent.pricing import infer_price_tier_from_budget
from src.intent.times import MINUTES_PER_DAY

IntentSource = Literal["groq", "heuristic", "empty"]


class ParsedIntent(BaseModel):
    """A structured search filter derived from a free-text query.

    Field names are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    terms: tuple[str, ...] = ()
    location_terms: tuple[str, ...] = Field(default=(), alias="locationTerms")
    target_minutes: int | None = Field(default=None, ge=0, lt=MINUTES_PER_DAY, alias="targetMinutes")
    max_budget_yen: int | None = Field(default=None, ge=0, alias="maxBudgetYen")
    wants_nearby: bool = Field(default=False, alias="wantsNearby")

    @property
    def price_tier(self) -> int | None:
        """Price tier (1-6) implied by the budget cap, if any."""

        return infer_price_tier_from_budget(self.max_budget_yen)


class ResolutionEnvelope(BaseModel):
    """Transport wrapper recording which path produced the intent."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    intent: ParsedIntent | None
    source: IntentSource


class SearchIntentRequest(BaseModel):
    """Request body of `POST /api/search-intent`."""

    model_config = ConfigDict(extra="ignore")

    query: Any = ""

    @property
    def text(self) -> str:
        # Anything other than a string is treated as an empty query.
        return self.query if isinstance(self.query, str) else ""


class ErrorResponse(BaseModel):
    error: str


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass; JSON `true` is not a number.
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return isinstance(value, int) or math.isfinite(value)


def _sanitize_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    cleaned = (sanitize_token(entry) for entry in value if isinstance(entry, str))
    return tuple(entry for entry in cleaned if entry)


def normalize_intent(payload: Any) -> ParsedIntent | None:
    """Validate a decoded JSON object coming from the language model.

    Returns:
        A normalized `ParsedIntent`, or `None` when the payload is not an object at all.
        Individual fields are coerced (or dropped) rather than rejected.
    """

    if not isinstance(payload, dict):
        return None

    target_minutes = payload.get("targetMinutes")
    if _is_finite_number(target_minutes):
        target_minutes = max(0, min(MINUTES_PER_DAY - 1, round(target_minutes)))
    else:
        target_minutes = None

    max_budget_yen = payload.get("maxBudgetYen")
    if _is_finite_number(max_budget_yen):
        max_budget_yen = max(0, round(max_budget_yen))
    else:
        max_budget_yen = None

    return ParsedIntent(
        terms=_sanitize_list(payload.get("terms")),
        location_terms=_sanitize_list(payload.get("locationTerms")),
        target_minutes=target_minutes,
        max_budget_yen=max_budget_yen,
        wants_nearby=bool(payload.get("wantsNearby")),
    )
