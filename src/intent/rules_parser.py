"""Rules-based search intent extractor (heuristic baseline).

This extractor is deterministic and total:
    - it runs a fixed sequence of destructive pattern stages over a lowercased working copy,
    - each stage erases what it consumed so later, broader stages cannot re-read it,
    - it never raises for string input; unrecognized words end up in `terms`.

Stage order:
    location → time phrases → currency amounts → explicit clock time → budget hints →
    proximity → residual tokens.

Currency-tagged amounts ("under 2000 yen", "¥3000", "2k") are consumed before the clock stage,
so a price is never read as a time. A bare number with no currency tag is a clock time.
"""

from __future__ import annotations

import math
import re

from src.intent.dictionaries import (
    BUDGET_HINT_RULES,
    LOCATION_PATTERNS,
    NEARBY_PATTERNS,
    STOP_WORDS,
    TIME_PHRASE_RULES,
)
from src.intent.normalize import normalize_text, sanitize_token
from src.intent.schema import ParsedIntent
from src.intent.times import CLOCK_TIME_RE, parse_clock_match

_NUMBER = r"(?P<value>\d[\d,]*(?:\.\d+)?)(?:\s?(?P<kilo>[kｋ])\b)?"
_AMOUNT_END = r"(?![\w,]|\.\d)"
_YEN_SUFFIX = r"(?:yen\b|円)"

_UNDER_AMOUNT_RE = re.compile(
    rf"\b(?:under|below|less\s*than)\s*(?:[¥￥]\s*)?{_NUMBER}(?:\s*{_YEN_SUFFIX}|{_AMOUNT_END})"
)
_PREFIX_YEN_RE = re.compile(rf"[¥￥]\s*{_NUMBER}(?:\s*{_YEN_SUFFIX}|{_AMOUNT_END})")
_SUFFIX_YEN_RE = re.compile(rf"\b{_NUMBER}\s*{_YEN_SUFFIX}")
_K_SUFFIX_RE = re.compile(r"\b(?P<value>\d[\d,]*(?:\.\d+)?)\s?(?P<kilo>[kｋ])\b")

_AMOUNT_PATTERNS: tuple[re.Pattern[str], ...] = (
    _UNDER_AMOUNT_RE,
    _PREFIX_YEN_RE,
    _SUFFIX_YEN_RE,
    _K_SUFFIX_RE,
)


def _parse_amount(raw: str, multiplier: int = 1) -> int | None:
    """Parse a figure like "2,000" or "2.5" (scaled by `multiplier`) into whole yen."""

    number = raw.replace(",", "")
    try:
        if "." not in number:
            return int(number) * multiplier
        value = float(number) * multiplier
    except ValueError:
        return None
    return round(value) if math.isfinite(value) else None


def _erase(text: str, match: re.Match[str]) -> str:
    return f"{text[:match.start()]} {text[match.end():]}"


def _extract_locations(text: str) -> tuple[str, list[str]]:
    locations: list[str] = []
    for keyword, pattern in LOCATION_PATTERNS:
        if pattern.search(text):
            locations.append(keyword)
            text = pattern.sub(" ", text)
    return text, locations


def _extract_time_phrase(text: str) -> tuple[str, int | None]:
    """Latest time phrase wins ("brunch and dinner" → dinner)."""

    minutes: int | None = None
    for rule in TIME_PHRASE_RULES:
        if rule.pattern.search(text):
            minutes = rule.value if minutes is None else max(minutes, rule.value)
            text = rule.pattern.sub(" ", text)
    return text, minutes


def _extract_budget_amounts(text: str) -> tuple[str, list[int]]:
    amounts: list[int] = []
    for pattern in _AMOUNT_PATTERNS:
        for match in pattern.finditer(text):
            multiplier = 1000 if match.group("kilo") else 1
            value = _parse_amount(match.group("value"), multiplier)
            if value is not None:
                amounts.append(value)
        text = pattern.sub(" ", text)
    return text, amounts


def _extract_clock_time(text: str) -> tuple[str, int | None]:
    """The last valid clock reading in the text wins."""

    for match in reversed(list(CLOCK_TIME_RE.finditer(text))):
        minutes = parse_clock_match(match)
        if minutes is not None:
            return _erase(text, match), minutes
    return text, None


def _extract_budget_hints(text: str) -> tuple[str, list[int]]:
    hints: list[int] = []
    for rule in BUDGET_HINT_RULES:
        if rule.pattern.search(text):
            hints.append(rule.value)
            text = rule.pattern.sub(" ", text)
    return text, hints


def _extract_nearby(text: str) -> tuple[str, bool]:
    wants_nearby = False
    for pattern in NEARBY_PATTERNS:
        if pattern.search(text):
            wants_nearby = True
            text = pattern.sub(" ", text)
    return text, wants_nearby


def _tokenize_terms(text: str) -> list[str]:
    terms: list[str] = []
    for raw in text.split():
        token = sanitize_token(raw)
        if token and token not in STOP_WORDS:
            terms.append(token)
    return terms


def _tightest_budget(candidates: list[int]) -> int | None:
    # Non-positive figures are not a budget; the smallest remaining cap wins.
    positive = [value for value in candidates if value > 0]
    return min(positive) if positive else None


def extract(text: str) -> ParsedIntent:
    """Extract a structured search intent from free text.

    Never raises for string input; empty or whitespace-only text yields an empty intent.
    """

    working = normalize_text(text)
    if not working:
        return ParsedIntent()

    working, location_terms = _extract_locations(working)
    working, target_minutes = _extract_time_phrase(working)
    working, amounts = _extract_budget_amounts(working)

    working, clock_minutes = _extract_clock_time(working)
    if clock_minutes is not None:
        target_minutes = clock_minutes

    working, hints = _extract_budget_hints(working)
    working, wants_nearby = _extract_nearby(working)

    return ParsedIntent(
        terms=tuple(_tokenize_terms(working)),
        location_terms=tuple(location_terms),
        target_minutes=target_minutes,
        max_budget_yen=_tightest_budget(amounts + hints),
        wants_nearby=wants_nearby,
    )
