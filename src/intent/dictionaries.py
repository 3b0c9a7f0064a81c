"""English vocabularies for locations, time phrases, budget hints and proximity.

These tables drive the heuristic extractor and should remain small, closed and deterministic.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

LOCATION_KEYWORDS: tuple[str, ...] = (
    "tokyo",
    "meguro",
    "nakameguro",
    "shibuya",
    "shinjuku",
    "roppongi",
    "ebisu",
    "daikanyama",
    "ginza",
    "setagaya",
    "shimokitazawa",
    "kichijoji",
    "asakusa",
    "ikebukuro",
    "yokohama",
    "hiyoshi",
    "kamimeguro",
    "meguroku",
)

STOP_WORDS: frozenset[str] = frozenset(
    {"in", "at", "near", "for", "the", "a", "an", "to", "on", "with", "of", "best", "open", "spots"}
)


@dataclass(frozen=True)
class PhraseRule:
    """A compiled phrase group mapped to the value it implies."""

    pattern: re.Pattern[str]
    value: int


def _phrase_rule(phrases: tuple[str, ...], value: int) -> PhraseRule:
    # Longer phrases first so "after-hours" wins over any shorter overlap.
    parts = sorted(phrases, key=lambda p: (-len(p), p))
    alternation = "|".join(r"\s+".join(re.escape(word) for word in p.split()) for p in parts)
    return PhraseRule(pattern=re.compile(rf"\b(?:{alternation})\b"), value=value)


TIME_PHRASE_RULES: tuple[PhraseRule, ...] = (
    _phrase_rule(("late night", "after hours", "after-hours", "night owl", "midnight"), 23 * 60),
    _phrase_rule(("brunch",), 11 * 60),
    _phrase_rule(("breakfast", "morning"), 8 * 60),
    _phrase_rule(("lunch", "midday"), 12 * 60),
    _phrase_rule(("dinner", "evening"), 19 * 60),
)

CHEAP_BUDGET_YEN = 1000
MID_RANGE_BUDGET_YEN = 3000

BUDGET_HINT_RULES: tuple[PhraseRule, ...] = (
    PhraseRule(
        pattern=re.compile(r"\b(?:cheap|affordable|budget|low[-\s]*cost|inexpensive)\b"),
        value=CHEAP_BUDGET_YEN,
    ),
    PhraseRule(
        pattern=re.compile(r"\b(?:mid[-\s]*range|moderate|casual)\b"),
        value=MID_RANGE_BUDGET_YEN,
    ),
)

NEARBY_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bnear\s*me\b"),
    re.compile(r"\bnearby\b"),
    re.compile(r"\bclose\s*by\b"),
    re.compile(r"\baround\s*me\b"),
)

LOCATION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (keyword, re.compile(rf"\b{re.escape(keyword)}\b")) for keyword in LOCATION_KEYWORDS
)
