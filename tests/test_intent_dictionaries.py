"""Tests for the English vocabularies and token normalization."""

from __future__ import annotations

from src.intent.dictionaries import (
    BUDGET_HINT_RULES,
    LOCATION_KEYWORDS,
    LOCATION_PATTERNS,
    NEARBY_PATTERNS,
    TIME_PHRASE_RULES,
)
from src.intent.normalize import normalize_text, sanitize_token


def _time_for(text: str) -> list[int]:
    return [rule.value for rule in TIME_PHRASE_RULES if rule.pattern.search(text)]


def test_time_phrase_groups() -> None:
    assert _time_for("late night") == [23 * 60]
    assert _time_for("after-hours") == [23 * 60]
    assert _time_for("night  owl") == [23 * 60]
    assert _time_for("midnight") == [23 * 60]
    assert _time_for("brunch") == [11 * 60]
    assert _time_for("morning") == [8 * 60]
    assert _time_for("midday") == [12 * 60]
    assert _time_for("evening") == [19 * 60]


def test_time_phrases_require_whole_words() -> None:
    assert _time_for("lunchbox") == []
    assert _time_for("dinnerware") == []


def test_budget_hints() -> None:
    values = [rule.value for rule in BUDGET_HINT_RULES if rule.pattern.search("mid range")]
    assert values == [3000]
    values = [rule.value for rule in BUDGET_HINT_RULES if rule.pattern.search("inexpensive")]
    assert values == [1000]


def test_nearby_patterns() -> None:
    assert any(p.search("around   me") for p in NEARBY_PATTERNS)
    assert not any(p.search("near the station") for p in NEARBY_PATTERNS)


def test_location_patterns_cover_vocabulary() -> None:
    assert [keyword for keyword, _ in LOCATION_PATTERNS] == list(LOCATION_KEYWORDS)
    assert all(keyword == keyword.lower() for keyword in LOCATION_KEYWORDS)


def test_sanitize_token() -> None:
    assert sanitize_token("  Ramen%_ ") == "ramen"
    assert sanitize_token("'O\"Brien`s*") == "obriens"
    assert sanitize_token("%%") == ""


def test_normalize_text_collapses_whitespace() -> None:
    assert normalize_text("  Late\tNIGHT \n ramen ") == "late night ramen"
    assert normalize_text("") == ""
