"""Text normalization for deterministic intent parsing."""

from __future__ import annotations

import re

# SQL LIKE wildcards, glob star, quotes and backticks never survive into a search term.
_UNSAFE_CHARS_RE = re.compile(r"[%_*'\"`]")
_MULTISPACE_RE = re.compile(r"\s+")


def sanitize_token(token: str) -> str:
    """Return a search term safe to embed in a downstream pattern filter.

    Strips wildcard/quote characters, trims surrounding whitespace and lowercases.
    """

    return _UNSAFE_CHARS_RE.sub("", token or "").strip().lower()


def normalize_text(text: str) -> str:
    """Lowercase the query and collapse runs of whitespace."""

    value = (text or "").strip().lower()
    return _MULTISPACE_RE.sub(" ", value)
