"""Pytest configuration.

The repository uses a flat `src/` layout without an installed package. This conftest ensures tests
can import from the `src.*` namespace when running `pytest` locally.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

_SETTINGS_ENV = (
    "GROQ_API_KEY",
    "GROQ_MODEL",
    "GROQ_API_BASE",
    "GROQ_TIMEOUT_S",
    "INTENT_ENDPOINT_URL",
    "INTENT_TIMEOUT_S",
    "INTENT_CACHE_SIZE",
)


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of settings-driven tests."""

    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
