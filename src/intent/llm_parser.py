"""LLM-based intent refinement (enabled by `GROQ_API_KEY`).

The model is only allowed to produce **intent JSON**. The decoded object is untrusted and must be
normalized by `src.intent.schema.normalize_intent` before use.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

import httpx

from src.config.settings import DEFAULT_GROQ_API_BASE, DEFAULT_GROQ_MODEL, Settings

_MAX_LOGGED_BODY = 256


class LLMParserError(RuntimeError):
    """Raised when the LLM call fails or does not return valid JSON."""


@dataclass(frozen=True)
class LLMConfig:
    """Configuration for the OpenAI-style Chat Completions API call."""

    api_key: str
    model: str = DEFAULT_GROQ_MODEL
    api_base: str = DEFAULT_GROQ_API_BASE
    timeout_s: float = 15.0


@lru_cache(maxsize=1)
def load_prompt() -> str:
    prompt_path = Path(__file__).resolve().parent / "prompt_intent_v1.md"
    return " ".join(prompt_path.read_text(encoding="utf-8").split("\n")).strip()


def _strip_code_fences(text: str) -> str:
    value = (text or "").strip()
    if value.startswith("```"):
        value = value.strip("`")
        # After stripping backticks, try to remove leading "json" marker.
        value = value.removeprefix("json").strip()
    return value


def _truncate(text: str, limit: int = _MAX_LOGGED_BODY) -> str:
    return text if len(text) <= limit else f"{text[:limit - 4]}…"


def chat_completions_url(api_base: str) -> str:
    return api_base.rstrip("/") + "/chat/completions"


def build_request_payload(user_text: str, *, model: str) -> dict[str, Any]:
    """Build the chat-completions body: deterministic sampling, system contract + user turn."""

    return {
        "model": model,
        "temperature": 0,
        "messages": [
            {"role": "system", "content": load_prompt()},
            {"role": "user", "content": user_text},
        ],
    }


def extract_message_content(body: str) -> str:
    """Return `choices[0].message.content` from a raw completions response body."""

    try:
        decoded = json.loads(body)
    except json.JSONDecodeError as exc:
        raise LLMParserError("LLM response was not valid JSON") from exc

    try:
        content = decoded["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise LLMParserError("Unexpected LLM response format") from exc

    if not isinstance(content, str) or not content.strip():
        raise LLMParserError("Empty LLM response")
    return content


async def parse_intent_json_via_llm(
        user_text: str,
        *,
        config: LLMConfig,
        client: httpx.AsyncClient,
) -> Any:
    """Call the LLM and return the decoded JSON value of its answer.

    The call is compatible with OpenAI-style `/v1/chat/completions` APIs (Groq, OpenAI, ...).

    Raises:
        LLMParserError: On transport errors, non-success status, or non-JSON output.
    """

    try:
        response = await client.post(
            chat_completions_url(config.api_base),
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "Content-Type": "application/json",
            },
            json=build_request_payload(user_text, model=config.model),
            timeout=config.timeout_s,
        )
    except httpx.TimeoutException as exc:
        raise LLMParserError("LLM request timed out") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise LLMParserError(f"LLM connection error: {exc}") from exc
    except Exception as exc:  # noqa: BLE001
        raise LLMParserError(f"LLM client error: {exc!r}") from exc

    if not response.is_success:
        raise LLMParserError(f"LLM HTTP error: {response.status_code} {_truncate(response.text)}")

    content = extract_message_content(response.text)
    try:
        return json.loads(_strip_code_fences(content))
    except json.JSONDecodeError as exc:
        raise LLMParserError(f"LLM did not return valid JSON: {_truncate(content)}") from exc


def llm_config_from_settings(settings: Settings) -> LLMConfig:
    """Build LLM config from application settings.

    Raises:
        LLMParserError: If no API key is configured (remote refinement disabled).
    """

    if not settings.groq_api_key:
        raise LLMParserError("GROQ_API_KEY is not configured")

    return LLMConfig(
        api_key=settings.groq_api_key,
        model=settings.groq_model,
        api_base=settings.groq_api_base,
        timeout_s=settings.groq_timeout_s,
    )
