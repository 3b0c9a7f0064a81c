"""Cache-aware, failure-tolerant intent resolution for UI callers.

Hard contract: `IntentResolver.resolve` always returns a `ParsedIntent`. Transport failures,
malformed responses and caller-requested aborts degrade to the local heuristic extractor and are
logged internally.
"""

from __future__ import annotations

import asyncio
import logging
from time import monotonic

import httpx

from src.intent.cache import IntentCache, LRUIntentCache
from src.intent.rules_parser import extract
from src.intent.schema import ParsedIntent, ResolutionEnvelope
from src.intent.times import format_minutes

logger = logging.getLogger(__name__)


class IntentRequestError(RuntimeError):
    """Raised when the intent endpoint cannot be reached or answers unusably."""


class IntentResolver:
    """Resolve free-text queries into intents through the intent endpoint.

    Results are memoized per trimmed query (including heuristic fallbacks, so a failing query is
    not retried while cached). Concurrent misses for the same query are not coalesced.
    """

    def __init__(
            self,
            client: httpx.AsyncClient,
            *,
            endpoint_url: str,
            timeout_s: float = 10.0,
            cache: IntentCache | None = None,
    ) -> None:
        self._client = client
        self._endpoint_url = endpoint_url
        self._timeout_s = timeout_s
        self._cache: IntentCache = cache if cache is not None else LRUIntentCache()

    @property
    def cache(self) -> IntentCache:
        return self._cache

    async def _fetch_envelope(self, query: str) -> ResolutionEnvelope:
        try:
            response = await self._client.post(
                self._endpoint_url,
                json={"query": query},
                headers={"Cache-Control": "no-store"},
                timeout=self._timeout_s,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise IntentRequestError(f"intent request failed: {exc!r}") from exc
        except Exception as exc:  # noqa: BLE001
            raise IntentRequestError(f"intent client error: {exc!r}") from exc

        if not response.is_success:
            raise IntentRequestError(f"intent request failed: {response.status_code}")

        try:
            return ResolutionEnvelope.model_validate(response.json())
        except ValueError as exc:
            raise IntentRequestError("malformed intent envelope") from exc

    async def _fetch_cancellable(self, query: str, cancel: asyncio.Event) -> ResolutionEnvelope:
        """Race the request against `cancel`; setting the event aborts the in-flight request."""

        if cancel.is_set():
            raise IntentRequestError("intent request cancelled")

        fetch = asyncio.ensure_future(self._fetch_envelope(query))
        aborted = asyncio.ensure_future(cancel.wait())
        try:
            await asyncio.wait({fetch, aborted}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            pending = [task for task in (fetch, aborted) if not task.done()]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        if fetch.cancelled():
            raise IntentRequestError("intent request cancelled")
        return fetch.result()

    def _remember_fallback(self, query: str) -> ParsedIntent:
        fallback = extract(query)
        self._cache.set(query, fallback)
        return fallback

    async def resolve(self, query: str, cancel: asyncio.Event | None = None) -> ParsedIntent:
        """Resolve a query into an intent.

        Args:
            query: Raw user text; surrounding whitespace is ignored.
            cancel: Optional abort signal. Setting it stops waiting on the network; the call
                still completes with the heuristic intent.
        """

        trimmed = (query or "").strip()
        if not trimmed:
            return extract("")

        cached = self._cache.get(trimmed)
        if cached is not None:
            return cached

        started = monotonic()
        try:
            if cancel is None:
                envelope = await self._fetch_envelope(trimmed)
            else:
                envelope = await self._fetch_cancellable(trimmed, cancel)
        except IntentRequestError as exc:
            logger.warning("fallback stage=resolve reason=%s", exc)
            return self._remember_fallback(trimmed)

        if envelope.intent is None:
            return self._remember_fallback(trimmed)

        intent = envelope.intent
        latency_ms = int((monotonic() - started) * 1000)
        logger.info(
            "resolved source=%s target=%s budget=%s latency_ms=%d",
            envelope.source,
            format_minutes(intent.target_minutes) if intent.target_minutes is not None else None,
            intent.max_budget_yen,
            latency_ms,
        )
        self._cache.set(trimmed, intent)
        return intent
