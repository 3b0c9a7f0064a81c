"""Application composition root.

This module wires together configuration, the shared HTTP client and the intent resolver used by
UI code.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from src.config.settings import Settings
from src.intent.cache import LRUIntentCache
from src.intent.resolver import IntentResolver


@dataclass(frozen=True)
class App:
    """Shared application dependencies for UI callers."""

    settings: Settings
    client: httpx.AsyncClient
    resolver: IntentResolver

    async def aclose(self) -> None:
        await self.client.aclose()


def create_app(settings: Settings, *, client: httpx.AsyncClient | None = None) -> App:
    """Create the application container.

    Note:
        The returned client is owned by the container. Call `await app.aclose()` at shutdown.
    """

    client = client or httpx.AsyncClient()
    resolver = IntentResolver(
        client,
        endpoint_url=settings.intent_endpoint_url,
        timeout_s=settings.intent_timeout_s,
        cache=LRUIntentCache(max_size=settings.intent_cache_size),
    )
    return App(settings=settings, client=client, resolver=resolver)
