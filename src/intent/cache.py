"""In-process intent cache keyed by the trimmed query string."""

from __future__ import annotations

from collections import OrderedDict
from typing import Protocol

from src.intent.schema import ParsedIntent


class IntentCache(Protocol):
    """Storage capability injected into the resolver."""

    def get(self, key: str) -> ParsedIntent | None: ...

    def set(self, key: str, value: ParsedIntent) -> None: ...

    def __len__(self) -> int: ...


class LRUIntentCache:
    """Least-recently-used intent cache.

    `max_size=None` keeps every entry for the lifetime of the process.
    """

    def __init__(self, max_size: int | None = 1024) -> None:
        if max_size is not None and max_size < 1:
            raise ValueError("max_size must be >= 1 or None")
        self._max = max_size
        self._store: OrderedDict[str, ParsedIntent] = OrderedDict()

    def get(self, key: str) -> ParsedIntent | None:
        value = self._store.get(key)
        if value is None:
            return None
        self._store.move_to_end(key)
        return value

    def set(self, key: str, value: ParsedIntent) -> None:
        self._store[key] = value
        self._store.move_to_end(key)
        if self._max is None:
            return
        while len(self._store) > self._max:
            self._store.popitem(last=False)

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return key in self._store
