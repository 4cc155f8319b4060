"""Injectable cache for fetched price and dividend history."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections import OrderedDict
from datetime import date
from typing import Any, Callable

LOGGER = logging.getLogger(__name__)


def cache_key(kind: str, symbol: str, start: date | None = None, end: date | None = None) -> str:
    """Key layout: ``{kind}|{SYMBOL}|{start}|{end}``."""
    return f"{kind}|{symbol.upper()}|{start or ''}|{end or ''}"


def _key_symbol(key: str) -> str:
    parts = key.split("|")
    return parts[1] if len(parts) > 1 else ""


class HistoryCache(ABC):
    """Abstract cache interface."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the cached value, or None on miss."""
        ...

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store a value."""
        ...

    @abstractmethod
    def evict_expired(self) -> int:
        """Drop entries older than the TTL; return how many were dropped."""
        ...

    @abstractmethod
    def clear(self, symbol: str) -> None:
        ...

    @abstractmethod
    def clear_all(self) -> None:
        ...

    def get_or_fetch(self, key: str, fetch: Callable[[], Any]) -> Any:
        """Return the cached value, calling ``fetch`` and storing on miss.

        Exceptions from ``fetch`` propagate and nothing is stored.
        """
        cached = self.get(key)
        if cached is not None:
            LOGGER.info("Cache hit for %s", key)
            return cached
        value = fetch()
        self.put(key, value)
        return value


class NoCache(HistoryCache):
    """No-op cache: always misses."""

    def get(self, key):  # type: ignore[override]
        return None

    def put(self, key, value):  # type: ignore[override]
        pass

    def evict_expired(self):  # type: ignore[override]
        return 0

    def clear(self, symbol):  # type: ignore[override]
        pass

    def clear_all(self):
        pass


class MemoryCache(HistoryCache):
    """In-memory TTL cache with LRU eviction when ``max_entries`` is exceeded.

    Args:
        ttl_seconds: Age after which an entry is treated as missing.
        max_entries: Maximum number of entries kept.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        ttl_seconds: float = 1800,
        max_entries: int = 256,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._store: OrderedDict[str, tuple[float, Any]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: str) -> bool:
        entry = self._store.get(key)
        return entry is not None and not self._expired(entry[0])

    def _expired(self, stored_at: float) -> bool:
        return self._clock() - stored_at > self.ttl

    def _evict_lru(self) -> None:
        while len(self._store) > self.max_entries:
            self._store.popitem(last=False)

    def get(self, key: str) -> Any | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._expired(stored_at):
            del self._store[key]
            return None
        self._store.move_to_end(key)  # refresh LRU position
        return value

    def put(self, key: str, value: Any) -> None:
        self._store[key] = (self._clock(), value)
        self._store.move_to_end(key)
        self._evict_lru()

    def evict_expired(self) -> int:
        expired = [k for k, (ts, _) in self._store.items() if self._expired(ts)]
        for k in expired:
            del self._store[k]
        return len(expired)

    def clear(self, symbol: str) -> None:
        symbol = symbol.upper()
        for k in [k for k in self._store if _key_symbol(k) == symbol]:
            del self._store[k]

    def clear_all(self) -> None:
        self._store.clear()
