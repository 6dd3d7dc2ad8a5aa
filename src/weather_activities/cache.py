"""In-memory response cache.

A thin, lock-guarded wrapper over ``cachetools``. Entries live for a fixed
time-to-live after being written; expired entries are treated as absent and
purged lazily. The cache is bounded; once ``max_entries`` is reached the
least recently used entry is evicted on write. With no TTL the cache is a
plain bounded LRU table.

``cachetools`` caches are not thread-safe, so every operation takes a lock
and a single instance can be shared by every request handler in the process.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Generic, TypeVar

import cachetools

logger = logging.getLogger(__name__)

V = TypeVar("V")

_MISSING = object()


class TTLCache(Generic[V]):
    """Thread-safe LRU cache with per-entry expiry.

    Args:
        ttl_seconds: Lifetime of an entry, or None for entries that never expire
        max_entries: Capacity before least recently used entries are evicted
        clock: Monotonic time source (injectable for tests)
    """

    def __init__(
        self,
        ttl_seconds: float | None = 300.0,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._entries: cachetools.Cache
        if ttl_seconds is None:
            self._entries = cachetools.LRUCache(maxsize=max_entries)
        else:
            self._entries = cachetools.TTLCache(
                maxsize=max_entries, ttl=ttl_seconds, timer=clock
            )
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> V | Any:
        """Return the live value for ``key`` or ``default``."""
        with self._lock:
            return self._entries.get(key, default)

    def set(self, key: str, value: V) -> None:
        """Store ``value`` under ``key``, overwriting any previous entry."""
        with self._lock:
            if key not in self._entries and self._entries.currsize >= self.max_entries:
                logger.debug(f"Cache full, evicting least recently used entry for {key}")
            self._entries[key] = value

    def __contains__(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        with self._lock:
            return int(self._entries.currsize)

    def clear(self) -> None:
        """Drop every entry."""
        with self._lock:
            self._entries.clear()
