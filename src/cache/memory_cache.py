# src/cache/memory_cache.py — v1
"""Thread-safe in-memory cache with change-token expiration and LRU eviction.

Lookup rules:
  1. An entry whose expiration token has changed is evicted on access.
  2. Active tokens evict their entry as soon as they fire.
  3. When size_limit is exceeded the least recently used entry is evicted.

get_or_set() computes outside the lock. If two callers miss concurrently
both compute, the first to commit is retained and returned to both; the
loser's tokens are never wired to eviction.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Iterable
from typing import Any

from taghelpers.cache.base_cache_store import BaseMemoryCache, CacheFactory
from taghelpers.cache.models import CacheEntry
from taghelpers.fileproviders.change_tokens import ChangeToken

logger = logging.getLogger(__name__)

_MISSING = object()


class MemoryCache(BaseMemoryCache):
    """Process-wide keyed store shared by concurrent renders."""

    def __init__(self, size_limit: int = 1024) -> None:
        if size_limit < 1:
            raise ValueError("size_limit must be >= 1")
        self._size_limit = size_limit
        self._lock = threading.Lock()
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    @property
    def size_limit(self) -> int:
        return self._size_limit

    def get(self, key: str) -> Any | None:
        value = self._lookup(key)
        return None if value is _MISSING else value

    def set(
        self, key: str, value: Any, tokens: Iterable[ChangeToken] = ()
    ) -> Any:
        entry = CacheEntry(key=key, value=value, expiration_tokens=list(tokens))
        with self._lock:
            previous = self._entries.pop(key, None)
            self._entries[key] = entry
            evicted = self._enforce_size_limit()
        if previous is not None:
            evicted.append(previous)
        self._release(evicted)
        self._wire(entry)
        return value

    def remove(self, key: str) -> None:
        with self._lock:
            entry = self._entries.pop(key, None)
        if entry is not None:
            self._release([entry])

    def get_or_set(self, key: str, factory: CacheFactory) -> Any:
        value = self._lookup(key)
        if value is not _MISSING:
            return value

        logger.debug("Cache miss for %s, computing", key)
        value, tokens = factory()
        entry = CacheEntry(key=key, value=value, expiration_tokens=list(tokens))

        evicted: list[CacheEntry] = []
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None and not existing.is_expired():
                # Another caller committed first; keep its value
                existing.touch()
                self._entries.move_to_end(key)
                return existing.value
            if existing is not None:
                del self._entries[key]
                evicted.append(existing)
            self._entries[key] = entry
            evicted.extend(self._enforce_size_limit())

        self._release(evicted)
        self._wire(entry)
        return value

    def compact(self) -> int:
        """Evict every entry whose tokens have changed. Returns count evicted."""
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.is_expired()]
            evicted = [self._entries.pop(k) for k in expired]
        self._release(evicted)
        return len(evicted)

    def clear(self) -> None:
        with self._lock:
            evicted = list(self._entries.values())
            self._entries.clear()
        self._release(evicted)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # --- internals ---

    def _lookup(self, key: str) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return _MISSING
            if entry.is_expired():
                del self._entries[key]
                expired = entry
            else:
                entry.touch()
                self._entries.move_to_end(key)
                return entry.value
        logger.debug("Cache entry %s expired", key)
        self._release([expired])
        return _MISSING

    def _enforce_size_limit(self) -> list[CacheEntry]:
        """Pop LRU entries beyond size_limit. Caller holds the lock."""
        evicted: list[CacheEntry] = []
        while len(self._entries) > self._size_limit:
            _, entry = self._entries.popitem(last=False)
            evicted.append(entry)
        if evicted:
            logger.debug("Evicted %d entries under size limit %d", len(evicted), self._size_limit)
        return evicted

    def _wire(self, entry: CacheEntry) -> None:
        """Register eviction callbacks on active tokens. Called without the lock."""
        for token in entry.expiration_tokens:
            if token.active_change_callbacks:
                registration = token.register_change_callback(
                    lambda key=entry.key, e=entry: self._evict_if_current(key, e)
                )
                entry.registrations.append(registration)

    def _evict_if_current(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            if self._entries.get(key) is not entry:
                return
            del self._entries[key]
        logger.debug("Cache entry %s invalidated by change token", key)
        self._release([entry])

    @staticmethod
    def _release(entries: list[CacheEntry]) -> None:
        for entry in entries:
            for registration in entry.registrations:
                registration.dispose()
            entry.registrations.clear()
