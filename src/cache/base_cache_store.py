# src/cache/base_cache_store.py — v1
"""Abstract in-memory cache interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any, Callable

from taghelpers.fileproviders.change_tokens import ChangeToken

# factory() -> (value, expiration tokens)
CacheFactory = Callable[[], "tuple[Any, Iterable[ChangeToken]]"]


class BaseMemoryCache(ABC):
    """Unified interface for process-wide keyed caches."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the cached value, or None on miss or expiry."""

    @abstractmethod
    def set(
        self, key: str, value: Any, tokens: Iterable[ChangeToken] = ()
    ) -> Any:
        """Store value, evicted when any token fires. Returns value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove an entry if present."""

    @abstractmethod
    def get_or_set(self, key: str, factory: CacheFactory) -> Any:
        """Return the retained value for key, computing it on miss."""

    @abstractmethod
    def clear(self) -> None:
        """Drop all entries."""

    @abstractmethod
    def __len__(self) -> int: ...

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None
