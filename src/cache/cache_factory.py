# src/cache/cache_factory.py — v1
"""Factory for the shared file-version cache."""

from __future__ import annotations

from taghelpers.cache.base_cache_store import BaseMemoryCache
from taghelpers.config.settings import Settings


def create_cache(settings: Settings | None = None) -> BaseMemoryCache | None:
    """Instantiate the configured cache.

    Args:
        settings: Application settings. Defaults to an enabled MemoryCache.

    Returns:
        A MemoryCache, or None when FILE_VERSION_CACHE_ENABLED is false.
    """
    if settings is not None and not settings.file_version_cache_enabled:
        return None

    from taghelpers.cache.memory_cache import MemoryCache
    size_limit = 1024 if settings is None else settings.file_version_cache_size_limit
    return MemoryCache(size_limit=size_limit)
