# tests/unit/cache/test_unit_memory_cache.py — v1
"""Tests for cache/memory_cache.py — expiration, LRU eviction, get_or_set."""

from __future__ import annotations

import threading

import pytest

from taghelpers.cache.base_cache_store import BaseMemoryCache
from taghelpers.cache.memory_cache import MemoryCache
from taghelpers.fileproviders.change_tokens import CancellationChangeToken, ChangeToken


class _FlagToken(ChangeToken):
    """Polling-style token flipped by the test."""

    def __init__(self) -> None:
        self.changed = False

    @property
    def has_changed(self) -> bool:
        return self.changed


class TestBaseMemoryCache:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseMemoryCache()  # type: ignore[abstract]


class TestGetSet:
    def test_set_and_get(self):
        cache = MemoryCache()
        cache.set("k", "v")
        assert cache.get("k") == "v"
        assert "k" in cache
        assert len(cache) == 1

    def test_get_missing(self):
        assert MemoryCache().get("nope") is None

    def test_remove(self):
        cache = MemoryCache()
        cache.set("k", "v")
        cache.remove("k")
        assert cache.get("k") is None
        cache.remove("k")

    def test_clear(self):
        cache = MemoryCache()
        cache.set("a", 1)
        cache.set("b", 2)
        cache.clear()
        assert len(cache) == 0

    def test_invalid_size_limit(self):
        with pytest.raises(ValueError):
            MemoryCache(size_limit=0)


class TestExpiration:
    def test_polling_token_evicts_on_access(self):
        cache = MemoryCache()
        token = _FlagToken()
        cache.set("k", "v", [token])
        token.changed = True
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_active_token_evicts_immediately(self):
        cache = MemoryCache()
        token = CancellationChangeToken()
        cache.set("k", "v", [token])
        token.cancel()
        assert len(cache) == 0

    def test_stale_callback_does_not_evict_replacement(self):
        cache = MemoryCache()
        old_token = CancellationChangeToken()
        cache.set("k", "old", [old_token])
        cache.set("k", "new")
        old_token.cancel()
        assert cache.get("k") == "new"

    def test_already_fired_token_evicts_on_set(self):
        cache = MemoryCache()
        token = CancellationChangeToken()
        token.cancel()
        cache.set("k", "v", [token])
        assert cache.get("k") is None

    def test_compact(self):
        cache = MemoryCache()
        t1, t2 = _FlagToken(), _FlagToken()
        cache.set("a", 1, [t1])
        cache.set("b", 2, [t2])
        t1.changed = True
        assert cache.compact() == 1
        assert len(cache) == 1


class TestSizeLimit:
    def test_lru_eviction(self):
        cache = MemoryCache(size_limit=2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)
        assert cache.get("b") is None
        assert cache.get("a") == 1
        assert cache.get("c") == 3

    def test_get_or_set_respects_limit(self):
        cache = MemoryCache(size_limit=1)
        cache.get_or_set("a", lambda: (1, []))
        cache.get_or_set("b", lambda: (2, []))
        assert len(cache) == 1
        assert cache.get("b") == 2


class TestGetOrSet:
    def test_computes_once(self):
        cache = MemoryCache()
        calls = []

        def factory():
            calls.append(1)
            return "value", []

        assert cache.get_or_set("k", factory) == "value"
        assert cache.get_or_set("k", factory) == "value"
        assert calls == [1]

    def test_recomputes_after_token_fires(self):
        cache = MemoryCache()
        tokens = []

        def factory():
            token = CancellationChangeToken()
            tokens.append(token)
            return len(tokens), [token]

        assert cache.get_or_set("k", factory) == 1
        tokens[0].cancel()
        assert cache.get_or_set("k", factory) == 2

    def test_first_commit_wins(self):
        cache = MemoryCache()
        losing_token = CancellationChangeToken()

        def factory():
            # A concurrent caller commits while this one is computing
            cache.set("k", "winner")
            return "loser", [losing_token]

        assert cache.get_or_set("k", factory) == "winner"
        assert cache.get("k") == "winner"
        # The discarded computation's token is not wired to eviction
        losing_token.cancel()
        assert cache.get("k") == "winner"

    def test_concurrent_misses_retain_one_value(self):
        cache = MemoryCache()
        barrier = threading.Barrier(4)
        results: list[object] = []
        lock = threading.Lock()

        def factory():
            return object(), []

        def worker():
            barrier.wait()
            value = cache.get_or_set("k", factory)
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        stored = cache.get("k")
        assert len(results) == 4
        assert all(r is stored for r in results)
