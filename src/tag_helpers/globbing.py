# src/tag_helpers/globbing.py — v1
"""Glob-based asset list construction.

build_url_list() yields, in order and without duplicates:
  1. the static URL, when given, as written;
  2. files matching the comma-separated include patterns, minus files
     matching the exclude patterns, as ``<request_path_base>/<path>``.

Duplicates are detected on the web-root-relative path, so a static URL
also matched by an include pattern is kept once, in the static position.

Expansion results are cached per (include, exclude) pair and evicted when
any file matching an include pattern is added, removed or changed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from taghelpers.fileproviders.base_file_provider import normalize_subpath

if TYPE_CHECKING:
    from taghelpers.cache.base_cache_store import BaseMemoryCache
    from taghelpers.fileproviders.base_file_provider import BaseFileProvider
    from taghelpers.fileproviders.change_tokens import ChangeToken
    from taghelpers.versioning.file_version_provider import VersionedAssetResolver

logger = logging.getLogger(__name__)

_CACHE_KEY_PREFIX = "glob:"


def split_patterns(patterns: str | None) -> list[str]:
    """Split a comma-separated pattern list, dropping blanks and leading ~/ or /."""
    if not patterns:
        return []
    result = []
    for raw in patterns.split(","):
        pattern = normalize_subpath(raw)
        if pattern:
            result.append(pattern)
    return result


class GlobbingUrlBuilder:
    """Expand include/exclude globs against the web root into URLs."""

    def __init__(
        self,
        file_provider: BaseFileProvider,
        cache: BaseMemoryCache | None = None,
        request_path_base: str = "",
    ) -> None:
        self._file_provider = file_provider
        self._cache = cache
        self._request_path_base = request_path_base.rstrip("/")

    def build_url_list(
        self,
        static_url: str | None,
        include_pattern: str | None,
        exclude_pattern: str | None = None,
        version_resolver: VersionedAssetResolver | None = None,
    ) -> list[str]:
        """Return the ordered, de-duplicated asset URL list.

        When version_resolver is given each URL is passed through it.
        """
        urls: list[str] = []
        seen: set[str] = set()

        def add(url: str) -> None:
            key = self._dedupe_key(url)
            if key not in seen:
                seen.add(key)
                urls.append(url)

        if static_url:
            add(static_url)
        for url in self._expand(include_pattern, exclude_pattern):
            add(url)

        if version_resolver is not None:
            return [version_resolver.resolve(url) for url in urls]
        return urls

    def _dedupe_key(self, url: str) -> str:
        """Web-root-relative form of url, so "d.css" and "/d.css" compare equal."""
        base = self._request_path_base
        if base and url.startswith(base + "/"):
            url = url[len(base):]
        return normalize_subpath(url)

    def _expand(self, include_pattern: str | None, exclude_pattern: str | None) -> list[str]:
        includes = split_patterns(include_pattern)
        if not includes:
            return []
        excludes = split_patterns(exclude_pattern)

        if self._cache is None:
            urls, _ = self._compute(includes, excludes)
            return list(urls)

        key = f"{_CACHE_KEY_PREFIX}{','.join(includes)}|{','.join(excludes)}"
        return list(self._cache.get_or_set(key, lambda: self._compute(includes, excludes)))

    def _compute(
        self, includes: list[str], excludes: list[str]
    ) -> tuple[tuple[str, ...], list[ChangeToken]]:
        tokens = [self._file_provider.watch(p) for p in includes]

        excluded: set[str] = set()
        for pattern in excludes:
            excluded.update(self._file_provider.glob(pattern))

        matched: list[str] = []
        for pattern in includes:
            for path in self._file_provider.glob(pattern):
                if path not in excluded and path not in matched:
                    matched.append(path)

        logger.debug(
            "Glob %s (exclude %s) matched %d files", includes, excludes, len(matched)
        )
        urls = tuple(f"{self._request_path_base}/{path}" for path in matched)
        return urls, tokens
