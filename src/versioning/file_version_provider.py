# src/versioning/file_version_provider.py — v1
"""Versioned asset URLs — append a content hash as a cache-busting query string.

Resolution flow for ``resolve(path)``:
  1. Look the file up in the file provider.
  2. If missing and the path embeds the application name, drop everything
     up to and including the first occurrence and look up once more.
  3. Still missing: return the path unchanged.
  4. With a cache: return the cached versioned path, computing it on miss
     and evicting it when the located file changes.
  5. Without a cache: hash on every call.

Read failures while hashing propagate as AssetReadError.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from taghelpers.cache.models import AssetVersionEntry
from taghelpers.versioning.hashing import (
    VERSION_KEY,
    append_query_string,
    compute_version_token,
)

if TYPE_CHECKING:
    from taghelpers.cache.base_cache_store import BaseMemoryCache
    from taghelpers.fileproviders.base_file_provider import BaseFileProvider, FileInfo
    from taghelpers.fileproviders.change_tokens import ChangeToken

logger = logging.getLogger(__name__)

_CACHE_KEY_PREFIX = "file-version:"


class AssetReadError(OSError):
    """Raised when an existing asset cannot be read for hashing."""

    def __init__(self, path: str, cause: BaseException | None = None) -> None:
        super().__init__(f"Failed to read asset {path!r} for versioning: {cause}")
        self.path = path


class VersionedAssetResolver:
    """Append ``v=<sha256>`` to asset paths served by a file provider."""

    def __init__(
        self,
        file_provider: BaseFileProvider,
        application_name: str = "",
        cache: BaseMemoryCache | None = None,
    ) -> None:
        self._file_provider = file_provider
        self._application_name = application_name
        self._cache = cache

    @property
    def application_name(self) -> str:
        return self._application_name

    def resolve(self, path: str) -> str:
        """Return path with a version query string, or unchanged if unresolvable."""
        located = self._locate(path)
        if located is None:
            logger.debug("Asset %r not found, leaving unversioned", path)
            return path
        lookup_path, file_info = located

        if self._cache is None:
            return self._versioned_path(path, file_info)

        entry: AssetVersionEntry = self._cache.get_or_set(
            _CACHE_KEY_PREFIX + path,
            lambda: self._compute_entry(path, lookup_path, file_info),
        )
        return entry.versioned_path

    def _locate(self, path: str) -> tuple[str, FileInfo] | None:
        file_info = self._file_provider.get_file_info(path)
        if file_info.exists:
            return path, file_info

        if self._application_name and self._application_name in path:
            _, _, stripped = path.partition(self._application_name)
            file_info = self._file_provider.get_file_info(stripped)
            if file_info.exists:
                return stripped, file_info

        return None

    def _compute_entry(
        self, path: str, lookup_path: str, file_info: FileInfo
    ) -> tuple[AssetVersionEntry, list[ChangeToken]]:
        # Watch before hashing so a change during the read still evicts
        token = self._file_provider.watch(lookup_path)
        entry = AssetVersionEntry(
            source_path=path,
            versioned_path=self._versioned_path(path, file_info),
            invalidation_handle=token,
        )
        return entry, [token]

    def _versioned_path(self, path: str, file_info: FileInfo) -> str:
        try:
            content = file_info.read_bytes()
        except OSError as exc:
            raise AssetReadError(path, exc) from exc
        return append_query_string(path, VERSION_KEY, compute_version_token(content))
