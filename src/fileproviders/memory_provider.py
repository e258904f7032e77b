# src/fileproviders/memory_provider.py — v1
"""In-memory file provider (FILE_PROVIDER=memory).

Holds assets as bytes keyed by provider-relative path. Useful for embedded
assets and for tests. Watch tokens are active: they fire as soon as a
matching file is added, replaced or removed. The provider holds them
weakly, so a token nobody keeps (an evicted cache entry) is forgotten.
"""

from __future__ import annotations

import threading
import weakref
from datetime import datetime, timezone
from fnmatch import fnmatchcase

from taghelpers.fileproviders.base_file_provider import (
    BaseFileProvider,
    FileInfo,
    NotFoundFileInfo,
    normalize_subpath,
)
from taghelpers.fileproviders.change_tokens import CancellationChangeToken, ChangeToken


def _matches(path: str, pattern: str) -> bool:
    """Match like Path.glob: "*" stays inside one segment, "**" spans any number."""
    return _match_segments(path.split("/"), pattern.split("/"))


def _match_segments(parts: list[str], patterns: list[str]) -> bool:
    if not patterns:
        return not parts
    head, rest = patterns[0], patterns[1:]
    if head == "**":
        return any(_match_segments(parts[i:], rest) for i in range(len(parts) + 1))
    return bool(parts) and fnmatchcase(parts[0], head) and _match_segments(parts[1:], rest)


class InMemoryFileInfo(FileInfo):
    """Snapshot of an in-memory file."""

    def __init__(
        self,
        path: str,
        content: bytes,
        last_modified: datetime,
        read_error: OSError | None = None,
    ) -> None:
        self._path = path
        self._content = content
        self._last_modified = last_modified
        self._read_error = read_error

    @property
    def exists(self) -> bool:
        return True

    @property
    def name(self) -> str:
        return self._path.rsplit("/", 1)[-1]

    @property
    def length(self) -> int:
        return len(self._content)

    @property
    def last_modified(self) -> datetime:
        return self._last_modified

    def read_bytes(self) -> bytes:
        if self._read_error is not None:
            raise self._read_error
        return self._content


class InMemoryFileProvider(BaseFileProvider):
    """Thread-safe dict-backed file provider."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self._lock = threading.Lock()
        self._files: dict[str, tuple[bytes, datetime]] = {}
        self._read_errors: dict[str, OSError] = {}
        self._watchers: list[tuple[str, weakref.ref[CancellationChangeToken]]] = []
        for path, content in (files or {}).items():
            self.add_file(path, content)

    def add_file(self, path: str, content: bytes | str) -> None:
        """Add or replace a file, firing matching watch tokens."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        key = normalize_subpath(path)
        with self._lock:
            self._files[key] = (content, datetime.now(timezone.utc))
        self._notify(key)

    def remove_file(self, path: str) -> None:
        key = normalize_subpath(path)
        with self._lock:
            removed = self._files.pop(key, None)
            self._read_errors.pop(key, None)
        if removed is not None:
            self._notify(key)

    def set_read_error(self, path: str, error: OSError | None) -> None:
        """Make reads of ``path`` raise ``error`` (None clears it)."""
        key = normalize_subpath(path)
        with self._lock:
            if error is None:
                self._read_errors.pop(key, None)
            else:
                self._read_errors[key] = error

    def get_file_info(self, subpath: str) -> FileInfo:
        key = normalize_subpath(subpath)
        with self._lock:
            entry = self._files.get(key)
            read_error = self._read_errors.get(key)
        if entry is None:
            return NotFoundFileInfo(subpath)
        content, modified = entry
        return InMemoryFileInfo(key, content, modified, read_error)

    def watch(self, filter: str) -> ChangeToken:  # noqa: A002
        token = CancellationChangeToken()
        with self._lock:
            self._prune_watchers()
            self._watchers.append((normalize_subpath(filter), weakref.ref(token)))
        return token

    @property
    def watch_count(self) -> int:
        """Number of watch tokens still referenced and not yet fired."""
        with self._lock:
            self._prune_watchers()
            return len(self._watchers)

    def glob(self, pattern: str) -> list[str]:
        relative = normalize_subpath(pattern)
        if not relative:
            return []
        with self._lock:
            paths = list(self._files)
        return sorted(p for p in paths if _matches(p, relative))

    def _notify(self, key: str) -> None:
        fired: list[CancellationChangeToken] = []
        kept: list[tuple[str, weakref.ref[CancellationChangeToken]]] = []
        with self._lock:
            for f, ref in self._watchers:
                token = ref()
                if token is None:
                    continue
                if f == key or _matches(key, f):
                    fired.append(token)
                else:
                    kept.append((f, ref))
            self._watchers = kept
        for token in fired:
            token.cancel()

    def _prune_watchers(self) -> None:
        """Drop collected tokens. Caller holds the lock."""
        self._watchers = [(f, ref) for f, ref in self._watchers if ref() is not None]
