# src/fileproviders/physical_provider.py — v1
"""Physical file provider backed by a directory on disk (FILE_PROVIDER=physical).

Paths resolving outside the root are reported as not found.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from taghelpers.fileproviders.base_file_provider import (
    BaseFileProvider,
    FileInfo,
    NotFoundFileInfo,
    is_glob_pattern,
    normalize_subpath,
)
from taghelpers.fileproviders.change_tokens import (
    ChangeToken,
    NullChangeToken,
    PollingFileChangeToken,
    PollingGlobChangeToken,
)

logger = logging.getLogger(__name__)


class PhysicalFileInfo(FileInfo):
    """A file on disk."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def exists(self) -> bool:
        return self._path.is_file()

    @property
    def name(self) -> str:
        return self._path.name

    @property
    def length(self) -> int:
        return self._path.stat().st_size

    @property
    def physical_path(self) -> str:
        return str(self._path)

    @property
    def last_modified(self) -> datetime:
        return datetime.fromtimestamp(self._path.stat().st_mtime, tz=timezone.utc)

    def read_bytes(self) -> bytes:
        return self._path.read_bytes()


class PhysicalFileProvider(BaseFileProvider):
    """File provider rooted at a local directory."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root).expanduser().resolve()
        if not self._root.is_dir():
            logger.warning("Web root %s does not exist; no assets will resolve", self._root)

    @property
    def root(self) -> Path:
        return self._root

    def get_file_info(self, subpath: str) -> FileInfo:
        path = self._resolve(subpath)
        if path is None or not path.is_file():
            return NotFoundFileInfo(subpath)
        return PhysicalFileInfo(path)

    def watch(self, filter: str) -> ChangeToken:  # noqa: A002
        relative = normalize_subpath(filter)
        if not relative or ".." in relative.split("/"):
            return NullChangeToken()
        if is_glob_pattern(relative):
            return PollingGlobChangeToken(self._root, relative)
        return PollingFileChangeToken(self._root / relative)

    def glob(self, pattern: str) -> list[str]:
        relative = normalize_subpath(pattern)
        if not relative or ".." in relative.split("/") or not self._root.is_dir():
            return []
        return sorted(
            p.relative_to(self._root).as_posix()
            for p in self._root.glob(relative)
            if p.is_file()
        )

    def _resolve(self, subpath: str) -> Path | None:
        """Map subpath to an absolute path inside the root, or None."""
        relative = normalize_subpath(subpath)
        if not relative:
            return None
        candidate = (self._root / relative).resolve()
        if not candidate.is_relative_to(self._root):
            logger.debug("Rejected path escaping web root: %s", subpath)
            return None
        return candidate
