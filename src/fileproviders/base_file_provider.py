# src/fileproviders/base_file_provider.py — v1
"""Abstract file provider interface.

A file provider resolves web-root-relative paths to FileInfo objects,
hands out change tokens for paths or glob patterns, and expands globs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from taghelpers.fileproviders.change_tokens import ChangeToken

GLOB_CHARS = frozenset("*?[")


def normalize_subpath(path: str) -> str:
    """Turn an app-relative path or pattern into a provider-relative posix path.

    Strips surrounding whitespace, a leading ``~`` and any leading slashes.
    """
    path = path.strip().replace("\\", "/")
    if path.startswith("~"):
        path = path[1:]
    return path.lstrip("/")


def is_glob_pattern(path: str) -> bool:
    return any(c in GLOB_CHARS for c in path)


class FileInfo(ABC):
    """A single file (or the absence of one) in a file provider."""

    @property
    @abstractmethod
    def exists(self) -> bool:
        """True if the file exists in the provider."""

    @property
    @abstractmethod
    def name(self) -> str:
        """File name without directory."""

    @property
    def length(self) -> int:
        return -1

    @property
    def physical_path(self) -> str | None:
        return None

    @property
    def last_modified(self) -> datetime | None:
        return None

    @abstractmethod
    def read_bytes(self) -> bytes:
        """Return full file content. Raises OSError on failure."""


class NotFoundFileInfo(FileInfo):
    """Represents a path that does not exist."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def exists(self) -> bool:
        return False

    @property
    def name(self) -> str:
        return self._name

    def read_bytes(self) -> bytes:
        raise FileNotFoundError(f"File not found: {self._name}")


class BaseFileProvider(ABC):
    """Unified interface for static asset sources."""

    @abstractmethod
    def get_file_info(self, subpath: str) -> FileInfo:
        """Locate a file; returns a FileInfo whose ``exists`` may be False."""

    @abstractmethod
    def watch(self, filter: str) -> ChangeToken:  # noqa: A002
        """Return a change token for a file path or glob pattern."""

    @abstractmethod
    def glob(self, pattern: str) -> list[str]:
        """Expand a glob pattern to sorted provider-relative posix paths."""
