# src/fileproviders/change_tokens.py — v1
"""Change tokens — one-shot notifications that a watched file or glob changed.

Two flavours:
  - Active tokens (CancellationChangeToken) run registered callbacks when
    they fire.
  - Polling tokens (PollingFileChangeToken, PollingGlobChangeToken) snapshot
    file metadata and re-check it whenever ``has_changed`` is read. They
    never run callbacks; consumers poll them on access.

Once a token reports a change it keeps reporting it.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)


class CallbackRegistration:
    """Handle returned by ``register_change_callback``; dispose to unregister."""

    def __init__(
        self,
        token: CancellationChangeToken | None = None,
        callback: Callable[[], None] | None = None,
    ) -> None:
        self._token = token
        self._callback = callback

    def dispose(self) -> None:
        if self._token is not None and self._callback is not None:
            self._token._unregister(self._callback)
        self._token = None
        self._callback = None


class ChangeToken(ABC):
    """Propagates notification that a change has occurred."""

    @property
    @abstractmethod
    def has_changed(self) -> bool:
        """True once the watched resource has changed."""

    @property
    def active_change_callbacks(self) -> bool:
        """True if the token runs callbacks proactively when it fires."""
        return False

    def register_change_callback(
        self, callback: Callable[[], None]
    ) -> CallbackRegistration:
        """Register a callback run when the token fires (no-op for polling tokens)."""
        return CallbackRegistration()


class NullChangeToken(ChangeToken):
    """Token that never changes (unwatchable paths)."""

    @property
    def has_changed(self) -> bool:
        return False


class CancellationChangeToken(ChangeToken):
    """Token fired explicitly through ``cancel()``; callbacks run exactly once."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._changed = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def has_changed(self) -> bool:
        return self._changed

    @property
    def active_change_callbacks(self) -> bool:
        return True

    def register_change_callback(
        self, callback: Callable[[], None]
    ) -> CallbackRegistration:
        with self._lock:
            if not self._changed:
                self._callbacks.append(callback)
                return CallbackRegistration(self, callback)
        # Already fired: run immediately
        callback()
        return CallbackRegistration()

    def cancel(self) -> None:
        """Fire the token. Subsequent calls are no-ops."""
        with self._lock:
            if self._changed:
                return
            self._changed = True
            callbacks, self._callbacks = self._callbacks, []

        for callback in callbacks:
            try:
                callback()
            except Exception:
                logger.exception("Change callback %r failed", callback)

    def _unregister(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)


def _stat_snapshot(path: Path) -> tuple[int, int] | None:
    try:
        st = path.stat()
    except OSError:
        return None
    return (st.st_mtime_ns, st.st_size)


class PollingFileChangeToken(ChangeToken):
    """Detects modification, creation or deletion of a single file by polling."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._snapshot = _stat_snapshot(path)
        self._changed = False

    @property
    def has_changed(self) -> bool:
        if not self._changed and _stat_snapshot(self._path) != self._snapshot:
            self._changed = True
        return self._changed


class PollingGlobChangeToken(ChangeToken):
    """Detects added, removed or modified files matching a glob pattern."""

    def __init__(self, root: Path, pattern: str) -> None:
        self._root = root
        self._pattern = pattern
        self._snapshot = self._take_snapshot()
        self._changed = False

    @property
    def has_changed(self) -> bool:
        if not self._changed and self._take_snapshot() != self._snapshot:
            self._changed = True
        return self._changed

    def _take_snapshot(self) -> frozenset[tuple[str, tuple[int, int] | None]]:
        if not self._root.is_dir():
            return frozenset()
        return frozenset(
            (p.relative_to(self._root).as_posix(), _stat_snapshot(p))
            for p in self._root.glob(self._pattern)
            if p.is_file()
        )
