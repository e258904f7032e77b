# src/logging/context.py — v1
"""Contextual logging support — attach view path and tag helper to log records.

Render context is set once per view render, tag context once per processed
element.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_view_path: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "view_path", default=None
)
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_tag_helper: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "tag_helper", default=None
)
_unique_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "unique_id", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    view_path: str | None = None
    request_id: str | None = None
    tag_helper: str | None = None
    unique_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        view_path=_view_path.get(),
        request_id=_request_id.get(),
        tag_helper=_tag_helper.get(),
        unique_id=_unique_id.get(),
    )


def set_render_context(view_path: str, request_id: str | None = None) -> None:
    """Set view-level context (called once per view render)."""
    _view_path.set(view_path)
    _request_id.set(request_id)


def set_tag_context(tag_helper: str, unique_id: str | None = None) -> None:
    """Set element-level context (called per processed element)."""
    _tag_helper.set(tag_helper)
    _unique_id.set(unique_id)


def clear_context() -> None:
    """Reset all context variables."""
    _view_path.set(None)
    _request_id.set(None)
    _tag_helper.set(None)
    _unique_id.set(None)
