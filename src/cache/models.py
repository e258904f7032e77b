# src/cache/models.py — v1
"""Cache domain models: CacheEntry, AssetVersionEntry."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from taghelpers.fileproviders.change_tokens import CallbackRegistration, ChangeToken


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CacheEntry(BaseModel):
    """Single in-memory cache entry with its expiration tokens."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: str
    value: Any
    expiration_tokens: list[ChangeToken] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    last_accessed: datetime = Field(default_factory=_utcnow)
    registrations: list[CallbackRegistration] = Field(
        default_factory=list, exclude=True, repr=False
    )

    def is_expired(self) -> bool:
        """True if any expiration token has fired."""
        return any(t.has_changed for t in self.expiration_tokens)

    def touch(self) -> None:
        self.last_accessed = _utcnow()


class AssetVersionEntry(BaseModel):
    """One cached versioned-path computation, keyed by source path."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    source_path: str
    versioned_path: str
    invalidation_handle: ChangeToken
