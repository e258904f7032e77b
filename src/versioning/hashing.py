# src/versioning/hashing.py — v1
"""Content hashing and query-string helpers for versioned asset URLs."""

from __future__ import annotations

import base64
import hashlib
from urllib.parse import quote

VERSION_KEY = "v"


def compute_version_token(data: bytes) -> str:
    """SHA-256 of data, URL-safe base64 encoded without padding."""
    digest = hashlib.sha256(data).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


def decode_version_token(token: str) -> bytes:
    """Inverse of compute_version_token's encoding step (returns the raw digest)."""
    padding = "=" * (-len(token) % 4)
    return base64.urlsafe_b64decode(token + padding)


def append_query_string(url: str, key: str, value: str) -> str:
    """Append ``key=value`` to url, keeping any #fragment at the end."""
    base, hash_mark, fragment = url.partition("#")
    separator = "&" if "?" in base else "?"
    return (
        f"{base}{separator}{quote(key, safe='')}={quote(value, safe='')}"
        f"{hash_mark}{fragment}"
    )
