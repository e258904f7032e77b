# src/tag_helpers/embedded.py — v1
"""Embedded JavaScript templates shipped as package data."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources

LINK_FALLBACK_JAVASCRIPT = "link_fallback.js"


@lru_cache(maxsize=8)
def get_embedded_javascript(name: str) -> str:
    """Load a template from tag_helpers/resources.

    Templates use str.format placeholders; literal braces are doubled.
    """
    return (
        resources.files("taghelpers.tag_helpers")
        .joinpath("resources")
        .joinpath(name)
        .read_text(encoding="utf-8")
    )
