# src/tag_helpers/encoding.py — v1
"""HTML attribute and JavaScript string encoders for generated markup."""

from __future__ import annotations

import html
import json
from collections.abc import Iterable

# Characters that could close a <script> block or open an HTML entity.
_JS_UNSAFE = {
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
    "'": "\\u0027",
}


def html_attribute_encode(value: str) -> str:
    return html.escape(value, quote=True)


def js_string_encode(value: str) -> str:
    """Encode value for embedding between double quotes in an inline script.

    The result carries no surrounding quotes.
    """
    encoded = json.dumps(value)[1:-1]
    for char, replacement in _JS_UNSAFE.items():
        encoded = encoded.replace(char, replacement)
    return encoded


def js_string_array_encode(values: Iterable[str]) -> str:
    """Encode values as a JavaScript array literal of strings."""
    return "[" + ",".join(f'"{js_string_encode(v)}"' for v in values) + "]"
