# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides in-memory and on-disk asset roots, caches and tag helper services.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from taghelpers.cache.memory_cache import MemoryCache
from taghelpers.fileproviders.memory_provider import InMemoryFileProvider
from taghelpers.fileproviders.physical_provider import PhysicalFileProvider
from taghelpers.logging.context import clear_context
from taghelpers.tag_helpers.models import TagHelperServices, ViewContext


# === FIXTURES: Asset sources ===


@pytest.fixture
def memory_provider() -> InMemoryFileProvider:
    """In-memory web root with a few stylesheets and scripts."""
    return InMemoryFileProvider(
        {
            "css/site.css": b"body { color: black; }",
            "css/a.css": b".a { color: red; }",
            "css/b.css": b".b { color: blue; }",
            "css/c.css": b".c { color: green; }",
            "lib/bootstrap.css": b".btn { display: inline-block; }",
            "js/app.js": b"console.log('app');",
            "js/vendor.js": b"console.log('vendor');",
        }
    )


@pytest.fixture
def web_root(tmp_path: Path) -> Path:
    """On-disk web root mirroring memory_provider."""
    root = tmp_path / "wwwroot"
    for name, content in [
        ("css/site.css", b"body { color: black; }"),
        ("css/a.css", b".a { color: red; }"),
        ("css/b.css", b".b { color: blue; }"),
        ("js/app.js", b"console.log('app');"),
    ]:
        p = root / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(content)
    return root


@pytest.fixture
def physical_provider(web_root: Path) -> PhysicalFileProvider:
    return PhysicalFileProvider(web_root)


# === FIXTURES: Shared services ===


@pytest.fixture
def cache() -> MemoryCache:
    return MemoryCache(size_limit=64)


@pytest.fixture
def services(memory_provider: InMemoryFileProvider, cache: MemoryCache) -> TagHelperServices:
    return TagHelperServices(file_provider=memory_provider, cache=cache)


@pytest.fixture
def view_context() -> ViewContext:
    return ViewContext(view_path="templates/home/index.html")


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    root = logging.getLogger("taghelpers")
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
