# src/fileproviders/provider_factory.py — v1
"""Factory for file provider instantiation."""

from __future__ import annotations

from taghelpers.config.settings import Settings
from taghelpers.fileproviders.base_file_provider import BaseFileProvider


def create_file_provider(settings: Settings | None = None) -> BaseFileProvider:
    """Instantiate the configured static asset provider.

    Args:
        settings: Application settings. Defaults to a physical provider
            rooted at ``wwwroot``.

    Returns:
        Configured BaseFileProvider implementation.
    """
    backend = "physical" if settings is None else settings.file_provider

    if backend == "physical":
        from taghelpers.fileproviders.physical_provider import PhysicalFileProvider
        web_root = "wwwroot" if settings is None else settings.web_root
        return PhysicalFileProvider(web_root)

    if backend == "memory":
        from taghelpers.fileproviders.memory_provider import InMemoryFileProvider
        return InMemoryFileProvider()

    raise ValueError(f"Unsupported file provider: {backend!r}")
