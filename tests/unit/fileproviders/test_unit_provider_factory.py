# tests/unit/fileproviders/test_unit_provider_factory.py — v1
"""Tests for fileproviders/provider_factory.py."""

from __future__ import annotations

from taghelpers.config.settings import Settings
from taghelpers.fileproviders.memory_provider import InMemoryFileProvider
from taghelpers.fileproviders.physical_provider import PhysicalFileProvider
from taghelpers.fileproviders.provider_factory import create_file_provider


class TestCreateFileProvider:
    def test_default_physical(self):
        assert isinstance(create_file_provider(), PhysicalFileProvider)

    def test_physical_root_from_settings(self, tmp_path):
        s = Settings(_env_file=None, web_root=tmp_path)
        provider = create_file_provider(s)
        assert isinstance(provider, PhysicalFileProvider)
        assert provider.root == tmp_path.resolve()

    def test_memory_backend(self):
        s = Settings(_env_file=None, file_provider="memory")
        assert isinstance(create_file_provider(s), InMemoryFileProvider)
