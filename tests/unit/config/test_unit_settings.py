# tests/unit/config/test_unit_settings.py — v1
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

from pathlib import Path

import pytest

from taghelpers.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_file_provider(self):
        s = Settings(_env_file=None)
        assert s.file_provider == "physical"
        assert s.web_root == Path("wwwroot")

    def test_default_cache(self):
        s = Settings(_env_file=None)
        assert s.file_version_cache_enabled is True
        assert s.file_version_cache_size_limit == 1024

    def test_default_application(self):
        s = Settings(_env_file=None)
        assert s.application_name == ""
        assert s.request_path_base == ""

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_level == "INFO"
        assert s.log_format == "json"
        assert s.log_file is None


class TestSettingsValidation:
    def test_path_base_must_be_rooted(self):
        with pytest.raises(ConfigurationError, match="REQUEST_PATH_BASE"):
            Settings(_env_file=None, request_path_base="app")

    def test_rooted_path_base_accepted(self):
        s = Settings(_env_file=None, request_path_base="/app")
        assert s.request_path_base == "/app"

    def test_invalid_rotation_with_log_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="LOG_ROTATION"):
            Settings(_env_file=None, log_file=tmp_path / "x.log", log_rotation="lots")

    def test_invalid_rotation_without_log_file_ignored(self):
        s = Settings(_env_file=None, log_rotation="lots")
        assert s.log_rotation == "lots"

    def test_cache_size_limit_positive(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, file_version_cache_size_limit=0)

    def test_unknown_provider_rejected(self):
        with pytest.raises(ValueError):
            Settings(_env_file=None, file_provider="s3")


class TestSettingsHelpers:
    def test_compiler_defines_list(self):
        s = Settings(_env_file=None, compiler_defines="TRACE, FEATURE_X,,")
        assert s.compiler_defines_list == ["TRACE", "FEATURE_X"]

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("APPLICATION_NAME", "shop")
        s = Settings(_env_file=None)
        assert s.application_name == "shop"

    def test_load_settings_overrides(self):
        s = load_settings(_env_file=None, application_name="blog")
        assert s.application_name == "blog"
