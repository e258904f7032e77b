# tests/unit/logging/test_unit_handlers.py — v1
"""Tests for logging/handlers.py — size parsing and rotating handler."""

from __future__ import annotations

import pytest

from taghelpers.logging.handlers import create_rotating_handler, parse_size


class TestParseSize:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("10MB", 10 * 1024**2), ("512kb", 512 * 1024), ("1 GB", 1024**3)],
    )
    def test_valid(self, value, expected):
        assert parse_size(value) == expected

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid size format"):
            parse_size("ten megs")


class TestCreateRotatingHandler:
    def test_creates_parent_dir(self, tmp_path):
        handler = create_rotating_handler(tmp_path / "a" / "b.log", rotation="1KB", retention=2)
        try:
            assert (tmp_path / "a").is_dir()
            assert handler.maxBytes == 1024
            assert handler.backupCount == 2
        finally:
            handler.close()
