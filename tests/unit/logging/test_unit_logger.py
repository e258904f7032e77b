# tests/unit/logging/test_unit_logger.py — v1
"""Tests for logging/logger.py — logger factory and formatters."""

from __future__ import annotations

import json
import logging

from taghelpers.config.settings import Settings
from taghelpers.logging.context import set_render_context, set_tag_context
from taghelpers.logging.logger import (
    JsonFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
    setup_logging_from_settings,
)


def _record(msg: str = "Hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="test", level=logging.INFO, pathname="", lineno=0,
        msg=msg, args=(), exc_info=None,
    )


class TestJsonFormatter:
    def test_format_basic(self):
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["level"] == "INFO"
        assert parsed["message"] == "Hello"
        assert "timestamp" in parsed
        assert "context" not in parsed

    def test_format_with_context(self):
        set_render_context("templates/index.html", "req-1")
        set_tag_context("LinkTagHelper", "abc")
        parsed = json.loads(JsonFormatter().format(_record()))
        assert parsed["context"]["view_path"] == "templates/index.html"
        assert parsed["context"]["tag_helper"] == "LinkTagHelper"
        assert parsed["context"]["unique_id"] == "abc"

    def test_format_with_data(self):
        record = _record()
        record.data = {"path": "/css/site.css"}
        parsed = json.loads(JsonFormatter().format(record))
        assert parsed["data"] == {"path": "/css/site.css"}


class TestTextFormatter:
    def test_format_basic(self):
        output = TextFormatter().format(_record("Hello text"))
        assert "Hello text" in output
        assert "INFO" in output

    def test_format_with_tag_context(self):
        set_tag_context("ScriptTagHelper", "u1")
        output = TextFormatter().format(_record())
        assert "[ScriptTagHelper]" in output
        assert "(u1)" in output


class TestGetLogger:
    def test_returns_namespaced_logger(self):
        assert get_logger("test_module").name == "taghelpers.test_module"


class TestSetupLogging:
    def test_setup_json(self):
        setup_logging(level="DEBUG", log_format="json")
        root = logging.getLogger("taghelpers")
        assert root.level == logging.DEBUG
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_setup_text(self):
        setup_logging(level="INFO", log_format="text")
        root = logging.getLogger("taghelpers")
        assert isinstance(root.handlers[0].formatter, TextFormatter)

    def test_no_duplicate_handlers(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("taghelpers").handlers) == 1

    def test_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "taghelpers.log"
        setup_logging(log_file=str(log_file))
        root = logging.getLogger("taghelpers")
        assert len(root.handlers) == 2
        assert log_file.parent.is_dir()
        for handler in root.handlers[1:]:
            handler.close()
        root.handlers.clear()

    def test_from_settings(self):
        setup_logging_from_settings(Settings(_env_file=None, log_level="WARNING", log_format="text"))
        root = logging.getLogger("taghelpers")
        assert root.level == logging.WARNING
