# tests/unit/tag_helpers/test_unit_models.py — v1
"""Tests for tag_helpers/models.py."""

from __future__ import annotations

from taghelpers.cache.memory_cache import MemoryCache
from taghelpers.config.settings import Settings
from taghelpers.fileproviders.memory_provider import InMemoryFileProvider
from taghelpers.tag_helpers.models import (
    TagHelperContext,
    TagHelperOutput,
    TagHelperServices,
)


class TestTagHelperOutput:
    def test_render_self_closing(self):
        output = TagHelperOutput(tag_name="link", attributes={"href": "/a.css"}, self_closing=True)
        assert output.render() == '<link href="/a.css" />'

    def test_render_with_content(self):
        output = TagHelperOutput(tag_name="script", attributes={"src": "/a.js"}, content="x();")
        assert output.render() == '<script src="/a.js">x();</script>'

    def test_attribute_values_encoded(self):
        output = TagHelperOutput(tag_name="a", attributes={"title": "<&>"})
        assert output.render() == '<a title="&lt;&amp;&gt;"></a>'

    def test_content_only_without_tag(self):
        output = TagHelperOutput(tag_name=None, content="<b>hi</b>")
        assert output.render() == "<b>hi</b>"

    def test_suppress_output(self):
        output = TagHelperOutput(tag_name="link", content="x")
        output.suppress_output()
        assert output.render() == ""


class TestTagHelperContext:
    def test_unique_ids_differ(self):
        assert TagHelperContext().unique_id != TagHelperContext().unique_id


class TestTagHelperServices:
    def test_from_settings_memory(self):
        settings = Settings(_env_file=None, file_provider="memory", application_name="shop")
        services = TagHelperServices.from_settings(settings)
        assert isinstance(services.file_provider, InMemoryFileProvider)
        assert isinstance(services.cache, MemoryCache)
        assert services.application_name == "shop"

    def test_from_settings_cache_disabled(self):
        settings = Settings(
            _env_file=None, file_provider="memory", file_version_cache_enabled=False
        )
        assert TagHelperServices.from_settings(settings).cache is None
