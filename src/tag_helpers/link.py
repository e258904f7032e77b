# src/tag_helpers/link.py — v1
"""<link> tag helper: file versioning, globbed hrefs and stylesheet fallback.

Modes, lowest to highest precedence:
  FILE_VERSION  asp-file-version alone
  GLOBBED_HREF  asp-href-include (+ asp-href-exclude)
  FALLBACK      a fallback href (static or globbed) plus the three
                asp-fallback-test-* attributes

The fallback block is a hidden <meta> probe carrying the test class and
an inline script. If the computed style of the probe does not show the
expected property value, the primary stylesheet did not load and the
script inserts <link> elements for the fallback hrefs.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from taghelpers.tag_helpers.attribute_matcher import ModeAttributes, determine_mode
from taghelpers.tag_helpers.base_tag_helper import BaseTagHelper
from taghelpers.tag_helpers.embedded import LINK_FALLBACK_JAVASCRIPT, get_embedded_javascript
from taghelpers.tag_helpers.encoding import (
    html_attribute_encode,
    js_string_array_encode,
    js_string_encode,
)
from taghelpers.tag_helpers.models import TagHelperContext, TagHelperOutput

logger = logging.getLogger(__name__)

HREF_INCLUDE = "asp-href-include"
HREF_EXCLUDE = "asp-href-exclude"
FALLBACK_HREF = "asp-fallback-href"
FALLBACK_HREF_INCLUDE = "asp-fallback-href-include"
FALLBACK_HREF_EXCLUDE = "asp-fallback-href-exclude"
FALLBACK_TEST_CLASS = "asp-fallback-test-class"
FALLBACK_TEST_PROPERTY = "asp-fallback-test-property"
FALLBACK_TEST_VALUE = "asp-fallback-test-value"
FILE_VERSION = "asp-file-version"

_FALLBACK_TEST = (FALLBACK_TEST_CLASS, FALLBACK_TEST_PROPERTY, FALLBACK_TEST_VALUE)


class LinkMode(IntEnum):
    FILE_VERSION = 0
    GLOBBED_HREF = 1
    FALLBACK = 2


MODE_DETAILS: tuple[ModeAttributes[LinkMode], ...] = (
    ModeAttributes.create(LinkMode.FILE_VERSION, [FILE_VERSION]),
    ModeAttributes.create(LinkMode.GLOBBED_HREF, [HREF_INCLUDE]),
    ModeAttributes.create(LinkMode.GLOBBED_HREF, [HREF_INCLUDE, HREF_EXCLUDE]),
    ModeAttributes.create(LinkMode.FALLBACK, [FALLBACK_HREF, *_FALLBACK_TEST]),
    ModeAttributes.create(LinkMode.FALLBACK, [FALLBACK_HREF_INCLUDE, *_FALLBACK_TEST]),
    ModeAttributes.create(
        LinkMode.FALLBACK,
        [FALLBACK_HREF_INCLUDE, FALLBACK_HREF_EXCLUDE, *_FALLBACK_TEST],
    ),
)


class LinkTagHelper(BaseTagHelper):
    """Rewrites <link> elements carrying asp-* attributes."""

    ATTRIBUTE_BINDINGS = {
        HREF_INCLUDE: "href_include",
        HREF_EXCLUDE: "href_exclude",
        FALLBACK_HREF: "fallback_href",
        FALLBACK_HREF_INCLUDE: "fallback_href_include",
        FALLBACK_HREF_EXCLUDE: "fallback_href_exclude",
        FALLBACK_TEST_CLASS: "fallback_test_class",
        FALLBACK_TEST_PROPERTY: "fallback_test_property",
        FALLBACK_TEST_VALUE: "fallback_test_value",
        FILE_VERSION: "file_version",
    }

    href_include: str | None
    href_exclude: str | None
    fallback_href: str | None
    fallback_href_include: str | None
    fallback_href_exclude: str | None
    fallback_test_class: str | None
    fallback_test_property: str | None
    fallback_test_value: str | None
    file_version: str | None

    def process(self, context: TagHelperContext, output: TagHelperOutput) -> None:
        result = determine_mode(context.all_attributes, MODE_DETAILS)
        self._log_match(result, context, logger)

        mode = result.selected_mode()
        if mode is None:
            # Nothing applies; element renders as written
            return

        attributes = dict(output.attributes)
        parts: list[str] = []

        if mode == LinkMode.FILE_VERSION or (
            mode == LinkMode.FALLBACK and not self.href_include
        ):
            parts.append(self._build_link_tag(attributes))
        else:
            parts.extend(self._build_globbed_link_tags(attributes))

        if mode == LinkMode.FALLBACK:
            parts.append(self._build_fallback_block())

        # The helper renders the element itself
        output.tag_name = None
        output.content = "".join(parts)

    def _build_globbed_link_tags(self, attributes: dict[str, str]) -> list[str]:
        urls = self.globbing_url_builder.build_url_list(
            attributes.get("href"), self.href_include, self.href_exclude
        )
        tags = []
        for url in urls:
            attributes["href"] = url
            tags.append(self._build_link_tag(attributes))
        return tags

    def _build_fallback_block(self) -> str:
        fallback_hrefs = self.globbing_url_builder.build_url_list(
            self.fallback_href, self.fallback_href_include, self.fallback_href_exclude
        )
        if not fallback_hrefs:
            return ""

        if self._is_true(self.file_version):
            fallback_hrefs = [self._try_version(href) for href in fallback_hrefs]

        script = get_embedded_javascript(LINK_FALLBACK_JAVASCRIPT).format(
            js_string_encode(self.fallback_test_property or ""),
            js_string_encode(self.fallback_test_value or ""),
            js_string_array_encode(fallback_hrefs),
        )
        return (
            "\n"
            '<meta name="x-stylesheet-fallback-test" '
            f'class="{html_attribute_encode(self.fallback_test_class or "")}" />'
            f"<script>{script}</script>"
        )

    def _build_link_tag(self, attributes: dict[str, str]) -> str:
        parts = ["<link "]
        for key, value in attributes.items():
            if key == "href" and self._is_true(self.file_version):
                value = self.version_resolver.resolve(value)
            parts.append(f'{key}="{html_attribute_encode(value)}" ')
        parts.append("/>")
        return "".join(parts)
