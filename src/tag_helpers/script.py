# src/tag_helpers/script.py — v1
"""<script> tag helper: file versioning, globbed srcs and script fallback.

Modes mirror the <link> helper: FILE_VERSION < GLOBBED_SRC < FALLBACK.
The fallback block evaluates asp-fallback-test; if it is falsy the
fallback scripts are written into the document.
"""

from __future__ import annotations

import logging
from enum import IntEnum

from taghelpers.tag_helpers.attribute_matcher import ModeAttributes, determine_mode
from taghelpers.tag_helpers.base_tag_helper import BaseTagHelper
from taghelpers.tag_helpers.encoding import html_attribute_encode, js_string_encode
from taghelpers.tag_helpers.models import TagHelperContext, TagHelperOutput

logger = logging.getLogger(__name__)

SRC_INCLUDE = "asp-src-include"
SRC_EXCLUDE = "asp-src-exclude"
FALLBACK_SRC = "asp-fallback-src"
FALLBACK_SRC_INCLUDE = "asp-fallback-src-include"
FALLBACK_SRC_EXCLUDE = "asp-fallback-src-exclude"
FALLBACK_TEST = "asp-fallback-test"
FILE_VERSION = "asp-file-version"


class ScriptMode(IntEnum):
    FILE_VERSION = 0
    GLOBBED_SRC = 1
    FALLBACK = 2


MODE_DETAILS: tuple[ModeAttributes[ScriptMode], ...] = (
    ModeAttributes.create(ScriptMode.FILE_VERSION, [FILE_VERSION]),
    ModeAttributes.create(ScriptMode.GLOBBED_SRC, [SRC_INCLUDE]),
    ModeAttributes.create(ScriptMode.GLOBBED_SRC, [SRC_INCLUDE, SRC_EXCLUDE]),
    ModeAttributes.create(ScriptMode.FALLBACK, [FALLBACK_SRC, FALLBACK_TEST]),
    ModeAttributes.create(ScriptMode.FALLBACK, [FALLBACK_SRC_INCLUDE, FALLBACK_TEST]),
    ModeAttributes.create(
        ScriptMode.FALLBACK, [FALLBACK_SRC_INCLUDE, FALLBACK_SRC_EXCLUDE, FALLBACK_TEST]
    ),
)


class ScriptTagHelper(BaseTagHelper):
    """Rewrites <script> elements carrying asp-* attributes."""

    ATTRIBUTE_BINDINGS = {
        SRC_INCLUDE: "src_include",
        SRC_EXCLUDE: "src_exclude",
        FALLBACK_SRC: "fallback_src",
        FALLBACK_SRC_INCLUDE: "fallback_src_include",
        FALLBACK_SRC_EXCLUDE: "fallback_src_exclude",
        FALLBACK_TEST: "fallback_test_expression",
        FILE_VERSION: "file_version",
    }

    src_include: str | None
    src_exclude: str | None
    fallback_src: str | None
    fallback_src_include: str | None
    fallback_src_exclude: str | None
    fallback_test_expression: str | None
    file_version: str | None

    def process(self, context: TagHelperContext, output: TagHelperOutput) -> None:
        result = determine_mode(context.all_attributes, MODE_DETAILS)
        self._log_match(result, context, logger)

        mode = result.selected_mode()
        if mode is None:
            return

        attributes = dict(output.attributes)
        body = output.content
        parts: list[str] = []

        if mode == ScriptMode.FILE_VERSION or (
            mode == ScriptMode.FALLBACK and not self.src_include
        ):
            parts.append(self._build_script_tag(attributes, body))
        else:
            src = attributes.get("src")
            urls = self.globbing_url_builder.build_url_list(
                src, self.src_include, self.src_exclude
            )
            for url in urls:
                attributes["src"] = url
                # Inline body only belongs to the tag written in the view
                parts.append(self._build_script_tag(attributes, body if url == src else ""))

        if mode == ScriptMode.FALLBACK:
            parts.append(self._build_fallback_block())

        output.tag_name = None
        output.content = "".join(parts)

    def _build_fallback_block(self) -> str:
        fallback_srcs = self.globbing_url_builder.build_url_list(
            self.fallback_src, self.fallback_src_include, self.fallback_src_exclude
        )
        if not fallback_srcs:
            return ""

        if self._is_true(self.file_version):
            fallback_srcs = [self._try_version(src) for src in fallback_srcs]

        writes = "".join(
            f'<script src=\\"{html_attribute_encode(js_string_encode(src))}\\"><\\/script>'
            for src in fallback_srcs
        )
        return (
            "\n"
            f"<script>({self.fallback_test_expression}||document.write(\"{writes}\"));</script>"
        )

    def _build_script_tag(self, attributes: dict[str, str], body: str) -> str:
        parts = ["<script"]
        for key, value in attributes.items():
            if key == "src" and self._is_true(self.file_version):
                value = self.version_resolver.resolve(value)
            parts.append(f' {key}="{html_attribute_encode(value)}"')
        parts.append(f">{body}</script>")
        return "".join(parts)
