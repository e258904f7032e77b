# src/tag_helpers/base_tag_helper.py — v1
"""Tag helper base class.

Markup attributes are bound to instance fields through an explicit
ATTRIBUTE_BINDINGS table (attribute name -> field name). Mode selection
is a separate concern, see attribute_matcher.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from taghelpers.logging.context import set_tag_context
from taghelpers.tag_helpers.attribute_matcher import ModeMatchResult
from taghelpers.tag_helpers.globbing import GlobbingUrlBuilder
from taghelpers.tag_helpers.models import (
    TagHelperContext,
    TagHelperOutput,
    TagHelperServices,
    ViewContext,
)
from taghelpers.versioning.file_version_provider import VersionedAssetResolver

logger = logging.getLogger(__name__)


class BaseTagHelper(ABC):
    """Common binding, logging and collaborator wiring for tag helpers."""

    ATTRIBUTE_BINDINGS: ClassVar[dict[str, str]] = {}

    def __init__(
        self,
        services: TagHelperServices,
        view_context: ViewContext | None = None,
        globbing_url_builder: GlobbingUrlBuilder | None = None,
    ) -> None:
        self._services = services
        self._view_context = view_context or ViewContext()
        self._globbing_url_builder = globbing_url_builder
        self._version_resolver: VersionedAssetResolver | None = None
        for field_name in self.ATTRIBUTE_BINDINGS.values():
            setattr(self, field_name, None)

    @property
    def name(self) -> str:
        return type(self).__name__

    def bind(self, context: TagHelperContext, output: TagHelperOutput) -> None:
        """Copy bound attributes onto fields and remove them from the output.

        Fields of attributes absent from context are reset to None, so an
        instance can be reused across elements.
        """
        for attribute, field_name in self.ATTRIBUTE_BINDINGS.items():
            setattr(self, field_name, context.all_attributes.get(attribute))
            output.attributes.pop(attribute, None)

    def run(self, context: TagHelperContext, output: TagHelperOutput) -> None:
        """Bind attributes, then process the element."""
        set_tag_context(self.name, context.unique_id)
        self.bind(context, output)
        self.process(context, output)

    @abstractmethod
    def process(self, context: TagHelperContext, output: TagHelperOutput) -> None:
        """Rewrite output for the element described by context."""

    def _log_match(self, result: ModeMatchResult, context: TagHelperContext, log: logging.Logger) -> None:
        result.log_details(log, self.name, context.unique_id, self._view_context.view_path)

    @property
    def globbing_url_builder(self) -> GlobbingUrlBuilder:
        if self._globbing_url_builder is None:
            self._globbing_url_builder = GlobbingUrlBuilder(
                self._services.file_provider,
                self._services.cache,
                self._view_context.request_path_base,
            )
        return self._globbing_url_builder

    @property
    def version_resolver(self) -> VersionedAssetResolver:
        if self._version_resolver is None:
            self._version_resolver = VersionedAssetResolver(
                self._services.file_provider,
                self._services.application_name,
                self._services.cache,
            )
        return self._version_resolver

    def _try_version(self, url: str) -> str:
        """Version url, appending nothing if the asset cannot be read.

        Used for fallback assets only; primary assets go through
        version_resolver and let read failures propagate.
        """
        try:
            return self.version_resolver.resolve(url)
        except OSError:
            logger.warning(
                "Could not read fallback asset %s; rendering it unversioned", url,
                exc_info=True,
            )
            return url

    @staticmethod
    def _is_true(value: str | None) -> bool:
        return value is not None and value.strip().lower() == "true"
