# src/tag_helpers/models.py — v1
"""Tag helper domain models: TagHelperContext, TagHelperOutput, ViewContext,
TagHelperServices."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from taghelpers.cache.base_cache_store import BaseMemoryCache
from taghelpers.fileproviders.base_file_provider import BaseFileProvider
from taghelpers.tag_helpers.encoding import html_attribute_encode

if TYPE_CHECKING:
    from taghelpers.config.settings import Settings


class ViewContext(BaseModel):
    """The view being rendered and the request it serves."""

    view_path: str = ""
    request_path_base: str = ""
    request_id: str | None = None


class TagHelperContext(BaseModel):
    """Attributes as written on the element in the source view."""

    all_attributes: dict[str, str] = Field(default_factory=dict)
    unique_id: str = Field(default_factory=lambda: uuid.uuid4().hex)


class TagHelperOutput(BaseModel):
    """Mutable rendering result for one element.

    ``tag_name=None`` means the element itself is not emitted, only
    ``content``.
    """

    tag_name: str | None
    attributes: dict[str, str] = Field(default_factory=dict)
    content: str = ""
    self_closing: bool = False

    def suppress_output(self) -> None:
        self.tag_name = None
        self.content = ""

    def render(self) -> str:
        if self.tag_name is None:
            return self.content
        attrs = "".join(
            f' {name}="{html_attribute_encode(value)}"'
            for name, value in self.attributes.items()
        )
        if self.self_closing:
            return f"<{self.tag_name}{attrs} />"
        return f"<{self.tag_name}{attrs}>{self.content}</{self.tag_name}>"


class TagHelperServices(BaseModel):
    """Process-wide collaborators shared by all tag helper instances."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    file_provider: BaseFileProvider
    cache: BaseMemoryCache | None = None
    application_name: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> TagHelperServices:
        from taghelpers.cache.cache_factory import create_cache
        from taghelpers.fileproviders.provider_factory import create_file_provider

        return cls(
            file_provider=create_file_provider(settings),
            cache=create_cache(settings),
            application_name=settings.application_name,
        )
