# src/compilation/options_provider.py — v1
"""Compiler options providers.

Resolution order for SettingsCompilerOptionsProvider:
  1. Per-project override registered on the provider
  2. Configuration defaults (Release -> optimize + RELEASE, otherwise DEBUG)
  3. Settings (COMPILER_LANGUAGE_VERSION, COMPILER_DEFINES, ...)
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from taghelpers.compilation.models import CompilerOptions
from taghelpers.config.settings import Settings

logger = logging.getLogger(__name__)


class CompilerOptionsError(Exception):
    """Raised when compiler options cannot be produced for a project."""


class BaseCompilerOptionsProvider(ABC):
    """Reads compiler options for a named project."""

    @abstractmethod
    def get_compiler_options(
        self, name: str, target_framework: str, configuration: str
    ) -> CompilerOptions:
        """Return the options for project name built for framework/configuration."""


class SettingsCompilerOptionsProvider(BaseCompilerOptionsProvider):
    """Options derived from Settings with optional per-project overrides."""

    def __init__(
        self,
        settings: Settings | None = None,
        overrides: dict[str, CompilerOptions] | None = None,
    ) -> None:
        self._settings = settings or Settings(_env_file=None)  # type: ignore[call-arg]
        self._overrides = dict(overrides or {})

    def register_override(self, name: str, options: CompilerOptions) -> None:
        self._overrides[name] = options

    def get_compiler_options(
        self, name: str, target_framework: str, configuration: str
    ) -> CompilerOptions:
        if not name:
            raise CompilerOptionsError("Project name is required to resolve compiler options")
        if not target_framework:
            raise CompilerOptionsError(f"No target framework given for project {name!r}")

        options = CompilerOptions(
            language_version=self._settings.compiler_language_version,
            defines=self._settings.compiler_defines_list,
            warnings_as_errors=self._settings.compiler_warnings_as_errors,
        )

        if configuration.lower() == "release":
            options = options.merged_with(CompilerOptions(optimize=True, defines=["RELEASE"]))
        else:
            options = options.merged_with(CompilerOptions(optimize=False, defines=["DEBUG"]))

        override = self._overrides.get(name)
        if override is not None:
            logger.debug("Applying compiler option override for %s", name)
            options = options.merged_with(override)

        return options
