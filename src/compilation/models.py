# src/compilation/models.py — v1
"""Compilation domain models: ApplicationEnvironment, ProjectContext,
CompilerOptions, CompilationSettings."""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, Field


class ApplicationEnvironment(BaseModel):
    """The running application whose views are compiled."""

    application_name: str
    runtime_framework: str
    configuration: str = "Debug"


class ProjectContext(BaseModel):
    """A project being compiled ahead of time."""

    name: str
    target_framework: str
    configuration: str = "Debug"


class CompilerOptions(BaseModel):
    """Raw options as declared for a project. None means unspecified."""

    language_version: str | None = None
    defines: list[str] = Field(default_factory=list)
    optimize: bool | None = None
    warnings_as_errors: bool | None = None
    allow_unsafe: bool | None = None

    def merged_with(self, other: CompilerOptions) -> CompilerOptions:
        """Return options where fields set on other win; defines are concatenated."""
        defines = list(self.defines)
        defines.extend(d for d in other.defines if d not in defines)
        return CompilerOptions(
            language_version=other.language_version or self.language_version,
            defines=defines,
            optimize=self.optimize if other.optimize is None else other.optimize,
            warnings_as_errors=(
                self.warnings_as_errors
                if other.warnings_as_errors is None
                else other.warnings_as_errors
            ),
            allow_unsafe=self.allow_unsafe if other.allow_unsafe is None else other.allow_unsafe,
        )

    def to_compilation_settings(self, target_framework: str) -> CompilationSettings:
        """Resolve options into concrete settings for target_framework.

        The framework name is added to the defines as an upper-case symbol,
        e.g. ``py3`` -> ``PY3``.
        """
        defines = list(self.defines)
        symbol = framework_symbol(target_framework)
        if symbol and symbol not in defines:
            defines.append(symbol)
        return CompilationSettings(
            language_version=self.language_version or "latest",
            defines=defines,
            optimization_level="release" if self.optimize else "debug",
            warnings_as_errors=bool(self.warnings_as_errors),
            allow_unsafe=bool(self.allow_unsafe),
        )


class CompilationSettings(BaseModel):
    """Settings handed to the view compiler."""

    language_version: str
    defines: list[str]
    optimization_level: Literal["debug", "release"]
    warnings_as_errors: bool
    allow_unsafe: bool


def framework_symbol(target_framework: str) -> str:
    return re.sub(r"[^0-9A-Za-z]+", "_", target_framework).strip("_").upper()
