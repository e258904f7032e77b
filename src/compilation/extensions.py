# src/compilation/extensions.py — v1
"""Turn compiler options into CompilationSettings for an app or a project."""

from __future__ import annotations

from taghelpers.compilation.models import (
    ApplicationEnvironment,
    CompilationSettings,
    ProjectContext,
)
from taghelpers.compilation.options_provider import BaseCompilerOptionsProvider
from taghelpers.config.settings import Settings


def get_compilation_settings(
    provider: BaseCompilerOptionsProvider,
    application_environment: ApplicationEnvironment,
) -> CompilationSettings:
    """Compilation settings for the currently executing application."""
    options = provider.get_compiler_options(
        application_environment.application_name,
        application_environment.runtime_framework,
        application_environment.configuration,
    )
    return options.to_compilation_settings(application_environment.runtime_framework)


def get_compilation_settings_for_project(
    provider: BaseCompilerOptionsProvider,
    project_context: ProjectContext,
) -> CompilationSettings:
    """Compilation settings for a project compiled ahead of time."""
    options = provider.get_compiler_options(
        project_context.name,
        project_context.target_framework,
        project_context.configuration,
    )
    return options.to_compilation_settings(project_context.target_framework)


def application_environment_from_settings(settings: Settings) -> ApplicationEnvironment:
    """Describe the running application using the compiler section of Settings."""
    return ApplicationEnvironment(
        application_name=settings.application_name or "app",
        runtime_framework=settings.compiler_target_framework,
        configuration=settings.compiler_configuration,
    )
