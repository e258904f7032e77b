# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for asset, cache, logging and compiler settings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Application ===
    application_name: str = ""
    request_path_base: str = ""

    # === Static assets ===
    file_provider: Literal["physical", "memory"] = "physical"
    web_root: Path = Path("wwwroot")

    # === File version cache ===
    file_version_cache_enabled: bool = True
    file_version_cache_size_limit: int = 1024

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # === View compilation ===
    compiler_language_version: str = "latest"
    compiler_configuration: Literal["Debug", "Release"] = "Debug"
    compiler_target_framework: str = "py3"
    compiler_defines: str = ""
    compiler_warnings_as_errors: bool = False

    # --- Validators ---

    @field_validator("file_version_cache_size_limit")
    @classmethod
    def validate_cache_size_limit(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("file_version_cache_size_limit must be >= 1")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.request_path_base and not self.request_path_base.startswith("/"):
            errors.append(
                "REQUEST_PATH_BASE must start with '/' when set "
                f"(got {self.request_path_base!r})"
            )

        if self.log_file is not None:
            from taghelpers.logging.handlers import parse_size

            try:
                parse_size(self.log_rotation)
            except ValueError as e:
                errors.append(f"LOG_ROTATION is invalid while LOG_FILE is set: {e}")

        if errors:
            raise ConfigurationError(
                "Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            )
        return self

    # --- Helpers ---

    @property
    def compiler_defines_list(self) -> list[str]:
        """Parse comma-separated compiler defines."""
        return [d.strip() for d in self.compiler_defines.split(",") if d.strip()]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
