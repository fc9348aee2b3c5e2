"""Pydantic models describing the site configuration schema."""

from __future__ import annotations

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LANGUAGE_CODE_PATTERN = re.compile(r"^[a-z]{2,3}$")


class ConfigurationError(ValueError):
    """Raised when configuration values violate schema expectations."""


class ImmutableModel(BaseModel):
    """Base class that freezes instances and rejects unknown fields."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


class BundleSourceConfig(ImmutableModel):
    """Where language bundles are fetched from."""

    source: Literal["package", "directory", "http"] = "package"
    package: str = "folio.translations"
    path: str | None = None
    base_url: str | None = None
    timeout_seconds: float = 10.0

    @model_validator(mode="after")
    def _validate_source(self) -> BundleSourceConfig:
        if self.timeout_seconds <= 0:
            raise ConfigurationError("Bundle fetch timeout must be positive")
        if self.source == "http" and not self.base_url:
            raise ConfigurationError("HTTP bundle sources require a base_url")
        if self.source == "directory" and not self.path:
            raise ConfigurationError("Directory bundle sources require a path")
        return self


class TemplateClasses(ImmutableModel):
    """CSS classes toggled by the renderer to reflect the active mode."""

    hidden: str = "hidden"
    toggle_active: str = "bg-gray-700"
    toggle_inactive: str = "bg-dark-card"


class TemplateConfig(ImmutableModel):
    """DOM contract between the renderer and the HTML shell."""

    key_attribute: str = "data-key"
    language_display: str = "current-lang-display"
    mode_toggle: str = "mode-toggle"
    full_mode_container: str = "full-mode-experience"
    language_menu: str = "language-menu"
    nav_sections: tuple[str, ...] = ("about", "experience", "technologies", "education")
    classes: TemplateClasses = Field(default_factory=TemplateClasses)

    @field_validator("nav_sections")
    @classmethod
    def _require_sections(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ConfigurationError("At least one navigation section is required")
        return value


class SiteConfiguration(ImmutableModel):
    """Top-level site configuration."""

    default_language: str = "en"
    default_mode: Literal["summary", "full"] = "summary"
    bundles: BundleSourceConfig = Field(default_factory=BundleSourceConfig)
    template: TemplateConfig = Field(default_factory=TemplateConfig)

    @field_validator("default_language")
    @classmethod
    def _validate_language(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not LANGUAGE_CODE_PATTERN.match(normalized):
            raise ConfigurationError(f"Invalid default language code: {value!r}")
        return normalized


__all__ = [
    "BundleSourceConfig",
    "ConfigurationError",
    "ImmutableModel",
    "LANGUAGE_CODE_PATTERN",
    "SiteConfiguration",
    "TemplateClasses",
    "TemplateConfig",
]
