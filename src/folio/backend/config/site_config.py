"""Configuration loader wrapping the site schema models."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .schema import (
    BundleSourceConfig,
    ConfigurationError,
    SiteConfiguration,
    TemplateClasses,
    TemplateConfig,
)

CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
SITE_CONFIG_FILE = CONFIG_DIRECTORY / "site.yaml"

SITE_CONFIG_ENV = "FOLIO_SITE_CONFIG"
BUNDLE_BASE_URL_ENV = "FOLIO_BUNDLE_BASE_URL"

_LOGGER = logging.getLogger(__name__)


def _load_yaml(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration file must define a mapping at the top level")
    return data


def _resolve_config_path() -> Path:
    override = os.getenv(SITE_CONFIG_ENV)
    if override and override.strip():
        return Path(override.strip()).expanduser()
    return SITE_CONFIG_FILE


def _apply_environment(raw_config: dict[str, Any]) -> dict[str, Any]:
    base_url = os.getenv(BUNDLE_BASE_URL_ENV)
    if not base_url or not base_url.strip():
        return raw_config

    bundles = raw_config.get("bundles") or {}
    if not isinstance(bundles, dict):
        raise ConfigurationError("The 'bundles' section must be a mapping")

    _LOGGER.info("Using HTTP bundle source from %s", BUNDLE_BASE_URL_ENV)
    raw_config["bundles"] = {**bundles, "source": "http", "base_url": base_url.strip()}
    return raw_config


@lru_cache(maxsize=1)
def load_site_configuration() -> SiteConfiguration:
    """Load and cache the site configuration from disk."""

    config_file = _resolve_config_path()
    if not config_file.exists():
        raise FileNotFoundError(f"Site configuration not found: {config_file}")

    raw_config = _apply_environment(_load_yaml(config_file))

    try:
        return SiteConfiguration.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Site configuration validation failed: {error}") from error


__all__ = [
    "BundleSourceConfig",
    "CONFIG_DIRECTORY",
    "ConfigurationError",
    "SITE_CONFIG_FILE",
    "SiteConfiguration",
    "TemplateClasses",
    "TemplateConfig",
    "load_site_configuration",
]
