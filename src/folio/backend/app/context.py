"""Per-application services shared by the blueprints."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from flask import Flask, current_app

from folio.backend.app.localization import (
    BundleLoader,
    BundleSource,
    Mode,
    SiteSession,
    build_bundle_source,
)
from folio.backend.app.services.content_refresher import ContentRefresher
from folio.backend.config.schema import SiteConfiguration

EXTENSION_KEY = "folio"


@dataclass(frozen=True)
class SiteServices:
    """Configuration, bundle source and renderer bound to one Flask app."""

    config: SiteConfiguration
    source: BundleSource
    refresher: ContentRefresher
    frontend_root: Path

    @classmethod
    def from_config(cls, config: SiteConfiguration, frontend_root: Path) -> SiteServices:
        return cls(
            config=config,
            source=build_bundle_source(config.bundles),
            refresher=ContentRefresher(config.template),
            frontend_root=frontend_root,
        )

    def available_languages(self) -> list[str]:
        lister = getattr(self.source, "available_languages", None)
        return list(lister()) if callable(lister) else []

    def new_session(self, language: str | None, mode: Mode | str | None = None) -> SiteSession:
        """Return a fresh session; sessions are never shared between requests."""

        loader = BundleLoader(self.source, default_language=self.config.default_language)
        return SiteSession(loader, language=language, mode=mode or self.config.default_mode)


def install_services(app: Flask, services: SiteServices) -> None:
    app.extensions[EXTENSION_KEY] = services


def current_services() -> SiteServices:
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["SiteServices", "current_services", "install_services"]
