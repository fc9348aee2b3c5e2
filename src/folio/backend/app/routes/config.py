"""Expose site metadata consumed by clients and monitoring."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from folio.backend.app.context import current_services
from folio.backend.version import get_project_version

blueprint = Blueprint("config", __name__, url_prefix="/api/v1/config")


def get_site_metadata() -> dict[str, Any]:
    """Describe the running site: version, languages and defaults."""

    services = current_services()
    return {
        "version": get_project_version(),
        "available_languages": services.available_languages(),
        "default_language": services.config.default_language,
        "default_mode": services.config.default_mode,
        "bundle_source": services.config.bundles.source,
    }


@blueprint.get("/meta")
def get_application_metadata() -> tuple[Any, int]:
    payload = get_site_metadata()
    return jsonify(payload), 200
