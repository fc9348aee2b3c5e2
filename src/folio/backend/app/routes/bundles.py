"""Expose raw language bundles at the path the browser shell fetches."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify

from folio.backend.app.context import current_services
from folio.backend.app.http import bundle_problem
from folio.backend.app.localization import BundleFetchError

blueprint = Blueprint("bundles", __name__, url_prefix="/i18n")


@blueprint.get("/<language>.json")
async def get_bundle(language: str) -> tuple[Any, int]:
    """Return the bundle for ``language`` or a problem payload."""

    try:
        bundle = await current_services().source.fetch(language)
    except BundleFetchError as error:
        return bundle_problem(error).to_response()

    return jsonify(bundle.as_dict()), 200
