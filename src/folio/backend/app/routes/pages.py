"""Server-rendered page entry point."""

from __future__ import annotations

import logging

from flask import Blueprint, Response, request, send_from_directory

from folio.backend.app.context import current_services
from folio.backend.app.localization import Mode, detect_language
from folio.backend.app.services.content_refresher import render_page

blueprint = Blueprint("pages", __name__)

_LOGGER = logging.getLogger(__name__)

INDEX_TEMPLATE = "index.html"


def _requested_mode(default: str) -> Mode:
    hint = request.args.get("mode")
    if not hint:
        return Mode.parse(default)
    try:
        return Mode.parse(hint)
    except ValueError:
        _LOGGER.warning("Ignoring invalid mode parameter: %s", hint)
        return Mode.parse(default)


@blueprint.get("/")
async def render_index() -> Response:
    """Render the HTML shell in the requested language and mode."""

    services = current_services()
    config = services.config

    language = request.args.get("lang") or detect_language(
        request.headers.get("Accept-Language"), config.default_language
    )
    session = services.new_session(language, _requested_mode(config.default_mode))

    template = (services.frontend_root / INDEX_TEMPLATE).read_text(encoding="utf-8")
    rendered = await render_page(template, session, services.refresher)
    return Response(rendered, mimetype="text/html")


@blueprint.get("/assets/<path:filename>")
def serve_assets(filename: str):
    """Expose static assets (CSS) used by the HTML shell."""

    return send_from_directory(current_services().frontend_root / "assets", filename)
