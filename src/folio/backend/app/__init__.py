"""Application factory for the Folio site renderer."""

import os
from pathlib import Path
from warnings import warn

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import BadRequest

from folio.backend.config.schema import SiteConfiguration
from folio.backend.config.site_config import load_site_configuration

from .context import SiteServices, install_services
from .http import problem_response
from .routes import register_routes
from .routes.config import get_site_metadata
from .services.content_refresher import TemplateError

# The HTML shell lives in ``src/frontend`` next to the package sources.
FRONTEND_ROOT = Path(__file__).resolve().parents[4] / "src" / "frontend"

ALLOWED_ORIGINS_ENV = "FOLIO_ALLOWED_ORIGINS"


def _parse_allowed_origins(raw: str | None) -> set[str]:
    """Convert an environment variable into a normalised set of origins."""

    if not raw:
        return set()

    return {origin.strip() for origin in raw.split(",") if origin.strip()}


def create_app(
    config: SiteConfiguration | None = None,
    *,
    frontend_root: Path | None = None,
) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__)

    site_config = config or load_site_configuration()
    install_services(app, SiteServices.from_config(site_config, frontend_root or FRONTEND_ROOT))

    allowed_origins = _parse_allowed_origins(os.getenv(ALLOWED_ORIGINS_ENV))
    if not allowed_origins:
        warn(
            "No allowed origins configured; cross-origin requests will be rejected.",
            stacklevel=1,
        )

    CORS(
        app,
        resources={
            r"/api/*": {"origins": sorted(allowed_origins)},
            r"/i18n/*": {"origins": sorted(allowed_origins)},
        },
        supports_credentials=False,
        methods=["GET", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    register_routes(app)

    @app.route("/health", methods=["GET"])
    def health_check():
        """Simple health check endpoint for infrastructure monitoring."""

        payload = {"status": "ok", **get_site_metadata()}
        return jsonify(payload)

    @app.errorhandler(BadRequest)
    def handle_bad_request(error: BadRequest):
        """Return consistent JSON responses for malformed requests."""

        message = error.description or "Invalid request"
        return problem_response("bad_request", status=400, message=message).to_response()

    @app.errorhandler(ValueError)
    def handle_value_error(error: ValueError):
        return problem_response(
            "validation_error", status=400, message=str(error)
        ).to_response()

    @app.errorhandler(TemplateError)
    def handle_template_error(error: TemplateError):
        app.logger.error("Page template is incomplete: %s", error)
        return problem_response(
            "template_error", status=500, message=str(error)
        ).to_response()

    return app
