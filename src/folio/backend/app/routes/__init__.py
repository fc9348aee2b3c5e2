"""Blueprint registrations for application routes."""

from flask import Flask

from .bundles import blueprint as bundles_blueprint
from .config import blueprint as config_blueprint
from .pages import blueprint as pages_blueprint


def register_routes(app: Flask) -> None:
    """Register all Flask blueprints with the provided application."""

    app.register_blueprint(pages_blueprint)
    app.register_blueprint(bundles_blueprint)
    app.register_blueprint(config_blueprint)
