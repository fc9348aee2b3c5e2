"""WSGI entrypoint for deploying the Folio renderer behind Passenger."""

from folio.backend.app import create_app

# Passenger expects a module-level variable named ``application``.
application = create_app()
