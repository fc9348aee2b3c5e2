"""Integration tests for metadata endpoints."""

from http import HTTPStatus

from flask.testing import FlaskClient

from folio.backend.version import get_project_version


def test_health_endpoint(client: FlaskClient) -> None:
    """Ensure the health endpoint returns a successful status payload."""
    response = client.get("/health")
    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["status"] == "ok"
    assert payload["version"] == get_project_version()
    assert payload["available_languages"] == ["en", "es"]
    assert payload["default_language"] == "en"
    assert response.mimetype == "application/json"


def test_config_meta_endpoint(client: FlaskClient) -> None:
    response = client.get("/api/v1/config/meta")

    assert response.status_code == HTTPStatus.OK
    payload = response.get_json()
    assert payload["default_mode"] == "summary"
    assert payload["bundle_source"] == "package"


def test_bundle_cors_headers_follow_allowed_origins(monkeypatch) -> None:
    from folio.backend.app import create_app

    monkeypatch.setenv("FOLIO_ALLOWED_ORIGINS", "https://folio.example")
    client = create_app().test_client()

    allowed = client.get("/i18n/en.json", headers={"Origin": "https://folio.example"})
    rejected = client.get("/i18n/en.json", headers={"Origin": "https://other.example"})

    assert allowed.headers.get("Access-Control-Allow-Origin") == "https://folio.example"
    assert "Access-Control-Allow-Origin" not in rejected.headers
