"""
API Endpoint Tests

Tests the FastAPI front-end using TestClient.
"""

import pytest
from fastapi.testclient import TestClient

from api.app import create_app


@pytest.fixture
def client():
    """Create test client."""
    app = create_app()
    with TestClient(app) as client:
        yield client


class TestHealthCheck:
    """Test the static health-check route."""

    def test_index_ok(self, client):
        response = client.get("/")
        assert response.status_code == 200

    def test_index_plain_text(self, client):
        response = client.get("/")
        assert response.text == "The server is running!"
        assert response.headers["content-type"].startswith("text/plain")

    def test_unknown_route(self, client):
        response = client.get("/api/status")
        assert response.status_code == 404


class TestServerSettings:
    """Test server configuration."""

    def test_defaults(self, monkeypatch):
        from main import ServerSettings
        monkeypatch.delenv("ROTATOR_HOST", raising=False)
        monkeypatch.delenv("ROTATOR_PORT", raising=False)

        settings = ServerSettings.from_env()

        assert settings.host == "127.0.0.1"
        assert settings.port == 8000

    def test_env_override(self, monkeypatch):
        from main import ServerSettings
        monkeypatch.setenv("ROTATOR_HOST", "0.0.0.0")
        monkeypatch.setenv("ROTATOR_PORT", "9000")

        settings = ServerSettings.from_env()

        assert settings.host == "0.0.0.0"
        assert settings.port == 9000
