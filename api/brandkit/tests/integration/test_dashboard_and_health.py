"""Integration tests for the read endpoints, health and app wiring."""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from brandkit.core.config import Settings
from brandkit.main import create_app
from brandkit.models.exceptions import ConfigurationError, UpstreamReadError
from brandkit.services.projects import ProjectStore


@pytest.mark.integration
class TestMyKits:

    def test_unknown_user_gets_empty_list(self, client):
        response = client.get("/my-kits/nobody")

        assert response.status_code == 200
        assert response.json() == []

    def test_newest_first(self, client):
        for name in ["First", "Second", "Third"]:
            client.post("/generate-brand-kit", json={"brandName": name, "userId": "u1"})
        client.post("/generate-brand-kit", json={"brandName": "Elsewhere", "userId": "u2"})

        kits = client.get("/my-kits/u1").json()

        assert [k["brand_name"] for k in kits] == ["Third", "Second", "First"]
        assert set(kits[0]) == {"id", "brand_name", "created_at", "kit"}

    def test_read_failure(self, client):
        error = UpstreamReadError("Fetching brand kits failed")
        with patch.object(ProjectStore, "list_user_kits", side_effect=error):
            response = client.get("/my-kits/u1")

        assert response.status_code == 500
        assert response.json() == {"error": "Fetching brand kits failed", "code": "upstream_read_error"}


@pytest.mark.integration
class TestHealth:

    def test_liveness(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.text == "Backend running"

    def test_liveness_touches_nothing(self, client, fake_completions, row_counts):
        client.get("/")

        assert fake_completions.calls == []
        assert row_counts() == (0, 0)

    def test_readiness(self, client):
        response = client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {
            "ok": True,
            "status": "healthy",
            "services": {"database": True, "completions": True},
        }

    def test_readiness_degraded(self, client, database):
        with patch.object(database, "ping", return_value=False):
            response = client.get("/healthz")

        assert response.json()["status"] == "degraded"
        assert response.json()["services"]["database"] is False

    def test_readiness_reports_completions_check(self, client, fake_completions):
        with patch.object(fake_completions, "health_check", AsyncMock(return_value=False)):
            response = client.get("/healthz")

        body = response.json()
        assert body["ok"] is False
        assert body["services"] == {"database": True, "completions": False}


@pytest.mark.integration
class TestAppWiring:

    def test_request_id_is_echoed(self, client):
        response = client.get("/", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"
        assert "X-Processing-Time-Ms" in response.headers

    def test_request_id_is_generated(self, client):
        assert client.get("/").headers["X-Request-ID"]

    def test_unknown_route_body_shape(self, client):
        response = client.get("/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found", "code": "http_error"}

    def test_unexpected_exception_is_generic(self, client):
        with patch.object(ProjectStore, "list_user_kits", side_effect=RuntimeError("boom")):
            response = client.get("/my-kits/u1")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "code": "internal_error"}

    def test_startup_fails_without_credential(self, database):
        cfg = Settings(service_env="test", openai_api_key=None, database_url="sqlite://")
        app = create_app(cfg, database=database)

        with pytest.raises(ConfigurationError):
            with TestClient(app):
                pass

    def test_injected_handles_survive_shutdown(self, test_settings, database, fake_completions):
        with TestClient(create_app(test_settings, database=database, completions_client=fake_completions)):
            pass

        assert database.ping() is True
