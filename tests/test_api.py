"""Tests for the HTTP API."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from radio_status.applog import append_app_log
from radio_status.errors import ResolutionError, TransportError
from radio_status.main import app
from radio_status.models import NormalizedStatus
from radio_status.routers.status import get_resolver


@pytest.fixture
def resolver():
    r = Mock()
    r.resolve = AsyncMock()
    return r


@pytest.fixture
def client(resolver):
    app.dependency_overrides[get_resolver] = lambda: resolver
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestStatusEndpoint:
    def test_success_envelope(self, client, resolver):
        resolver.resolve.return_value = NormalizedStatus(
            announcer="DJ Mike",
            program="Hits",
            unique_listeners=5,
            status="online",
            timestamp=datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc),
        )

        response = client.get("/api/status")

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["content-type"] == "application/json; charset=utf-8"
        assert response.json() == {
            "success": True,
            "timestamp": "2026-10-16T12:00:00Z",
            "data": {"locutor": "DJ Mike", "programa": "Hits", "unicos": 5, "status": "online"},
        }

    def test_placeholders_in_envelope(self, client, resolver):
        resolver.resolve.return_value = NormalizedStatus(
            announcer=None, program="", timestamp=datetime.now(timezone.utc)
        )

        data = client.get("/api/status").json()["data"]

        assert data == {"locutor": "—", "programa": "—", "unicos": 0, "status": "offline"}

    def test_exhaustion_maps_to_error_envelope(self, client, resolver):
        resolver.resolve.side_effect = ResolutionError(
            TransportError("http://radio.test/status-json.xsl", "HTTP 502")
        )

        response = client.get("/api/status")

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["content-type"] == "application/json; charset=utf-8"
        body = response.json()
        assert body["success"] is False
        assert "HTTP 502" in body["error"]
        assert "No streaming endpoint responded" in body["error"]

    def test_unexpected_error_maps_to_error_envelope(self, client, resolver):
        resolver.resolve.side_effect = RuntimeError("boom")

        response = client.get("/api/status")

        assert response.status_code == 500
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["content-type"] == "application/json; charset=utf-8"
        assert response.json() == {"success": False, "error": "boom"}

    def test_preflight_never_resolves(self, client, resolver):
        response = client.options("/api/status")

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"
        assert response.headers["access-control-allow-methods"] == "GET, OPTIONS"
        assert response.headers["access-control-allow-headers"] == "Content-Type"
        resolver.resolve.assert_not_called()


class TestLogsEndpoint:
    def test_tail_and_clear(self, client):
        append_app_log("first")
        append_app_log("second")

        response = client.get("/api/logs/app", params={"tail": 1})
        assert response.status_code == 200
        assert response.text.endswith("second")
        assert "first" not in response.text

        assert client.delete("/api/logs/app").json() == {"ok": True}
        assert client.get("/api/logs/app").text == ""

    def test_missing_log_is_empty(self, client):
        assert client.get("/api/logs/app").text == ""
