"""Shared fixtures: fake streaming server and isolated log directory."""

import json

import httpx
import pytest

from radio_status.config import settings
from radio_status.models import UpstreamConfig

BASE_URL = "http://radio.test:8342"


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Keep data and the application log under a temp dir."""
    monkeypatch.setattr(settings, "data_dir", tmp_path)
    monkeypatch.setattr(settings, "logs_dir", tmp_path / "logs")
    return tmp_path / "logs"


@pytest.fixture
def upstream_config():
    return UpstreamConfig(base_url=BASE_URL, timeout_seconds=0.5)


class FakeServer:
    """Routes requests by path+query to canned responses and records every hit.

    A route value is either an (status, body) tuple, a dict/list served as JSON,
    or an exception instance raised as a transport error.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = request.url.raw_path.decode()
        if key not in self.routes:
            raise httpx.ConnectError("connection refused", request=request)
        route = self.routes[key]
        if isinstance(route, Exception):
            raise route
        if isinstance(route, (dict, list)):
            return httpx.Response(200, text=json.dumps(route))
        status, body = route
        return httpx.Response(status, text=body)

    @property
    def paths(self):
        return [r.url.raw_path.decode() for r in self.requests]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_server():
    """The FakeServer class; call it with a routes mapping."""
    return FakeServer
