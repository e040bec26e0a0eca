import json

import httpx
import pytest

from api.resources import ApiClients
from core.config import Settings

API_PREFIX = "/api"


class FakeBackend:
    """Routes requests to canned responses and records every request it sees."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def route(self, method, path, status=200, json=None, content=None, headers=None, error=None):
        self.routes[(method, API_PREFIX + path)] = {
            "status": status, "json": json, "content": content,
            "headers": headers, "error": error,
        }

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        spec = self.routes.get((request.method, request.url.path))
        if spec is None:
            return httpx.Response(404, json={"message": "Not found"})
        if spec["error"] is not None:
            raise spec["error"]("Connection refused", request=request)
        if spec["content"] is not None:
            return httpx.Response(spec["status"], content=spec["content"], headers=spec["headers"])
        if spec["json"] is None:
            return httpx.Response(spec["status"], headers=spec["headers"])
        return httpx.Response(spec["status"], json=spec["json"], headers=spec["headers"])

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def settings():
    return Settings(API_URL="http://testserver/api/")


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def mock_transport(backend):
    return httpx.MockTransport(backend.handle)


@pytest.fixture
def clients(settings, mock_transport):
    return ApiClients.from_settings(settings, transport=mock_transport)
