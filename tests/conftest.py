import json
from urllib.parse import parse_qs

import httpx
import pytest

from request_review.config import Settings
from request_review.utils.http_client import BackendClient

BASE_URL = "http://backend.test/docs-web/api"


class FakeBackend:
    """In-memory stand-in for the document-management REST API."""

    def __init__(self, requests=None):
        self.requests = [dict(r) for r in (requests or [])]
        self.calls = []
        self.list_status = 200
        self.process_status = 200

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        path = request.url.path

        if path.endswith("/user/register_requests"):
            if self.list_status != 200:
                return httpx.Response(self.list_status, text="FileReadError")
            return httpx.Response(200, json={"requests": self.requests})

        if path.endswith("/user/process_request"):
            if self.process_status != 200:
                return httpx.Response(self.process_status, text="ProcessError")
            body = json.loads(request.content)
            self.requests = [r for r in self.requests if r["username"] != body["username"]]
            return httpx.Response(200, json={"status": "ok"})

        if path.endswith("/user/register_request"):
            form = parse_qs(request.content.decode())
            self.requests.append({"username": form["username"][0], "email": form["email"][0]})
            return httpx.Response(200, json={"status": "ok"})

        return httpx.Response(404, text="Not found")

    def bodies(self, suffix):
        return [json.loads(c.content) for c in self.calls if c.url.path.endswith(suffix)]

    def client(self, **kwargs) -> BackendClient:
        return BackendClient(BASE_URL, transport=httpx.MockTransport(self.handler), **kwargs)


@pytest.fixture
def backend():
    return FakeBackend([
        {"username": "a", "email": "a@example.com"},
        {"username": "b", "email": "b@example.com"},
    ])


@pytest.fixture
def settings():
    return Settings(api_base_url=BASE_URL, cors_allow_origins="*", load_on_startup=True)
