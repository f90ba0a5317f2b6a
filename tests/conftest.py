"""Pytest configuration and shared fixtures for xrel-client tests."""

import json
from collections.abc import Callable

import httpx
import pytest

from xrel_client.auth.oauth2 import OAuth2Session, Token
from xrel_client.client import XrelClient
from xrel_client.transport.client import TransportClient


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear XREL_* environment variables before each test."""
    import os

    for key in list(os.environ.keys()):
        if key.startswith("XREL_"):
            monkeypatch.delenv(key, raising=False)

    yield


class RecordingHandler:
    """MockTransport handler that records requests and replays canned responses.

    `response` is either a template response, copied for every request, or a
    callable building one from the request.
    """

    def __init__(self, response: httpx.Response | Callable[[httpx.Request], httpx.Response]):
        self._response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self._response, httpx.Response):
            template = self._response
            return httpx.Response(template.status_code, headers=template.headers, content=template.content)
        return self._response(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def form(self, index: int = -1) -> dict[str, list[str]]:
        from urllib.parse import parse_qs

        return parse_qs(self.requests[index].content.decode())


def build_json_response(data, status_code: int = 200, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(data).encode(),
        headers={"content-type": "application/json", **(headers or {})},
    )


@pytest.fixture
def make_http():
    """Build a TransportClient whose requests go to a RecordingHandler."""

    def _make(response) -> tuple[TransportClient, RecordingHandler]:
        handler = RecordingHandler(response)
        http = TransportClient(wrapped_transport=httpx.MockTransport(handler))
        return http, handler

    return _make


@pytest.fixture
def make_client(make_http):
    """Build an XrelClient on a mocked transport.

    Keyword arguments are passed to the OAuth2Session.
    """

    def _make(response, **session_kwargs) -> tuple[XrelClient, RecordingHandler]:
        http, handler = make_http(response)
        session = OAuth2Session(http=http, **session_kwargs)
        return XrelClient(http=http, session=session), handler

    return _make


@pytest.fixture
def token():
    return Token(access_token="access-123", refresh_token="refresh-456", expires_in=3600)


@pytest.fixture
def json_response():
    """Factory for JSON responses: json_response(data, status_code=200, headers=None)."""
    return build_json_response
