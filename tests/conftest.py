"""Shared fixtures: a configured proxy and a stubbed Azure endpoint."""
import json

import httpx
import pytest

from transproxy.config import ProxyConfig


class StubUpstream:
    """Records every request and answers with a canned response."""

    def __init__(self, status_code=200, json_body=None, content=None, exc=None):
        self.status_code = status_code
        self.json_body = json_body
        self.content = content
        self.exc = exc
        self.requests: list[httpx.Request] = []
        self.transport = httpx.MockTransport(self._respond)

    def _respond(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.content is not None:
            return httpx.Response(self.status_code, content=self.content)
        return httpx.Response(self.status_code, json=self.json_body)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    @property
    def last_payload(self):
        return json.loads(self.last_request.content)


@pytest.fixture
def config():
    return ProxyConfig(api_key="test-key", region="westeurope")


@pytest.fixture
def stub_upstream():
    def _make(**kwargs) -> StubUpstream:
        return StubUpstream(**kwargs)
    return _make


@pytest.fixture
def post_event():
    """Build a POST event; non-string bodies are JSON encoded."""
    def _make(body, **extra):
        event = {"httpMethod": "POST", "body": body if isinstance(body, str) or body is None else json.dumps(body)}
        event.update(extra)
        return event
    return _make
