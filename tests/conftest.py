"""
Pytest configuration and fixtures for the Gemini proxy tests
"""
import json

import pytest

from config import Settings
from core.gemini_client import GenerationResult, UpstreamError
from core.proxy_handler import ProxyHandler


class StubClient:
    """TextGenerationClient double that records every prompt it receives."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    async def generate(self, prompt):
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.result


class FakeResponse:
    """Stands in for aiohttp.ClientResponse."""

    def __init__(self, status, body):
        self.status = status
        self._body = body if isinstance(body, str) else json.dumps(body)

    async def json(self, content_type='application/json'):
        if not self._body.strip():
            return None
        return json.loads(self._body)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Stands in for aiohttp.ClientSession; records POSTs."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []
        self.closed = False

    def post(self, url, data=None, headers=None):
        self.requests.append({'url': url, 'data': data, 'headers': headers})
        if self.error is not None:
            raise self.error
        return self.response

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        self.closed = True
        return False


@pytest.fixture
def settings():
    return Settings(api_key='test-key-123', model='gemini-1.5-pro-latest',
                    api_host='generativelanguage.googleapis.com')


@pytest.fixture
def unconfigured_settings():
    return Settings(api_key=None)


@pytest.fixture
def success_client():
    return StubClient(result=GenerationResult(text='hello'))


@pytest.fixture
def quota_client():
    return StubClient(result=GenerationResult(error=UpstreamError(status=429, message='quota exceeded')))


@pytest.fixture
def make_handler(settings):
    """Build a ProxyHandler wired to the given stub client."""
    def _make(client, handler_settings=None):
        return ProxyHandler(handler_settings or settings, client_factory=lambda _: client)
    return _make


@pytest.fixture
def app(make_handler, success_client):
    """Flask application fixture"""
    from app import create_app
    flask_app = create_app(make_handler(success_client))
    flask_app.config['TESTING'] = True
    yield flask_app


@pytest.fixture
def client(app):
    """Test client fixture"""
    return app.test_client()
