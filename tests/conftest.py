"""Pytest fixtures for accountpy tests."""
import asyncio
import json

import pytest

from accountpy.core.api import APIConfig, TimeoutConfig, RequestDispatcher
from accountpy.core.account import AccountSessionManager


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse."""
    
    def __init__(self, status: int, body: bytes):
        self.status = status
        self._body = body
    
    async def read(self) -> bytes:
        return self._body


class _FakeRequestContext:
    def __init__(self, item):
        self._item = item
    
    async def __aenter__(self):
        delay, result = self._item
        if delay:
            await asyncio.sleep(delay)
        if isinstance(result, BaseException):
            raise result
        return result
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        return None


class FakeHttpSession:
    """
    Records every request and replays scripted responses in order.
    
    When the script runs out, requests get HTTP 200 with an empty object.
    """
    
    def __init__(self):
        self.calls = []
        self.closed = False
        self._script = []
    
    def add_response(self, status=200, json_body=None, body=None, delay=0.0):
        if body is None:
            body = json.dumps(json_body if json_body is not None else {}).encode('utf-8')
        self._script.append((delay, FakeResponse(status, body)))
        return self
    
    def add_error(self, error: BaseException, delay=0.0):
        self._script.append((delay, error))
        return self
    
    def request(self, method, url, **kwargs):
        self.calls.append({'method': method, 'url': url, **kwargs})
        if self._script:
            item = self._script.pop(0)
        else:
            item = (0.0, FakeResponse(200, b'{}'))
        return _FakeRequestContext(item)
    
    async def close(self):
        self.closed = True
    
    @property
    def call_count(self) -> int:
        return len(self.calls)
    
    def last_json(self):
        """Decoded body of the most recent request."""
        return json.loads(self.calls[-1]['data'].decode('utf-8'))


BASE_URL = 'https://accounts.test'


@pytest.fixture
def fake_http():
    """Scriptable HTTP session."""
    return FakeHttpSession()


@pytest.fixture
def config():
    """Config pointing at the fake server with a short timeout."""
    return APIConfig(base_url=BASE_URL, timeout=TimeoutConfig(total=1.0))


@pytest.fixture
def dispatcher(config, fake_http):
    """Dispatcher sending through the fake session."""
    return RequestDispatcher(config, session=fake_http)


@pytest.fixture
def manager(config, dispatcher):
    """Session manager wired to the fake session."""
    return AccountSessionManager(config, dispatcher=dispatcher)


@pytest.fixture
def login_response():
    """Body of a successful login."""
    return {
        'user': {'user_name': 'alice', 'user_id': 42},
        'token': 'abc123',
        'message': 'welcome'
    }
