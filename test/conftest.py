import json
import logging
from typing import Any, Optional

import pytest

from leadadmin.auth.session_store import SessionStore
from leadadmin.auth.storage import InMemoryStorage
from leadadmin.client.api_client import ApiClient
from leadadmin.config import ApiEndpoints

BASE_URL = "http://api.test"


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class FakeResponse:
    """Stand-in for aiohttp.ClientResponse used as an async context manager."""

    def __init__(
        self,
        status: int = 200,
        body: Any = None,
        content_type: Optional[str] = "application/json",
        raw: Optional[bytes] = None,
    ):
        self.status = status
        self.headers = {"Content-Type": content_type} if content_type else {}
        if raw is not None:
            self._raw = raw
        elif body is not None:
            self._raw = json.dumps(body).encode("utf-8")
        else:
            self._raw = b""
        self.read_called = False

    async def read(self) -> bytes:
        self.read_called = True
        return self._raw

    async def text(self) -> str:
        return self._raw.decode("utf-8")

    async def json(self, content_type: Optional[str] = "application/json") -> Any:
        text = self._raw.decode("utf-8").strip()
        if not text:
            return None
        return json.loads(text)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


class FakeHttpSession:
    """Records requests and answers them from registered routes."""

    def __init__(self, error: Optional[Exception] = None):
        self.closed = False
        self.calls: list[dict[str, Any]] = []
        self._routes: dict[tuple[str, str], FakeResponse] = {}
        self._error = error

    def add(self, method: str, url: str, response: FakeResponse) -> "FakeHttpSession":
        self._routes[(method, url)] = response
        return self

    def fail_with(self, error: Exception) -> None:
        self._error = error

    def request(self, method: str, url: str, data=None, headers=None):
        self.calls.append({
            "method": method,
            "url": url,
            "data": data,
            "headers": dict(headers or {}),
        })
        if self._error is not None:
            raise self._error
        return self._routes[(method, url)]

    async def close(self) -> None:
        self.closed = True


class RedirectRecorder:
    def __init__(self):
        self.targets: list[str] = []

    def __call__(self, login_url: str) -> None:
        self.targets.append(login_url)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """Configure logging for tests."""
    logging.basicConfig(level=logging.INFO)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def session_store(storage, clock):
    return SessionStore(storage, clock=clock)


@pytest.fixture
def http_session():
    return FakeHttpSession()


@pytest.fixture
def redirect():
    return RedirectRecorder()


@pytest.fixture
def api(session_store, http_session, redirect):
    return ApiClient(session_store, on_unauthenticated=redirect, http_session=http_session)


@pytest.fixture
def endpoints():
    return ApiEndpoints(BASE_URL)


@pytest.fixture
def fake_response():
    """Factory for canned responses: fake_response(status, body, content_type=...)."""
    return FakeResponse
