"""
Shared fixtures: a temporary state document and a stand-in for the remote source.
"""

import asyncio
import json
from typing import Any, Optional

import aiohttp
import pytest

from rallyboard.store import ScoreboardStore


class FakeResponse:
    def __init__(self, status: int = 200, body: Any = None, text: Optional[str] = None):
        self.status = status
        self._text = text if text is not None else json.dumps(body)

    async def text(self) -> str:
        return self._text


class _RequestContext:
    def __init__(self, session: "FakeSession", url: str):
        self.session = session
        self.url = url

    async def __aenter__(self) -> FakeResponse:
        session = self.session
        session.in_flight += 1
        session.max_in_flight = max(session.max_in_flight, session.in_flight)
        try:
            if session.delay:
                await asyncio.sleep(session.delay)
            if session.error is not None:
                raise session.error
            return session.response
        finally:
            session.in_flight -= 1

    async def __aexit__(self, *exc_info) -> None:
        return None


class FakeSession:
    """Mimics the slice of aiohttp.ClientSession used by the sync loop."""

    def __init__(
        self,
        response: Optional[FakeResponse] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.response = response or FakeResponse(body={})
        self.error = error
        self.delay = delay
        self.requests: list[tuple[str, dict]] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    def get(self, url: str, headers: Optional[dict] = None) -> _RequestContext:
        self.requests.append((url, dict(headers or {})))
        return _RequestContext(self, url)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def data_file(tmp_path):
    """Path of a state document that does not exist yet."""
    return tmp_path / "data" / "state.json"


@pytest.fixture
def store(data_file) -> ScoreboardStore:
    store = ScoreboardStore(data_file)
    store.ensure_initialized()
    return store


@pytest.fixture
def connection_error() -> Exception:
    return aiohttp.ClientConnectionError("connection refused")
