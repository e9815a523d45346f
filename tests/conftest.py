"""
Shared fixtures: a controllable clock, a store driven by it, and an API client.
"""

import pytest
from fastapi.testclient import TestClient


class FakeClock:
    """Clock returning a settable epoch-millisecond value."""

    def __init__(self, now_ms: int = 0):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


@pytest.fixture
def clock():
    return FakeClock(now_ms=1_700_000_000_000)


@pytest.fixture
def store(clock):
    from app.store import PasteStore
    return PasteStore(clock=clock)


@pytest.fixture
def settings():
    from app.config import Settings
    return Settings(APP_BASE_URL="https://paste.example.com/", MAX_BODY_BYTES=4096)


@pytest.fixture
def client(settings, store):
    from app.main import create_app
    return TestClient(create_app(settings=settings, store=store))
