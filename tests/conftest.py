import sys
import os

# Add the project root to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from flashscope.core.settings import Settings
from flashscope.flash.scope import FlashScope


class MemorySession:
    """In-memory session backend that records every write."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.writes = []
        self.fail_on_read = None

    def read(self, slot):
        if self.fail_on_read is not None:
            raise self.fail_on_read
        return self.data.get(slot)

    def write(self, slot, value):
        self.writes.append((slot, value))
        self.data[slot] = value

    def remove(self, slot):
        self.data.pop(slot, None)

    def clear(self):
        self.data.clear()


@pytest.fixture
def session():
    """A fresh session shared by every simulated request of a test."""
    return MemorySession()


@pytest.fixture
def run_request(session):
    """Run ``handler(flash)`` as one request against the shared session.

    Returns whatever the handler returns.
    """
    def _run(handler=None):
        flash = FlashScope(session)
        flash.on_request_start()
        try:
            return handler(flash) if handler else None
        finally:
            flash.on_request_end()
    return _run


@pytest.fixture
def test_settings():
    return Settings(
        SESSION_SECRET="test-secret-key",
        SESSION_COOKIE="test_session",
        LOG_JSON=False,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def app(test_settings):
    from flashscope.main import create_app

    return create_app(test_settings)


@pytest.fixture
def client(app):
    """Create a test client; cookies persist across requests like a browser."""
    from fastapi.testclient import TestClient

    with TestClient(app) as client:
        yield client
