# tests/conftest.py
import logging

import pytest

from batepapo.server.runtime.messages import MessageLog
from batepapo.server.runtime.presence import PresenceRegistry
from batepapo.server.runtime.store import InMemoryStore

# ------------------------------------------------------------------------------
# 1. Global Configuration
# ------------------------------------------------------------------------------

@pytest.fixture(scope="session")
def anyio_backend():
    """
    Tells pytest to use 'asyncio' as the backend for anyio tests.
    The scheduler and the HTTP client are written against anyio, so asyncio is enough.
    """
    return "asyncio"


@pytest.fixture(autouse=True)
def setup_test_logging(caplog):
    """
    Automatically captures logging at DEBUG level for every test.
    If a test fails, pytest will show the logs.
    """
    caplog.set_level(logging.DEBUG)


# ------------------------------------------------------------------------------
# 2. Deterministic clocks
# ------------------------------------------------------------------------------

class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


FIXED_TIME = "12:34:56"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def wall_clock():
    return lambda: FIXED_TIME


# ------------------------------------------------------------------------------
# 3. Core components over the in-memory store
# ------------------------------------------------------------------------------

@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def message_log(store, wall_clock):
    return MessageLog(store, clock=wall_clock)


@pytest.fixture
def registry(store, message_log, clock):
    return PresenceRegistry(store, message_log, clock=clock)
