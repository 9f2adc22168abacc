"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys
from unittest.mock import AsyncMock, MagicMock

import fakeredis
import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from cachelink.core.config.settings import RedisSettings  # noqa: E402
from cachelink.infrastructure.cache.listeners import ConnectionListeners  # noqa: E402
from cachelink.infrastructure.cache.redis_client import CacheClient  # noqa: E402

# pytest-asyncio runs in auto mode (see pyproject.toml)


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def redis_config():
    """Connection parameters pointing at a local Redis."""
    return RedisSettings(REDIS_HOST="localhost", REDIS_PORT=6379, REDIS_RECONNECT_ATTEMPTS=0)


# ============================================================================
# Environment-Based Integration Toggles
# ============================================================================


@pytest.fixture(scope="session")
def use_real_redis():
    """Check if real Redis should be used for integration tests."""
    return os.getenv("USE_REAL_REDIS", "0").lower() in ("1", "true", "yes")


# ============================================================================
# Driver Fixtures
# ============================================================================


@pytest.fixture
def fake_server():
    """Isolated in-memory Redis server, one per test."""
    return fakeredis.FakeServer()


@pytest.fixture
def fake_factory(fake_server):
    """
    Client factory producing fakeredis clients bound to ``fake_server``.

    Wrapped in a MagicMock so tests can assert on how it was called.
    """

    def build(config, retry):
        return fakeredis.FakeAsyncRedis(server=fake_server, decode_responses=True)

    return MagicMock(side_effect=build)


@pytest.fixture
def mock_driver():
    """
    AsyncMock standing in for a redis.asyncio.Redis handle.

    Every command succeeds by default; tests set ``side_effect`` to fail one.
    """
    driver = AsyncMock()
    driver.ping = AsyncMock(return_value=True)
    driver.set = AsyncMock(return_value=True)
    driver.get = AsyncMock(return_value=None)
    driver.hset = AsyncMock(return_value=1)
    driver.hget = AsyncMock(return_value=None)
    driver.hgetall = AsyncMock(return_value={})
    driver.expire = AsyncMock(return_value=True)
    driver.ttl = AsyncMock(return_value=-2)
    driver.aclose = AsyncMock()
    return driver


class RecordingListeners(ConnectionListeners):
    """Listener set that records every event it receives."""

    def __init__(self):
        self.events = []

    def on_error(self, error):
        self.events.append(("error", error))

    def on_ready(self):
        self.events.append(("ready",))

    def on_reconnecting(self, delay, attempt):
        self.events.append(("reconnecting", delay, attempt))

    def on_end(self):
        self.events.append(("end",))


@pytest.fixture
def recording_listeners():
    return RecordingListeners()


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
async def cache_client(redis_config, fake_factory):
    """Connected CacheClient backed by fakeredis."""
    client = CacheClient(config=redis_config, client_factory=fake_factory)
    await client.connect()
    yield client
    await client.disconnect()


@pytest.fixture
async def mocked_cache_client(redis_config, mock_driver):
    """Connected CacheClient whose driver is ``mock_driver``."""
    client = CacheClient(config=redis_config, client_factory=lambda config, retry: mock_driver)
    await client.connect()
    return client
