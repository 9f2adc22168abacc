"""
cachelink

Async Redis cache client for string and hash entries with optional expiry.

Usage:
    from cachelink import CacheClient, RedisSettings

    client = CacheClient(config=RedisSettings(REDIS_HOST="localhost"))
    await client.connect()
    await client.hset("profile:1", "name", "bob")
"""

from cachelink.core.config import RedisSettings, Settings, get_settings
from cachelink.core.exceptions import (
    CacheConnectionError,
    CacheError,
    CacheLinkError,
    CacheNotConnectedError,
    ConfigurationMissingError,
    StoreOperationError,
)
from cachelink.infrastructure.cache import (
    CacheClient,
    ConnectionListeners,
    LoggingConnectionListeners,
)

__version__ = "1.0.0"

__all__ = [
    "CacheClient",
    "ConnectionListeners",
    "LoggingConnectionListeners",
    "RedisSettings",
    "Settings",
    "get_settings",
    "CacheLinkError",
    "CacheError",
    "CacheConnectionError",
    "CacheNotConnectedError",
    "ConfigurationMissingError",
    "StoreOperationError",
]
