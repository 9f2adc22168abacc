"""
Configuration Module

Type-safe configuration for the cache client.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Stage identifiers, connection events and expiry defaults

Usage:
------
```python
from cachelink.core.config import get_settings
from cachelink.core.config.constants import Stage

settings = get_settings()
redis_host = settings.redis.REDIS_HOST
```

Environment Variables:
---------------------
```bash
# Redis
REDIS_HOST=localhost
REDIS_PORT=6379
REDIS_PASSWORD=secret
REDIS_RECONNECT_ATTEMPTS=10

# Cache
CACHE_DEFAULT_EXPIRY=1800
CACHE_EXPIRY_ENABLED=true

# Logging
LOG_LEVEL=INFO
LOG_FORMAT=json
```

Testing:
-------
```python
import os
from cachelink.core.config import reload_settings

os.environ["REDIS_HOST"] = "test-redis"
settings = reload_settings()
assert settings.redis.REDIS_HOST == "test-redis"
```

Author: System Architect
Date: 2025-12-05
"""

from cachelink.core.config.constants import (
    DEFAULT_EXPIRY_SECONDS,
    RECONNECT_ATTEMPTS,
    RECONNECT_BACKOFF_BASE,
    RECONNECT_BACKOFF_CAP,
    TTL_KEY_MISSING,
    TTL_NO_EXPIRY,
    ConnectionEvent,
    Stage,
)
from cachelink.core.config.settings import (
    CacheSettings,
    LoggingSettings,
    RedisSettings,
    Settings,
    get_settings,
    reload_settings,
)

__all__ = [
    # Settings
    "Settings",
    "RedisSettings",
    "CacheSettings",
    "LoggingSettings",
    "get_settings",
    "reload_settings",
    # Enums
    "Stage",
    "ConnectionEvent",
    # Expiry
    "DEFAULT_EXPIRY_SECONDS",
    "TTL_NO_EXPIRY",
    "TTL_KEY_MISSING",
    # Reconnect
    "RECONNECT_ATTEMPTS",
    "RECONNECT_BACKOFF_BASE",
    "RECONNECT_BACKOFF_CAP",
]
