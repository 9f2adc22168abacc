"""
Exception Module

Structured exception hierarchy for cachelink.

Module Structure:
-----------------
- **base.py**: CacheLinkError base class + configuration errors
- **cache.py**: Redis connection and command errors

Usage:
------
```python
from cachelink.core.exceptions import ConfigurationMissingError, StoreOperationError
```

Author: System Architect
Date: 2025-12-08
"""

# Base exception
from cachelink.core.exceptions.base import (
    CacheLinkError,
    ConfigurationError,
    ConfigurationMissingError,
)

# Cache exceptions
from cachelink.core.exceptions.cache import (
    CacheConnectionError,
    CacheError,
    CacheNotConnectedError,
    StoreOperationError,
)

__all__ = [
    # Base
    "CacheLinkError",
    "ConfigurationError",
    "ConfigurationMissingError",
    # Cache
    "CacheError",
    "CacheConnectionError",
    "CacheNotConnectedError",
    "StoreOperationError",
]
