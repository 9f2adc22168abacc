"""
Cache-Related Exceptions

All exceptions related to Redis connection and command execution.

Author: System Architect
Date: 2025-12-08
"""

from typing import Any

from cachelink.core.exceptions.base import CacheLinkError


class CacheError(CacheLinkError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when the connection never became ready.

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Incorrect host/port configuration
    - Authentication failure
    """
    pass


class CacheNotConnectedError(CacheError):
    """Raised when a command is issued before connect()."""
    pass


class StoreOperationError(CacheError):
    """
    Raised when a Redis command reports an error.

    The driver's exception is kept unmodified on ``original_error`` and is
    also chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        correlation_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, correlation_id=correlation_id, details=details)
        self.original_error = original_error
