"""
Base Exception Class

This module contains the base exception class that all other exceptions
inherit from, plus the configuration errors.

Author: System Architect
Date: 2025-12-08
"""

from typing import Any


class CacheLinkError(Exception):
    """
    Base exception for all cachelink errors.

    Attributes:
        message: Error message
        correlation_id: Correlation ID of the calling request (if available)
        details: Additional error details (dict)

    Example:
        raise StoreOperationError(
            "Redis HSET failed",
            details={"hash": "profile:1", "field": "name"},
        )
    """

    def __init__(
        self,
        message: str,
        correlation_id: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.correlation_id = correlation_id
        self.details = (details or {}).copy()  # Create a copy to prevent external modification
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for logging.

        Returns:
            Dict with error_type, message, correlation_id, and details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "correlation_id": self.correlation_id,
            "details": self.details,
        }

    def __repr__(self) -> str:
        details_str = f", details={self.details}" if self.details else ""
        correlation_str = f", correlation_id='{self.correlation_id}'" if self.correlation_id else ""
        return f"{self.__class__.__name__}(message='{self.message}'{correlation_str}{details_str})"

    @classmethod
    def from_exception(
        cls,
        exc: Exception,
        message: str | None = None,
        correlation_id: str | None = None,
        **details,
    ) -> "CacheLinkError":
        """
        Create an error from another exception.

        Useful for wrapping driver exceptions with additional context.

        Example:
            >>> try:
            ...     await client.ping()
            ... except redis.ConnectionError as e:
            ...     raise CacheConnectionError.from_exception(e, host="localhost") from e
        """
        error_message = message or str(exc)
        error_details = {
            "original_error": exc.__class__.__name__,
            "original_message": str(exc),
            **details,
        }
        return cls(error_message, correlation_id=correlation_id, details=error_details)


class ConfigurationError(CacheLinkError):
    """Raised when configuration is invalid or missing."""
    pass


class ConfigurationMissingError(ConfigurationError):
    """
    Raised when connect() is called before any configuration was set.

    No connection object is created and no network I/O happens.
    """
    pass
