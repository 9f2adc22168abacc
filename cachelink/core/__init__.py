"""
Core Module

Foundational components: configuration, logging and exceptions.
"""

from .exceptions import (
    CacheConnectionError,
    CacheError,
    CacheLinkError,
    CacheNotConnectedError,
    ConfigurationError,
    ConfigurationMissingError,
    StoreOperationError,
)
from .logging import (
    clear_correlation_id,
    get_correlation_id,
    get_logger,
    log_stage,
    set_correlation_id,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "set_correlation_id",
    "get_correlation_id",
    "clear_correlation_id",
    "log_stage",
    "CacheLinkError",
    "ConfigurationError",
    "ConfigurationMissingError",
    "CacheError",
    "CacheConnectionError",
    "CacheNotConnectedError",
    "StoreOperationError",
]
