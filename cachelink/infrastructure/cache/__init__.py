"""
Cache Module

Provides the Redis cache client and its connection listeners.
"""

from .listeners import ConnectionListeners, LoggingConnectionListeners, ObservedBackoff
from .redis_client import CacheClient, ConnectionManager, OperationExecutor, create_redis

__all__ = [
    "CacheClient",
    "ConnectionManager",
    "OperationExecutor",
    "create_redis",
    "ConnectionListeners",
    "LoggingConnectionListeners",
    "ObservedBackoff",
]
