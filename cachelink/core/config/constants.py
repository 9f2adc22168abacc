"""
System Constants and Enumerations

Constants shared by the cache client, the settings layer and the logging
layer.

Author: System Architect
Date: 2025-12-05
"""

from enum import Enum

# ============================================================================
# Stage Identifiers (for structured logging)
# ============================================================================


class Stage(str, Enum):
    """
    Cache client stages used as the ``stage`` field of log entries.

    Format: REDIS.{OPERATION}

    Every log line emitted by the client carries one of these values so a
    log search for ``stage="REDIS.HSET"`` finds all hash writes.
    """

    INITIALIZATION = "REDIS.INIT"
    CONNECT = "REDIS.CONNECT"
    READY = "REDIS.READY"
    RECONNECTING = "REDIS.RECONNECTING"
    CONNECTION_ERROR = "REDIS.ERROR"
    DISCONNECT = "REDIS.END"

    SET = "REDIS.SET"
    GET = "REDIS.GET"
    HSET = "REDIS.HSET"
    HMSET = "REDIS.HMSET"
    HGET = "REDIS.HGET"
    HGETALL = "REDIS.HGETALL"
    EXPIRE = "REDIS.EXPIRE"
    TTL = "REDIS.TTL"


# ============================================================================
# Connection Events
# ============================================================================


class ConnectionEvent(str, Enum):
    """
    Connection lifecycle events observed by a listener set.

    ERROR: transport error reported by the driver
    READY: connection answered PING and accepts commands
    RECONNECTING: driver is about to retry after a connection failure
    END: connection closed
    """

    ERROR = "error"
    READY = "ready"
    RECONNECTING = "reconnecting"
    END = "end"


# ============================================================================
# Expiry
# ============================================================================

# Thirty minutes, applied to keys written without an explicit expiry
DEFAULT_EXPIRY_SECONDS = 60 * 30


# ============================================================================
# Reconnect Policy (handed to the driver's Retry object)
# ============================================================================

RECONNECT_ATTEMPTS = 10
RECONNECT_BACKOFF_BASE = 0.05  # seconds
RECONNECT_BACKOFF_CAP = 3.0  # seconds


# ============================================================================
# Redis Connection Defaults
# ============================================================================

REDIS_DEFAULT_HOST = "localhost"
REDIS_DEFAULT_PORT = 6379
REDIS_SOCKET_TIMEOUT = 5.0  # seconds
REDIS_SOCKET_CONNECT_TIMEOUT = 5.0  # seconds

# TTL command sentinels
TTL_NO_EXPIRY = -1
TTL_KEY_MISSING = -2
