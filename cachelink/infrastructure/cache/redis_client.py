"""
Redis Cache Client

Architecture:
    CacheClient (Public API)
        ├── ConnectionManager (Connection lifecycle and event dispatch)
        └── OperationExecutor (Command execution with error handling)

The client owns a configuration, one lazily created connection and one
listener set. String and hash writes optionally carry a TTL: ``set`` sends
it inside the SET command, ``hset``/``hmset`` follow a successful field
write with EXPIRE on the whole hash.

Usage:
    client = CacheClient()
    client.config = RedisSettings(REDIS_HOST="localhost")
    await client.connect()

    await client.set("user:1", "alice")
    await client.hset("profile:1", "name", "bob")
    name = await client.hget("profile:1", "name")

    await client.disconnect()

Author: System Architect
Date: 2025-12-13
"""

import asyncio
import datetime
import math
import numbers
from collections.abc import Callable, Mapping
from typing import Any

import redis.asyncio as redis
from pydantic import ValidationError
from redis.asyncio.retry import Retry
from redis.backoff import ExponentialBackoff
from redis.exceptions import ConnectionError, RedisError, TimeoutError

from cachelink.core.config.constants import DEFAULT_EXPIRY_SECONDS, ConnectionEvent, Stage
from cachelink.core.config.settings import RedisSettings, Settings
from cachelink.core.exceptions import (
    CacheConnectionError,
    CacheNotConnectedError,
    ConfigurationError,
    ConfigurationMissingError,
    StoreOperationError,
)
from cachelink.core.logging.logger import get_correlation_id, get_logger, log_stage
from cachelink.infrastructure.cache.listeners import (
    ConnectionListeners,
    LoggingConnectionListeners,
    ObservedBackoff,
)

logger = get_logger(__name__)

ClientFactory = Callable[[RedisSettings, Retry], redis.Redis]


def create_redis(config: RedisSettings, retry: Retry) -> redis.Redis:
    """
    Build a redis-py asyncio client from configuration.

    Responses are decoded to ``str``. The driver owns reconnection through
    ``retry``; this function performs no I/O.
    """
    return redis.Redis(
        host=config.REDIS_HOST,
        port=config.REDIS_PORT,
        db=config.REDIS_DB,
        username=config.REDIS_USERNAME,
        password=config.REDIS_PASSWORD,
        ssl=config.REDIS_SSL,
        socket_timeout=config.REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=config.REDIS_SOCKET_CONNECT_TIMEOUT,
        retry=retry,
        decode_responses=True,
    )


def to_seconds(expiry: Any) -> int | None:
    """
    Convert an expiry to whole seconds.

    Returns None for anything that is not a finite number or a timedelta.
    ``bool`` is rejected even though it is an ``int`` subclass.
    """
    if isinstance(expiry, bool):
        return None
    if isinstance(expiry, datetime.timedelta):
        return int(expiry.total_seconds())
    if isinstance(expiry, numbers.Real) and math.isfinite(expiry):
        return int(expiry)
    return None


def to_redis_settings(config: Mapping[str, Any]) -> RedisSettings:
    """
    Validate a plain mapping into RedisSettings.

    Keys are either field names (``REDIS_HOST``) or their short form
    (``host``). Fields the mapping leaves out take their defaults, never
    environment variables.

    Raises:
        ConfigurationError: Unknown keys or invalid values
    """
    fields = RedisSettings.model_fields
    values = {name: field.default for name, field in fields.items()}
    unknown = []

    for key, value in config.items():
        name = key if key in fields else f"REDIS_{str(key).upper()}"
        if name not in fields:
            unknown.append(key)
            continue
        values[name] = value

    if unknown:
        raise ConfigurationError(
            f"Unknown Redis configuration keys: {', '.join(map(str, unknown))}",
            details={"unknown_keys": unknown},
        )

    try:
        # Explicit init values take precedence over every settings source
        return RedisSettings(**values)
    except ValidationError as e:
        raise ConfigurationError.from_exception(e, message=f"Invalid Redis configuration: {e}") from e


# =============================================================================
# LAYER 1: CONNECTION MANAGEMENT
# Handles connection lifecycle and event dispatch
# =============================================================================


class ConnectionManager:
    """
    Manages the Redis connection lifecycle.

    Responsibility: create the handle, wait for readiness, close it, and
    forward lifecycle events to the current listener set.

    Connection Lifecycle:
    1. Build a Retry policy whose backoff reports reconnect attempts
    2. Create the handle through the client factory (no I/O)
    3. PING until the driver reports ready or gives up
    4. Fire ``ready`` on success, ``error`` on failure
    """

    def __init__(self, client_factory: ClientFactory = create_redis):
        self._client_factory = client_factory
        self._client: redis.Redis | None = None
        self._lock = asyncio.Lock()
        self._listeners: ConnectionListeners = LoggingConnectionListeners()

    @property
    def listeners(self) -> ConnectionListeners:
        return self._listeners

    @listeners.setter
    def listeners(self, listeners: ConnectionListeners | None) -> None:
        self._listeners = listeners if listeners is not None else LoggingConnectionListeners()

    def emit(self, event: ConnectionEvent, **payload) -> None:
        """
        Forward an event to the listener set.

        Listener failures are logged and never reach the caller of the
        operation that produced the event.
        """
        try:
            self._listeners.dispatch(event, **payload)
        except Exception:
            logger.exception("Connection listener failed", stage=Stage.CONNECT.value, event=event.value)

    def _on_reconnecting(self, delay: float, attempt: int) -> None:
        self.emit(ConnectionEvent.RECONNECTING, delay=delay, attempt=attempt)

    def _build_retry(self, config: RedisSettings) -> Retry:
        backoff = ExponentialBackoff(
            cap=config.REDIS_RECONNECT_BACKOFF_CAP,
            base=config.REDIS_RECONNECT_BACKOFF_BASE,
        )
        return Retry(ObservedBackoff(backoff, self._on_reconnecting), config.REDIS_RECONNECT_ATTEMPTS)

    async def connect(self, config: RedisSettings) -> redis.Redis:
        """
        Create a connection and wait until it is ready.

        STAGE-REDIS.CONNECT: Connection establishment

        Concurrent calls are serialized; the handle of an earlier call is
        closed by the next one.

        Returns:
            redis.Redis: Ready connection

        Raises:
            CacheConnectionError: If the connection never became ready
        """
        async with self._lock:
            await self._close_current()

            client = self._client_factory(config, self._build_retry(config))
            self._client = client

            try:
                await client.ping()
            except RedisError as e:
                self._client = None
                try:
                    await client.aclose()
                finally:
                    self.emit(ConnectionEvent.ERROR, error=e)
                raise CacheConnectionError.from_exception(
                    e,
                    message=f"Failed to connect to Redis: {e}",
                    correlation_id=get_correlation_id(),
                    host=config.REDIS_HOST,
                    port=config.REDIS_PORT,
                ) from e

            self.emit(ConnectionEvent.READY)
            return client

    async def disconnect(self) -> None:
        """
        Close the connection.

        STAGE-REDIS.END: Connection cleanup
        """
        async with self._lock:
            await self._close_current()

    async def _close_current(self) -> None:
        client, self._client = self._client, None
        if client is None:
            return
        await client.aclose()
        self.emit(ConnectionEvent.END)

    def get_client(self) -> redis.Redis | None:
        """Get the Redis client instance."""
        return self._client

    def is_connected(self) -> bool:
        """Check if a connection handle exists."""
        return self._client is not None


# =============================================================================
# LAYER 2: OPERATION EXECUTOR
# Executes Redis commands with error handling and logging
# =============================================================================


class OperationExecutor:
    """
    Executes Redis operations with consistent error handling.

    Error Handling Strategy:
    - Catch RedisError exceptions
    - Log error with context (stage, key, etc.)
    - Report transport errors to the listener set
    - Raise StoreOperationError carrying the driver error unchanged
    """

    def __init__(self, connection_manager: ConnectionManager):
        self._conn_mgr = connection_manager

    @property
    def _redis(self) -> redis.Redis:
        client = self._conn_mgr.get_client()
        if client is None:
            raise CacheNotConnectedError("Redis client is not connected, call connect() first")
        return client

    def _failure(self, stage: Stage, command: str, error: RedisError, **details) -> StoreOperationError:
        log_stage(logger, stage, f"Redis {command} failed", level="error", error=str(error), **details)
        if isinstance(error, (ConnectionError, TimeoutError)):
            self._conn_mgr.emit(ConnectionEvent.ERROR, error=error)
        return StoreOperationError(
            message=f"Redis {command} failed: {error}",
            original_error=error,
            correlation_id=get_correlation_id(),
            details=details,
        )

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """
        Set value in Redis, with ``EX ttl`` when a TTL is given.

        STAGE-REDIS.SET: Redis SET operation
        """
        try:
            return await self._redis.set(key, value, ex=ttl)
        except RedisError as e:
            raise self._failure(Stage.SET, "SET", e, key=key) from e

    async def get(self, key: str) -> str | None:
        """
        Get value from Redis.

        STAGE-REDIS.GET: Redis GET operation
        """
        try:
            return await self._redis.get(key)
        except RedisError as e:
            raise self._failure(Stage.GET, "GET", e, key=key) from e

    async def hset(self, name: str, key: str, value: Any) -> int:
        """
        Set a hash field value.

        Returns:
            1 if new field, 0 if updated existing field
        """
        try:
            return await self._redis.hset(name, key, value)
        except RedisError as e:
            raise self._failure(Stage.HSET, "HSET", e, name=name, key=key) from e

    async def hmset(self, name: str, mapping: Mapping[str, Any]) -> int:
        """
        Set several hash fields in one HSET call.

        Returns:
            Number of fields that were added
        """
        try:
            return await self._redis.hset(name, mapping=dict(mapping))
        except RedisError as e:
            raise self._failure(Stage.HMSET, "HMSET", e, name=name, fields=list(mapping)) from e

    async def hget(self, name: str, key: str) -> str | None:
        """Get a hash field value."""
        try:
            return await self._redis.hget(name, key)
        except RedisError as e:
            raise self._failure(Stage.HGET, "HGET", e, name=name, key=key) from e

    async def hgetall(self, name: str) -> dict[str, str]:
        """Get all hash fields, an empty dict if the hash does not exist."""
        try:
            return await self._redis.hgetall(name)
        except RedisError as e:
            raise self._failure(Stage.HGETALL, "HGETALL", e, name=name) from e

    async def expire(self, key: str, ttl: int) -> bool:
        """Set TTL on a key."""
        try:
            return await self._redis.expire(key, ttl)
        except RedisError as e:
            raise self._failure(Stage.EXPIRE, "EXPIRE", e, key=key, ttl=ttl) from e

    async def ttl(self, key: str) -> int:
        """
        Get TTL of a key.

        Returns:
            TTL in seconds, -1 if no TTL, -2 if key doesn't exist
        """
        try:
            return await self._redis.ttl(key)
        except RedisError as e:
            raise self._failure(Stage.TTL, "TTL", e, key=key) from e


# =============================================================================
# LAYER 3: PUBLIC API
# =============================================================================


class CacheClient:
    """
    Async Redis client for string and hash entries with optional expiry.

    State: unconfigured -> configured (``config`` set) -> connected
    (``connect()`` returned). Reconnects are handled by the driver and are
    only observed through the listener set.

    Expiry:
        With ``expiry_enabled`` (the default) every write without an
        explicit expiry uses ``default_expiry`` (1800s). With it disabled
        only an explicit expiry is applied. For hashes the TTL covers the
        whole hash key and is applied with a separate EXPIRE after the
        field write succeeds. A failing EXPIRE is logged and does not fail
        the write.

    Args:
        config: Connection parameters, may be set later
        expiry_enabled: Apply ``default_expiry`` to writes without one
        client_factory: Builds the driver client (tests inject fakes here)
    """

    def __init__(
        self,
        config: RedisSettings | Mapping[str, Any] | None = None,
        expiry_enabled: bool = True,
        client_factory: ClientFactory = create_redis,
    ):
        self._config: RedisSettings | None = None
        self._default_expiry = DEFAULT_EXPIRY_SECONDS
        self._expiry_enabled = expiry_enabled

        self._conn_mgr = ConnectionManager(client_factory)
        self._executor = OperationExecutor(self._conn_mgr)

        self.config = config

    @classmethod
    def from_settings(cls, settings: Settings, client_factory: ClientFactory = create_redis) -> "CacheClient":
        """Build a client from the aggregated application settings."""
        client = cls(
            config=settings.redis,
            expiry_enabled=settings.cache.CACHE_EXPIRY_ENABLED,
            client_factory=client_factory,
        )
        client.default_expiry = settings.cache.CACHE_DEFAULT_EXPIRY
        log_stage(
            logger,
            Stage.INITIALIZATION,
            "Cache client initialized",
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            default_expiry=client.default_expiry,
        )
        return client

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    @property
    def config(self) -> RedisSettings | None:
        return self._config

    @config.setter
    def config(self, config: RedisSettings | Mapping[str, Any] | None) -> None:
        if config is not None and not isinstance(config, RedisSettings):
            config = to_redis_settings(config)
        self._config = config

    @property
    def listeners(self) -> ConnectionListeners:
        return self._conn_mgr.listeners

    @listeners.setter
    def listeners(self, listeners: ConnectionListeners | None) -> None:
        # Replaces the default logging listeners, None restores them
        self._conn_mgr.listeners = listeners

    @property
    def default_expiry(self) -> int:
        return self._default_expiry

    @default_expiry.setter
    def default_expiry(self, expiry: Any) -> None:
        # SET rejects a TTL below one second and EXPIRE with one deletes the key
        seconds = to_seconds(expiry)
        self._default_expiry = seconds if seconds is not None and seconds > 0 else DEFAULT_EXPIRY_SECONDS

    @property
    def expiry_enabled(self) -> bool:
        return self._expiry_enabled

    @property
    def is_connected(self) -> bool:
        return self._conn_mgr.is_connected()

    def _effective_expiry(self, expiry: Any) -> int | None:
        if expiry is None:
            return self._default_expiry if self._expiry_enabled else None
        seconds = to_seconds(expiry)
        if seconds is None:
            raise TypeError(f"expiry must be a number of seconds or a timedelta, got {expiry!r}")
        if seconds <= 0:
            raise ValueError(f"expiry must be at least one second, got {expiry!r}")
        return seconds

    # -------------------------------------------------------------------------
    # Connection
    # -------------------------------------------------------------------------

    async def connect(self) -> redis.Redis:
        """
        Connect and wait until the connection is ready.

        Raises:
            ConfigurationMissingError: No configuration set (no I/O happens)
            CacheConnectionError: The connection never became ready
        """
        if self._config is None:
            raise ConfigurationMissingError("Could not create redis client, config does not exist.")

        log_stage(
            logger,
            Stage.CONNECT,
            "Connecting to Redis",
            level="debug",
            host=self._config.REDIS_HOST,
            port=self._config.REDIS_PORT,
            db=self._config.REDIS_DB,
        )
        return await self._conn_mgr.connect(self._config)

    async def disconnect(self) -> None:
        """Close the connection. The configuration is kept."""
        await self._conn_mgr.disconnect()

    async def __aenter__(self) -> "CacheClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    # -------------------------------------------------------------------------
    # String entries
    # -------------------------------------------------------------------------

    async def set(self, key: str, value: Any, expiry: Any = None) -> bool:
        """Write ``value`` under ``key``, with the TTL inside the same SET."""
        return await self._executor.set(key, value, self._effective_expiry(expiry))

    async def get(self, key: str) -> str | None:
        """Read ``key``, None if it does not exist."""
        return await self._executor.get(key)

    async def ttl(self, key: str) -> int:
        """Remaining TTL of ``key`` in seconds (-1 no TTL, -2 missing)."""
        return await self._executor.ttl(key)

    # -------------------------------------------------------------------------
    # Hash entries
    # -------------------------------------------------------------------------

    async def hset(self, name: str, field: str, value: Any, expiry: Any = None) -> int:
        """
        Write one field of hash ``name`` then apply the TTL to the whole hash.

        Returns:
            Number of fields added by the field write
        """
        ttl = self._effective_expiry(expiry)
        added = await self._executor.hset(name, field, value)
        if ttl is not None:
            await self._expire_hash(name, ttl)
        return added

    async def hmset(self, name: str, mapping: Mapping[str, Any], expiry: Any = None) -> int:
        """
        Write several fields of hash ``name`` in one call then apply the TTL.

        Returns:
            Number of fields added by the write
        """
        ttl = self._effective_expiry(expiry)
        added = await self._executor.hmset(name, mapping)
        if ttl is not None:
            await self._expire_hash(name, ttl)
        return added

    async def hget(self, name: str, field: str) -> str | None:
        """Read one field of hash ``name``, None if absent."""
        return await self._executor.hget(name, field)

    async def hgetall(self, name: str) -> dict[str, str]:
        """Read all fields of hash ``name``, an empty dict if absent."""
        return await self._executor.hgetall(name)

    async def _expire_hash(self, name: str, ttl: int) -> None:
        # The field write already succeeded; an EXPIRE failure is not the caller's failure
        try:
            await self._executor.expire(name, ttl)
        except StoreOperationError as e:
            log_stage(
                logger,
                Stage.EXPIRE,
                "Hash written without TTL",
                level="warning",
                name=name,
                ttl=ttl,
                error=str(e.original_error),
            )
