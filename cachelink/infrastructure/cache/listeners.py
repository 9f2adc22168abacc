"""
Connection Event Listeners

A listener set observes the connection lifecycle of a CacheClient:

    error         transport error reported by the driver
    ready         connection answered PING
    reconnecting  driver is about to retry (delay, attempt)
    end           connection closed

A client always holds exactly one listener set. ``LoggingConnectionListeners``
is installed by default; assigning another set to ``CacheClient.listeners``
replaces it, so the default log lines stop.

Reconnection is done by redis-py's ``Retry`` policy. ``ObservedBackoff``
wraps the policy's backoff so every retry is reported as a reconnect
attempt before the driver sleeps.
"""

import copy
from collections.abc import Callable

from redis.backoff import AbstractBackoff

from cachelink.core.config.constants import ConnectionEvent, Stage
from cachelink.core.logging.logger import get_logger

logger = get_logger(__name__)


class ConnectionListeners:
    """
    Base listener set. Every hook is a no-op.

    Subclass and override the hooks you care about. Hooks are called
    synchronously from the event loop and must not block.
    """

    def on_error(self, error: Exception) -> None:
        pass

    def on_ready(self) -> None:
        pass

    def on_reconnecting(self, delay: float, attempt: int) -> None:
        pass

    def on_end(self) -> None:
        pass

    def dispatch(self, event: ConnectionEvent, **payload) -> None:
        """Route an event to its hook."""
        if event is ConnectionEvent.ERROR:
            self.on_error(payload["error"])
        elif event is ConnectionEvent.READY:
            self.on_ready()
        elif event is ConnectionEvent.RECONNECTING:
            self.on_reconnecting(payload["delay"], payload["attempt"])
        elif event is ConnectionEvent.END:
            self.on_end()


class LoggingConnectionListeners(ConnectionListeners):
    """Default listener set: log every connection event."""

    def on_error(self, error: Exception) -> None:
        logger.error("Redis connection error", stage=Stage.CONNECTION_ERROR.value, error=str(error))

    def on_ready(self) -> None:
        logger.info("Connected to Redis", stage=Stage.READY.value)

    def on_reconnecting(self, delay: float, attempt: int) -> None:
        logger.warning(
            "Attempting to reconnect to Redis",
            stage=Stage.RECONNECTING.value,
            delay=delay,
            attempt=attempt,
        )

    def on_end(self) -> None:
        logger.info("Disconnected from Redis", stage=Stage.DISCONNECT.value)


class ObservedBackoff(AbstractBackoff):
    """
    Backoff wrapper that reports each retry before the driver sleeps.

    Args:
        backoff: Backoff that computes the actual delays
        on_retry: Called with (delay, attempt) for every computed delay
    """

    def __init__(self, backoff: AbstractBackoff, on_retry: Callable[[float, int], None]):
        self._backoff = backoff
        self._on_retry = on_retry

    def reset(self) -> None:
        self._backoff.reset()

    def compute(self, failures: int) -> float:
        delay = self._backoff.compute(failures)
        self._on_retry(delay, failures)
        return delay

    def __deepcopy__(self, memo):
        # redis-py deep-copies its Retry; copies must report to the same client
        return ObservedBackoff(copy.deepcopy(self._backoff, memo), self._on_retry)
