#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
cache client and its logging.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with override mechanisms

Note that the cache client never reads these settings on its own. The
application builds a client from them (``CacheClient.from_settings``) or
hands a ``RedisSettings`` to ``CacheClient.config``.

Author: System Architect
Date: 2025-12-05
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cachelink.core.config.constants import (
    DEFAULT_EXPIRY_SECONDS,
    RECONNECT_ATTEMPTS,
    RECONNECT_BACKOFF_BASE,
    RECONNECT_BACKOFF_CAP,
    REDIS_DEFAULT_HOST,
    REDIS_DEFAULT_PORT,
    REDIS_SOCKET_CONNECT_TIMEOUT,
    REDIS_SOCKET_TIMEOUT,
)


class RedisSettings(BaseSettings):
    """
    Redis connection parameters.

    STAGE-REDIS.0: Connection configuration

    This is the configuration object a ``CacheClient`` connects with.
    Reconnect fields are handed to the driver's retry policy; the client
    itself never retries.
    """

    REDIS_HOST: str = Field(default=REDIS_DEFAULT_HOST, description="Redis server host")
    REDIS_PORT: int = Field(default=REDIS_DEFAULT_PORT, description="Redis server port")
    REDIS_DB: int = Field(default=0, ge=0, description="Redis database number")
    REDIS_USERNAME: str | None = Field(default=None, description="Redis ACL username")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_SSL: bool = Field(default=False, description="Connect over TLS")

    REDIS_SOCKET_TIMEOUT: float = Field(
        default=REDIS_SOCKET_TIMEOUT, description="Socket timeout in seconds"
    )
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(
        default=REDIS_SOCKET_CONNECT_TIMEOUT, description="Connection timeout in seconds"
    )

    REDIS_RECONNECT_ATTEMPTS: int = Field(
        default=RECONNECT_ATTEMPTS, ge=0, description="Reconnect attempts before giving up"
    )
    REDIS_RECONNECT_BACKOFF_BASE: float = Field(
        default=RECONNECT_BACKOFF_BASE, gt=0, description="First reconnect delay in seconds"
    )
    REDIS_RECONNECT_BACKOFF_CAP: float = Field(
        default=RECONNECT_BACKOFF_CAP, gt=0, description="Longest reconnect delay in seconds"
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True, extra="ignore")


class CacheSettings(BaseSettings):
    """
    Expiry behaviour of cache writes.

    STAGE-2: Cache TTL configuration
    """

    CACHE_DEFAULT_EXPIRY: int = Field(
        default=DEFAULT_EXPIRY_SECONDS, gt=0, description="Default TTL in seconds (30 minutes)"
    )
    CACHE_EXPIRY_ENABLED: bool = Field(
        default=True, description="Apply the default TTL to writes without an explicit expiry"
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True, extra="ignore")


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    STAGE-L: Logging configuration

    Architectural Decision: structlog for production-grade logging
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True, extra="ignore")


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    STAGE-0: Centralized configuration initialization

    Usage:
        from cachelink.core.config import get_settings

        settings = get_settings()
        redis_host = settings.redis.REDIS_HOST
        ttl = settings.cache.CACHE_DEFAULT_EXPIRY
    """

    # Redis settings
    REDIS_HOST: str = Field(default=REDIS_DEFAULT_HOST, description="Redis server host")
    REDIS_PORT: int = Field(default=REDIS_DEFAULT_PORT, description="Redis server port")
    REDIS_DB: int = Field(default=0, ge=0, description="Redis database number")
    REDIS_USERNAME: str | None = Field(default=None, description="Redis ACL username")
    REDIS_PASSWORD: str | None = Field(default=None, description="Redis password (if required)")
    REDIS_SSL: bool = Field(default=False, description="Connect over TLS")
    REDIS_SOCKET_TIMEOUT: float = Field(default=REDIS_SOCKET_TIMEOUT, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(
        default=REDIS_SOCKET_CONNECT_TIMEOUT, description="Connection timeout in seconds"
    )
    REDIS_RECONNECT_ATTEMPTS: int = Field(default=RECONNECT_ATTEMPTS, ge=0, description="Reconnect attempts")
    REDIS_RECONNECT_BACKOFF_BASE: float = Field(default=RECONNECT_BACKOFF_BASE, gt=0, description="First reconnect delay")
    REDIS_RECONNECT_BACKOFF_CAP: float = Field(default=RECONNECT_BACKOFF_CAP, gt=0, description="Longest reconnect delay")

    # Cache settings
    CACHE_DEFAULT_EXPIRY: int = Field(default=DEFAULT_EXPIRY_SECONDS, gt=0, description="Default TTL in seconds")
    CACHE_EXPIRY_ENABLED: bool = Field(default=True, description="Apply default TTL to writes")

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @property
    def redis(self) -> RedisSettings:
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOST=self.REDIS_HOST,
            REDIS_PORT=self.REDIS_PORT,
            REDIS_DB=self.REDIS_DB,
            REDIS_USERNAME=self.REDIS_USERNAME,
            REDIS_PASSWORD=self.REDIS_PASSWORD,
            REDIS_SSL=self.REDIS_SSL,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_RECONNECT_ATTEMPTS=self.REDIS_RECONNECT_ATTEMPTS,
            REDIS_RECONNECT_BACKOFF_BASE=self.REDIS_RECONNECT_BACKOFF_BASE,
            REDIS_RECONNECT_BACKOFF_CAP=self.REDIS_RECONNECT_BACKOFF_CAP,
        )

    @property
    def cache(self) -> CacheSettings:
        """Get cache settings."""
        return CacheSettings(
            CACHE_DEFAULT_EXPIRY=self.CACHE_DEFAULT_EXPIRY,
            CACHE_EXPIRY_ENABLED=self.CACHE_EXPIRY_ENABLED,
        )

    @property
    def logging(self) -> LoggingSettings:
        """Get logging settings."""
        return LoggingSettings(LOG_LEVEL=self.LOG_LEVEL, LOG_FORMAT=self.LOG_FORMAT)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra environment variables
    )


# Global settings instance (created lazily)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance.

    STAGE-0.3: Settings initialization

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
