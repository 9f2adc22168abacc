"""
Unit Tests for Core Exceptions
"""

import pytest
from redis.exceptions import ConnectionError, ResponseError

from cachelink.core.exceptions import (
    CacheConnectionError,
    CacheError,
    CacheLinkError,
    CacheNotConnectedError,
    ConfigurationError,
    ConfigurationMissingError,
    StoreOperationError,
)


@pytest.mark.unit
class TestCacheLinkError:
    """Test the base exception class."""

    def test_base_error_creation(self):
        error = CacheLinkError("Test message")
        assert str(error) == "Test message"

    def test_base_error_default_values(self):
        error = CacheLinkError("Test")
        assert error.details == {}
        assert error.correlation_id is None

    def test_details_are_copied(self):
        details = {"key": "user:1"}
        error = CacheLinkError("Test", details=details)
        details["key"] = "changed"

        assert error.details == {"key": "user:1"}

    def test_to_dict(self):
        error = CacheLinkError("Test", correlation_id="req-1", details={"key": "user:1"})

        assert error.to_dict() == {
            "error_type": "CacheLinkError",
            "message": "Test",
            "correlation_id": "req-1",
            "details": {"key": "user:1"},
        }

    def test_repr(self):
        error = CacheLinkError("Timeout", correlation_id="req-1", details={"timeout": 5})

        assert repr(error) == "CacheLinkError(message='Timeout', correlation_id='req-1', details={'timeout': 5})"

    def test_from_exception(self):
        original = ConnectionError("Connection refused")

        error = CacheConnectionError.from_exception(original, host="localhost", port=6379)

        assert isinstance(error, CacheConnectionError)
        assert error.message == "Connection refused"
        assert error.details == {
            "original_error": "ConnectionError",
            "original_message": "Connection refused",
            "host": "localhost",
            "port": 6379,
        }


@pytest.mark.unit
class TestHierarchy:
    """Test exception inheritance."""

    @pytest.mark.parametrize(
        "error_class, parent",
        [
            (ConfigurationError, CacheLinkError),
            (ConfigurationMissingError, ConfigurationError),
            (CacheError, CacheLinkError),
            (CacheConnectionError, CacheError),
            (CacheNotConnectedError, CacheError),
            (StoreOperationError, CacheError),
        ],
    )
    def test_inheritance(self, error_class, parent):
        assert issubclass(error_class, parent)


@pytest.mark.unit
class TestStoreOperationError:
    """Test the driver-error carrying exception."""

    def test_keeps_original_error(self):
        original = ResponseError("WRONGTYPE")

        error = StoreOperationError("Redis GET failed: WRONGTYPE", original_error=original, details={"key": "k"})

        assert error.original_error is original
        assert error.details == {"key": "k"}

    def test_original_error_defaults_to_none(self):
        assert StoreOperationError("failed").original_error is None
