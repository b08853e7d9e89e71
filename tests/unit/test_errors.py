"""Unit tests for the errors module."""

import time

import pytest

from dnp_audit.models.policy import Violation, ViolationKind
from dnp_audit.utils.errors import (
    ComposeRejectedError,
    ConfigurationError,
    DnpAuditError,
    NetworkError,
    PackageFileNotFoundError,
    ValidationError,
    retry,
)


class TestDnpAuditError:
    """Tests for base DnpAuditError."""

    def test_basic_error(self):
        """Test basic error creation."""
        error = DnpAuditError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "UNKNOWN_ERROR"
        assert error.details == {}

    def test_to_audit_error(self):
        """Test conversion to AuditError model."""
        error = DnpAuditError("Test error", code="TEST_ERROR", details={"key": "value"})
        audit_error = error.to_audit_error()

        assert audit_error.code == "TEST_ERROR"
        assert audit_error.message == "Test error"
        assert audit_error.details == {"key": "value"}
        assert str(audit_error) == "[TEST_ERROR] Test error"


class TestComposeRejectedError:
    """Tests for the aggregate rejection."""

    def test_message_joins_violations(self):
        violations = [
            Violation(kind=ViolationKind.VERSION_TOO_LOW, message="version"),
            Violation(kind=ViolationKind.BIND_MOUNT_NOT_ALLOWED, message="volume", service="app"),
        ]
        error = ComposeRejectedError("app.dnp.dappnode.eth", violations)

        assert str(error) == "version\nvolume"
        assert error.violations == violations
        assert error.details["violations"] == ["VersionTooLow", "BindMountNotAllowed"]
        assert isinstance(error, DnpAuditError)


class TestSpecificErrors:
    """Tests for the error subclasses."""

    def test_file_not_found(self):
        error = PackageFileNotFoundError("/pkg/docker-compose.yml")
        assert "/pkg/docker-compose.yml" in str(error)
        assert error.code == "FILE_NOT_FOUND"

    def test_validation_error_with_field(self):
        error = ValidationError("Must be a mapping", field="docker-compose.yml")
        assert error.code == "VALIDATION_ERROR"
        assert error.details["field"] == "docker-compose.yml"

    def test_configuration_error(self):
        error = ConfigurationError("Invalid value", config_key="output.color")
        assert error.code == "CONFIG_ERROR"
        assert error.details["config_key"] == "output.color"

    def test_network_error(self):
        error = NetworkError("Failed to connect", url="http://172.33.1.7:7000")
        assert error.code == "NETWORK_ERROR"
        assert error.details["url"] == "http://172.33.1.7:7000"


class TestRetryDecorator:
    """Tests for retry decorator."""

    def test_retry_succeeds_first_time(self):
        call_count = 0

        @retry(max_attempts=3, delay=0.01)
        def successful_func():
            nonlocal call_count
            call_count += 1
            return "success"

        assert successful_func() == "success"
        assert call_count == 1

    def test_retry_on_failure(self):
        call_count = 0

        @retry(max_attempts=3, delay=0.01)
        def failing_func():
            nonlocal call_count
            call_count += 1
            if call_count < 3:
                raise ValueError("Not yet")
            return "success"

        assert failing_func() == "success"
        assert call_count == 3

    def test_retry_exhausted(self):
        call_count = 0

        @retry(max_attempts=3, delay=0.01)
        def always_fails():
            nonlocal call_count
            call_count += 1
            raise ValueError("Always fails")

        with pytest.raises(ValueError, match="Always fails"):
            always_fails()
        assert call_count == 3

    def test_retry_specific_exceptions(self):
        call_count = 0

        @retry(max_attempts=3, delay=0.01, exceptions=(ValueError,))
        def fails_with_type_error():
            nonlocal call_count
            call_count += 1
            raise TypeError("Wrong type")

        with pytest.raises(TypeError):
            fails_with_type_error()
        assert call_count == 1

    def test_retry_backoff(self):
        timestamps = []

        @retry(max_attempts=3, delay=0.05, backoff=2.0)
        def fails_twice():
            timestamps.append(time.time())
            if len(timestamps) < 3:
                raise ValueError("Not yet")
            return "success"

        assert fails_twice() == "success"
        assert timestamps[1] - timestamps[0] >= 0.04
        assert timestamps[2] - timestamps[1] >= 0.08
