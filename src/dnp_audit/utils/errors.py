"""Error handling utilities for dnp-audit."""

from __future__ import annotations

import functools
import time
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from dnp_audit.models.common import AuditError

if TYPE_CHECKING:
    from dnp_audit.models.policy import Violation

T = TypeVar("T")


class DnpAuditError(Exception):
    """Base exception for dnp-audit."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_audit_error(self) -> AuditError:
        """Convert to AuditError model."""
        return AuditError(code=self.code, message=self.message, details=self.details)


class ComposeRejectedError(DnpAuditError):
    """A compose file broke one or more package policy rules.

    The message lists every violation, one per line.
    """

    def __init__(self, dnp_name: str, violations: list["Violation"]):
        self.violations = list(violations)
        super().__init__(
            "\n".join(v.message for v in self.violations),
            code="COMPOSE_REJECTED",
            details={
                "dnp_name": dnp_name,
                "violations": [v.kind.value for v in self.violations],
            },
        )


class PackageFileNotFoundError(DnpAuditError):
    """A package file was not found."""

    def __init__(self, path: str):
        super().__init__(
            f"Package file not found: {path}",
            code="FILE_NOT_FOUND",
            details={"path": path},
        )


class ValidationError(DnpAuditError):
    """Validation failed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class ConfigurationError(DnpAuditError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)


class NetworkError(DnpAuditError):
    """Network operation failed."""

    def __init__(self, message: str, url: str | None = None):
        details = {"url": url} if url else {}
        super().__init__(message, code="NETWORK_ERROR", details=details)


def retry(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to retry a function on failure.

    Args:
        max_attempts: Maximum number of attempts
        delay: Initial delay between retries in seconds
        backoff: Multiplier for delay after each retry
        exceptions: Tuple of exceptions to catch and retry

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception: Exception | None = None
            current_delay = delay

            for attempt in range(max_attempts):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e
                    if attempt < max_attempts - 1:
                        time.sleep(current_delay)
                        current_delay *= backoff

            if last_exception:
                raise last_exception
            raise RuntimeError("Retry failed without exception")

        return wrapper

    return decorator

