"""Compose policy violation and result models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class ViolationKind(str, Enum):
    """Kind of a compose policy violation."""

    VERSION_TOO_LOW = "VersionTooLow"
    NETWORK_NOT_WHITELISTED = "NetworkNotWhitelisted"
    NETWORK_NOT_EXTERNAL = "NetworkNotExternal"
    SERVICE_KEY_NOT_ALLOWED = "ServiceKeyNotAllowed"
    DNS_MISMATCH = "DnsMismatch"
    PID_UNSAFE = "PidUnsafe"
    PRIVILEGED_NOT_ALLOWED = "PrivilegedNotAllowed"
    NETWORK_MODE_HOST_NOT_ALLOWED = "NetworkModeHostNotAllowed"
    SERVICE_NETWORK_NOT_WHITELISTED = "ServiceNetworkNotWhitelisted"
    RESERVED_ALIAS_USED = "ReservedAliasUsed"
    VOLUME_MISSING_TOP_LEVEL_DEFINITION = "VolumeMissingTopLevelDefinition"
    VOLUME_NAME_MISSING = "VolumeNameMissing"
    BIND_MOUNT_NOT_ALLOWED = "BindMountNotAllowed"


class Violation(BaseModel):
    """A single compose policy violation."""

    model_config = {"frozen": True}

    kind: ViolationKind = Field(description="Violation kind")
    message: str = Field(description="Human-readable violation message")
    service: str | None = Field(default=None, description="Offending service, if any")

    def __str__(self) -> str:
        return self.message


class ValidationResult(BaseModel):
    """Result of validating a compose file against the package policy."""

    model_config = {"frozen": True}

    dnp_name: str = Field(description="Package that was validated")
    is_core: bool = Field(default=False, description="Whether the package is a core package")
    violations: list[Violation] = Field(
        default_factory=list,
        description="All violations found, in rule evaluation order",
    )

    @property
    def passed(self) -> bool:
        """True when no violation was found."""
        return not self.violations

    @property
    def message(self) -> str:
        """All violation messages joined by newlines."""
        return "\n".join(v.message for v in self.violations)

    def violations_by_kind(self, kind: ViolationKind) -> list[Violation]:
        """Get violations of a specific kind."""
        return [v for v in self.violations if v.kind == kind]

    def violations_by_service(self, service: str) -> list[Violation]:
        """Get violations for a specific service."""
        return [v for v in self.violations if v.service == service]

    def raise_for_violations(self) -> None:
        """Raise the aggregate rejection if any violation was found.

        Raises:
            ComposeRejectedError: If the result did not pass
        """
        from dnp_audit.utils.errors import ComposeRejectedError

        if self.violations:
            raise ComposeRejectedError(self.dnp_name, self.violations)
