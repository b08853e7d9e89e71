"""Data models for dnp-audit.

All models are Pydantic BaseModel with frozen=True for immutability.
"""

from dnp_audit.models.common import AuditError
from dnp_audit.models.compose import (
    Compose,
    ComposeNetwork,
    ComposeService,
    NetworkByName,
    NetworkDetailed,
    NetworkReference,
    parse_network_reference,
)
from dnp_audit.models.manifest import Manifest
from dnp_audit.models.policy import ValidationResult, Violation, ViolationKind

__all__ = [
    # Common
    "AuditError",
    # Compose
    "Compose",
    "ComposeNetwork",
    "ComposeService",
    "NetworkByName",
    "NetworkDetailed",
    "NetworkReference",
    "parse_network_reference",
    # Manifest
    "Manifest",
    # Policy
    "ValidationResult",
    "Violation",
    "ViolationKind",
]
