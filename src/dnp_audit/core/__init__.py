"""Core domain logic for dnp-audit.

This module provides the compose policy validation engine.
"""

from dnp_audit.core.collector import ViolationCollector
from dnp_audit.core.rules import (
    SERVICE_RULES,
    TOP_LEVEL_RULES,
    check_compose_networks,
    check_compose_version,
    check_service_keys,
    check_service_networks,
    check_service_values,
    check_service_volumes,
)
from dnp_audit.core.validator import ComposeValidator, validate_dappnode_compose

__all__ = [
    "ComposeValidator",
    "ViolationCollector",
    "validate_dappnode_compose",
    # Rules
    "SERVICE_RULES",
    "TOP_LEVEL_RULES",
    "check_compose_networks",
    "check_compose_version",
    "check_service_keys",
    "check_service_networks",
    "check_service_values",
    "check_service_volumes",
]
