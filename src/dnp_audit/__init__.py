"""dnp-audit: policy validation for third-party package compose files.

Packages are authored by third parties and run on a shared, managed host
fleet. Before a package is built, uploaded or installed, its compose file is
checked against a fixed security whitelist:

- **Compose version**: minimum supported compose file format
- **Networks**: only whitelisted, external docker networks
- **Service keys**: only safe compose keys
- **Service values**: DNS, PID namespace, privileged and host network mode
- **Volumes**: no bind mounts for non-core packages

Usage:
    from dnp_audit import ComposeValidator, read_compose, read_manifest

    compose = read_compose("./my-package")
    manifest = read_manifest("./my-package")

    result = ComposeValidator().validate(compose, manifest)
    for violation in result.violations:
        print(violation.kind.value, violation.message)

    # Raise ComposeRejectedError listing every violation
    result.raise_for_violations()

CLI:
    dnp-audit validate --dir <package-dir>
    dnp-audit params
"""

__version__ = "0.1.0"

# Core
from dnp_audit.core.validator import ComposeValidator, validate_dappnode_compose
from dnp_audit.core.collector import ViolationCollector

# Models
from dnp_audit.models.compose import Compose, ComposeNetwork, ComposeService
from dnp_audit.models.manifest import Manifest
from dnp_audit.models.policy import ValidationResult, Violation, ViolationKind

# Policy
from dnp_audit.knowledge.policy import PolicyParams, get_policy_params

# Files
from dnp_audit.files import read_compose, read_manifest

# Errors
from dnp_audit.utils.errors import ComposeRejectedError, DnpAuditError

__all__ = [
    # Version
    "__version__",
    # Core
    "ComposeValidator",
    "ViolationCollector",
    "validate_dappnode_compose",
    # Models
    "Compose",
    "ComposeNetwork",
    "ComposeService",
    "Manifest",
    "ValidationResult",
    "Violation",
    "ViolationKind",
    # Policy
    "PolicyParams",
    "get_policy_params",
    # Files
    "read_compose",
    "read_manifest",
    # Errors
    "ComposeRejectedError",
    "DnpAuditError",
]
