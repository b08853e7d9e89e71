"""Utility functions for dnp-audit."""

from dnp_audit.utils.logging import configure_logging, get_logger, get_logger_with_context
from dnp_audit.utils.errors import (
    DnpAuditError,
    ComposeRejectedError,
    PackageFileNotFoundError,
    ValidationError,
    ConfigurationError,
    NetworkError,
    retry,
)
from dnp_audit.utils.config import (
    DnpAuditConfig,
    EndToEndConfig,
    FilesConfig,
    OutputConfig,
    load_config,
    save_config,
    get_config,
    set_config,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "DnpAuditError",
    "ComposeRejectedError",
    "PackageFileNotFoundError",
    "ValidationError",
    "ConfigurationError",
    "NetworkError",
    "retry",
    # Config
    "DnpAuditConfig",
    "EndToEndConfig",
    "FilesConfig",
    "OutputConfig",
    "load_config",
    "save_config",
    "get_config",
    "set_config",
]
