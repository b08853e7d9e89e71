"""Logging setup for dnp-audit.

All loggers live under the ``dnp_audit`` namespace and write to stderr so
that reports printed on stdout stay machine readable.
"""

import logging
import sys
from typing import Any

ROOT_LOGGER = "dnp_audit"


class StructuredFormatter(logging.Formatter):
    """Formatter that appends context fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        fields = getattr(record, "context", None)
        if not fields:
            return message
        pairs = " ".join(f"{k}={v}" for k, v in sorted(fields.items()))
        return f"{message} {pairs}"


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    structured: bool = False,
) -> None:
    """Configure the dnp-audit logger hierarchy.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_string: Custom format string
        structured: Include timestamps, logger names and context fields
    """
    if format_string is None:
        format_string = (
            "%(asctime)s %(levelname)s %(name)s %(message)s" if structured else "%(levelname)s: %(message)s"
        )

    handler = logging.StreamHandler(sys.stderr)
    formatter_cls = StructuredFormatter if structured else logging.Formatter
    handler.setFormatter(formatter_cls(format_string))

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = [handler]
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger below the dnp_audit namespace.

    Args:
        name: Module name, prefixed with ``dnp_audit.`` when missing

    Returns:
        The logger
    """
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


class ContextAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches fixed context fields to every record."""

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra["context"] = {**self.extra, **extra.get("context", {})}
        kwargs["extra"] = extra
        return msg, kwargs


def get_logger_with_context(name: str, **context: Any) -> ContextAdapter:
    """Get a logger that tags every message with context fields.

    Args:
        name: Module name
        **context: Context fields such as ``dnp_name``

    Returns:
        ContextAdapter wrapping the module logger
    """
    return ContextAdapter(get_logger(name), context)
