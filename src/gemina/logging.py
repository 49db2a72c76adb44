"""Structured logging configuration."""

import logging
import sys
from typing import Any

import structlog

SENSITIVE_FIELDS = (
    "api_key",
    "authorization",
    "file",
)


def configure_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure structured logging.

    Args:
        log_level: Standard level name, e.g. "INFO" or "DEBUG".
        log_format: "json" for machine-readable lines, anything else for
            the colored console renderer.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        filter_sensitive_data,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def filter_sensitive_data(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Redact credentials and inline document payloads from log events."""
    for field in SENSITIVE_FIELDS:
        if field in event_dict:
            event_dict[field] = "[REDACTED]"

    return event_dict
