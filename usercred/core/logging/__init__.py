"""
Logging configuration module for structured logging.

This module configures the application's logging system using structlog,
with JSON output for production and human-readable console output for
development.

Callers log through ``structlog.get_logger(__name__)`` and bind per-operation
context (``operation``, ``correlation_id``). Usernames and emails are masked
before they reach a log line, and passwords or password hashes are never
passed to a logger.
"""

import logging
import sys

import structlog

from usercred.core.config.settings import settings


def configure_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configures the application's logging system.

    This function sets up structlog with:
    1. ISO format timestamps
    2. Log level and logger name inclusion
    3. JSON formatting for production (``json_logs=True``)
    4. Console formatting for development
    5. Standard library logger factory so third-party logs share the stream
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
        force=True,
    )
    logging.getLogger("passlib").setLevel(logging.ERROR)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def configure_from_settings() -> None:
    """Configures logging from the application settings."""
    configure_logging(log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)


logger = structlog.get_logger()
