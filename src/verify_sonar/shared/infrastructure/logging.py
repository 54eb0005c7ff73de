"""
Structured logging configuration using structlog.

Provides consistent, structured logging across all modules. Logs go to
stderr so they never mix with the findings printed on stdout.
"""

import logging
import sys
from typing import Any

import structlog

from verify_sonar.shared.infrastructure.config import Settings


def configure_logging(
    settings: Settings,
    stream: Any = sys.stderr,
    level: str | None = None,
) -> None:
    """
    Configure structlog for the application.

    Sets up:
    - Pretty console output for development
    - JSON output otherwise
    - Log level from settings, unless overridden by ``level``

    Nothing is read from the environment here; pass the result of
    load_settings().
    """
    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if settings.is_development:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=stream.isatty() if hasattr(stream, "isatty") else False),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, (level or settings.log_level).upper(), logging.WARNING),
        force=True,  # Force reconfiguration in case it was already set
    )


def get_logger(name: str) -> Any:
    """
    Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("bridge_connected", port=64120)
    """
    return structlog.get_logger(name)
