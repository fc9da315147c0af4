"""Structured logging for wirebox.

Container events go through structlog on top of the standard
``logging`` module, so they stay silent until the application
raises the level of the ``wirebox`` loggers.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from wirebox.settings import ContainerSettings


def _configure_structlog(renderer: structlog.types.Processor) -> None:
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module loggers are created at import; keep them following reconfiguration.
        cache_logger_on_first_use=False,
    )


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Send container events to stderr.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Whether to output JSON instead of console lines
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper()),
        force=True,
    )
    if json_output:
        _configure_structlog(structlog.processors.JSONRenderer())
    else:
        _configure_structlog(structlog.dev.ConsoleRenderer())


def configure_from_settings(settings: ContainerSettings) -> None:
    """Configure logging from ``log_level`` and ``json_logs``."""
    configure_logging(level=settings.log_level, json_output=settings.json_logs)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    # Leave an application's own structlog setup alone.
    if not structlog.is_configured():
        _configure_structlog(structlog.processors.KeyValueRenderer())
    return structlog.get_logger(name)
