"""Structured logging setup for cockpitbind.

Uses structlog for structured, colorful logging output.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import Processor

from cockpitbind.config import Settings, get_settings


def setup_logger(
    level: str = "INFO",
    json_output: bool = False,
) -> None:
    """Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_output: If True, output JSON format. Otherwise, colorful console output.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper()),
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_output:
        # Machine readable output for the simulator log
        processors: list[Processor] = shared_processors + [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure logging from the app settings.

    Args:
        settings: Settings to read. If None, uses the global settings.
    """
    settings = settings or get_settings()
    setup_logger(level=settings.app.log_level, json_output=settings.app.json_logs)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Optional logger name. If None, uses the calling module's name.

    Returns:
        Configured structlog logger.
    """
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


def log_dispatch_event(event: str, command: Any, **kwargs) -> None:
    """Log a dispatch-related event.

    Args:
        event: Event name (dispatch_direct, dispatch_cycle, dispatch_unhandled, etc.).
        command: Command id the event arrived with.
        **kwargs: Additional event data.
    """
    logger = get_logger("dispatch")
    logger.debug(event, command=command, **kwargs)


def log_error(error: Exception, context: Optional[dict] = None) -> None:
    """Log an error with context.

    Args:
        error: The exception that occurred.
        context: Optional additional context.
    """
    logger = get_logger("errors")
    logger.error(
        "error_occurred",
        error_type=type(error).__name__,
        error_message=str(error),
        **(context or {}),
    )
