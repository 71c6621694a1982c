"""Structured logging configuration for the market list application.

Uses structlog for structured, context-rich logging that supports
both human-readable console output and machine-readable JSON format.
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from market_list.config import Settings


def configure_logging(settings: "Settings | None" = None) -> None:
    """Configure structured logging based on settings.

    Args:
        settings: Application settings. If None, uses defaults.
    """
    log_level = logging.WARNING
    log_format = "console"

    if settings is not None:
        log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
        log_format = settings.log_format

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # prompt_toolkit and asyncio go through the standard library
    logging.basicConfig(
        format="%(message)s",
        level=log_level,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Optional logger name (typically __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_context(**kwargs: object) -> None:
    """Bind context variables to all subsequent log calls in the current context.

    Example:
        bind_context(tasks_key="tasks")
        logger.info("tasks_loaded")  # Will include tasks_key
    """
    structlog.contextvars.bind_contextvars(**kwargs)


class Loggers:
    """Pre-configured logger instances for application components."""

    @staticmethod
    def cli() -> structlog.stdlib.BoundLogger:
        """Logger for the terminal front end."""
        return get_logger("market_list.cli")

    @staticmethod
    def store() -> structlog.stdlib.BoundLogger:
        """Logger for the task store."""
        return get_logger("market_list.tasks")

    @staticmethod
    def persistence() -> structlog.stdlib.BoundLogger:
        """Logger for key-value persistence."""
        return get_logger("market_list.persistence")
