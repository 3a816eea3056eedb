"""Structured logging for the wizard.

Logs go to stderr so they never interleave with the interactive prompts
rendered on stdout.

Usage:
    from partman_wizard.core.logging import get_logger, log_context

    logger = get_logger(__name__)

    with log_context(source_table="events", destination_table="events_partitioned"):
        logger.info("data_migrated")
"""

from __future__ import annotations

import logging
import sys
from contextlib import AbstractContextManager
from typing import Any, cast

import structlog
from structlog.typing import FilteringBoundLogger, Processor


def _renderer(log_format: str, color: bool) -> list[Processor]:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=color,
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    log_level: str = "WARNING",
    log_format: str = "console",
    show_timestamps: bool = True,
    color: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR (case-insensitive)
        log_format: "console" for terminals, "json" for log shipping
        show_timestamps: Prefix events with an ISO timestamp
        color: Colour console output
    """
    level = getattr(logging, log_level.upper())

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
    ]
    if show_timestamps:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    structlog.configure(
        processors=processors + _renderer(log_format, color),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # SQLAlchemy and psycopg log through the stdlib
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    return cast(FilteringBoundLogger, structlog.get_logger(name))


def log_context(**context: Any) -> AbstractContextManager[None]:
    """Bind *context* to every event logged inside the ``with`` block."""
    return cast(AbstractContextManager[None], structlog.contextvars.bound_contextvars(**context))


configure_logging()
