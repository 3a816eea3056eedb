"""Shared CLI utilities."""

from __future__ import annotations

from rich.console import Console

from partman_wizard.core.config import Settings
from partman_wizard.core.logging import configure_logging

# Shared console instance
console = Console()


def setup_logging(settings: Settings) -> None:
    """Configure structured logging from settings.

    Timestamps are only shown once the operator asked for more than warnings.
    """
    configure_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
        show_timestamps=settings.log_level.upper() in ("DEBUG", "INFO"),
        color=settings.log_format == "console",
    )
