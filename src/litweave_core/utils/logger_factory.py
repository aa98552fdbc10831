"""
Logger Factory - Convenience wrapper for LoggingService.

Provides get_logger()/configure_logging() so that modules do not need to
import LoggingService directly.

License: MIT
"""

from typing import Any, Optional

from litweave_core.config import LitweaveSettings
from litweave_core.logging_service import LoggingService


def get_logger(name: str) -> Any:
    """
    Get a module/component-specific logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog BoundLogger

    Raises:
        RuntimeError: If logging not configured yet (call configure_logging() first)
    """
    return LoggingService.get_logger(name)


def configure_logging(
    level: Optional[str] = None,
    format: Optional[str] = None,
    settings: Optional[LitweaveSettings] = None,
) -> None:
    """
    Configure structured logging.

    Missing ``level``/``format`` values are taken from ``settings`` (or from a
    freshly loaded LitweaveSettings, which honours ``LITWEAVE_LOG_LEVEL`` and
    ``LITWEAVE_LOG_FORMAT``).

    Raises:
        ValueError: If level or format is invalid
        RuntimeError: If called after logging already configured
    """
    if level is None or format is None:
        settings = settings or LitweaveSettings()
        level = level or settings.log_level
        format = format or settings.log_format

    LoggingService.configure_logging(level=level, format=format)
