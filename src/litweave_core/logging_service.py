"""
LoggingService - Centralized structured logging for litweave.

Provides consistent, machine-readable logging across all modules using
structlog. Logs go to stderr so that generated output written to stdout or
files is never interleaved with log lines.

License: MIT
"""

import logging
import sys
import traceback
from dataclasses import dataclass
from typing import Any, Dict, Optional

import structlog
from structlog.types import Processor

_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
_FORMATS = ["json", "console"]


@dataclass
class LoggingConfig:
    """
    Configuration for LoggingService.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("json" or "console")
        output_stream: Output destination (default: sys.stderr at configure time)
    """

    level: str = "INFO"
    format: str = "json"
    output_stream: Any = None


class LoggingService:
    """
    Centralized structured logging service using structlog.

    Example:
        # Setup logging once at startup
        LoggingService.configure_logging(level="INFO", format="console")

        # Get logger for a module
        logger = LoggingService.get_logger("litweave_cli.pipeline")

        logger.info("document_processed", file_path="hello.py.lit", duration_ms=3.2)
    """

    _configured: bool = False
    _log_level: str = "INFO"
    _config: Optional[LoggingConfig] = None
    _loggers: Dict[str, Any] = {}

    @classmethod
    def configure_logging(
        cls, level: str = "INFO", format: str = "json", config: Optional[LoggingConfig] = None
    ) -> None:
        """
        Configure global structured logging.

        This should be called ONCE at application startup before any logging.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            format: Output format ("json" or "console")
            config: Optional LoggingConfig overriding level and format

        Raises:
            ValueError: If level or format is invalid
            RuntimeError: If called after logging already configured
        """
        if cls._configured:
            raise RuntimeError("Logging already configured")

        if config is not None:
            cfg = config
        else:
            level_upper = level.upper()
            if level_upper not in _LEVELS:
                raise ValueError(
                    f"Invalid log level: {level}. Must be one of: {', '.join(_LEVELS)}"
                )

            format_lower = format.lower()
            if format_lower not in _FORMATS:
                raise ValueError(f"Invalid format: {format}. Must be 'json' or 'console'")

            cfg = LoggingConfig(level=level_upper, format=format_lower)

        cls._config = cfg
        cls._log_level = cfg.level

        structlog.configure(
            processors=cls._setup_processors(),
            wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, cfg.level)),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=cfg.output_stream or sys.stderr),
            cache_logger_on_first_use=False,
        )

        cls._configured = True

    @classmethod
    def is_configured(cls) -> bool:
        return cls._configured

    @classmethod
    def reset(cls) -> None:
        """Forget the current configuration so that it can be configured again."""
        cls._configured = False
        cls._log_level = "INFO"
        cls._config = None
        cls._loggers = {}
        structlog.reset_defaults()

    @classmethod
    def get_logger(cls, name: str) -> Any:
        """
        Get a module/component-specific logger.

        Returns a cached logger if already created.

        Raises:
            RuntimeError: If logging not configured yet
            ValueError: If name is empty or too long
        """
        if not cls._configured:
            raise RuntimeError("Logging not configured. Call configure_logging() first.")

        if not name:
            raise ValueError("Logger name cannot be empty")

        if len(name) > 200:
            raise ValueError("Logger name exceeds maximum length (200)")

        if name in cls._loggers:
            return cls._loggers[name]

        logger = structlog.get_logger(name)
        cls._loggers[name] = logger
        return logger

    @classmethod
    def log_error(
        cls,
        error: Exception,
        context: Optional[Dict[str, Any]] = None,
        logger_name: str = "litweave",
        include_stack_trace: bool = False,
    ) -> None:
        """
        Log an error with its code, correlation id and optional stack trace.

        Example:
            try:
                processor.process_file(path, options)
            except LitweaveError as e:
                LoggingService.log_error(e, context={"file_path": str(path)})
        """
        logger = cls.get_logger(logger_name)

        log_context: Dict[str, Any] = {
            "error_type": type(error).__name__,
            "error_message": str(error),
        }

        error_code = getattr(error, "error_code", None)
        if error_code:
            log_context["error_code"] = error_code

        correlation_id = getattr(error, "correlation_id", None)
        if correlation_id:
            log_context["correlation_id"] = correlation_id

        if context:
            log_context.update(context)

        if include_stack_trace:
            log_context["stack_trace"] = traceback.format_exc()

        logger.error("error_occurred", **log_context)

    @classmethod
    def log_performance(
        cls,
        operation: str,
        duration_ms: float,
        metadata: Optional[Dict[str, Any]] = None,
        logger_name: str = "litweave",
    ) -> None:
        """
        Log the duration of an operation.

        Raises:
            ValueError: If operation is empty or duration_ms < 0
        """
        if not operation:
            raise ValueError("operation cannot be empty")

        if duration_ms < 0:
            raise ValueError("duration_ms cannot be negative")

        logger = cls.get_logger(logger_name)

        context: Dict[str, Any] = {
            "operation": operation,
            "duration_ms": round(duration_ms, 3),
        }
        if metadata:
            context.update(metadata)

        logger.info("performance_metric", **context)

    @classmethod
    def _setup_processors(cls) -> list[Processor]:
        """
        Setup structlog processors based on configuration.

        Processors (in order):
            1. add_log_level
            2. TimeStamper (ISO)
            3. StackInfoRenderer
            4. format_exc_info
            5. JSONRenderer or ConsoleRenderer
        """
        processors: list[Processor] = [
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if cls._config and cls._config.format == "console":
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        else:
            processors.append(structlog.processors.JSONRenderer())

        return processors
