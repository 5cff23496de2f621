"""Centralized logging configuration.

Sets up structured JSON output with render ID support and provides the
logger objects injected into sparkline instances.

Example:
    >>> from libs.common.logging.config import configure_logging, get_sparkline_logger
    >>> configure_logging(source_name="sparklines", log_level="INFO")
    >>> logger = get_sparkline_logger("revenue-trend")
    >>> logger.warning("Cannot draw sparklines without values")
"""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any, Optional

from config.settings import get_settings
from libs.common.logging.context import get_render_id
from libs.common.logging.formatter import JSONFormatter

SPARKLINES_LOGGER_NAME = "libs.sparklines"


class RenderIDFilter(logging.Filter):
    """Logging filter that adds the current render ID to log records.

    Example:
        >>> from libs.common.logging.context import RenderContext
        >>> handler.addFilter(RenderIDFilter())
        >>> with RenderContext("render-1"):
        ...     logger.info("drawn")  # record.render_id == "render-1"
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """Add render ID to the log record.

        Returns:
            True (always allows the record through)
        """
        record.render_id = get_render_id()
        return True


class SparklineLoggerAdapter(logging.LoggerAdapter):  # type: ignore[type-arg]
    """Logger adapter that tags every record with the sparkline id.

    The sparkline id is merged into the ``context`` dict, keeping any context
    fields the caller passes through ``extra``.
    """

    def __init__(self, logger: logging.Logger, sparkline_id: str | None = None) -> None:
        super().__init__(logger, {"sparkline_id": sparkline_id})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        context = dict(extra.get("context") or {})
        context.setdefault("sparkline_id", (self.extra or {}).get("sparkline_id"))
        extra["context"] = context
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(
    source_name: str = "sparklines",
    log_level: Optional[str] = None,
    include_context: bool = True,
) -> logging.Logger:
    """Configure structured JSON logging.

    Sets up the root logger with JSON formatted output to stdout and render
    ID injection on all records. Call once at application startup.

    Args:
        source_name: Name reported in the "source" field
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL),
            defaults to SPARKLINES_LOG_LEVEL
        include_context: Whether to include context dict in output

    Returns:
        Configured root logger instance

    Raises:
        ValueError: If log_level is invalid
    """
    if log_level is None:
        log_level = get_settings().log_level
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(
        JSONFormatter(
            source_name=source_name,
            include_context=include_context,
        )
    )
    handler.addFilter(RenderIDFilter())

    root_logger.addHandler(handler)

    return root_logger


def get_sparkline_logger(sparkline_id: str | None = None) -> SparklineLoggerAdapter:
    """Get the default logger injected into a sparkline instance.

    Args:
        sparkline_id: Id of the chart instance, reported in the log context

    Returns:
        Adapter over the "libs.sparklines" logger
    """
    return SparklineLoggerAdapter(logging.getLogger(SPARKLINES_LOGGER_NAME), sparkline_id)


def get_silent_logger() -> logging.Logger:
    """Get a logger that discards everything.

    The logger is not registered with the logging manager, so it never
    propagates to handlers configured elsewhere.
    """
    silent = logging.Logger(f"{SPARKLINES_LOGGER_NAME}.silent")
    silent.addHandler(logging.NullHandler())
    silent.propagate = False
    return silent


def log_with_context(
    logger: logging.Logger | logging.LoggerAdapter,  # type: ignore[type-arg]
    level: str,
    message: str,
    **context_fields: object,
) -> None:
    """Log a message with additional context fields.

    Example:
        >>> log_with_context(logger, "WARNING", "Line had no points", segment=2)
        # Output includes: "context": {"segment": 2, ...}
    """
    log_method = getattr(logger, level.lower())
    log_method(message, extra={"context": context_fields})
