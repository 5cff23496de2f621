"""Centralized structured logging library.

Structured JSON logging with render ID support for correlating all log
records of one sparkline render.

Usage:
    # At application startup
    from libs.common.logging import configure_logging
    configure_logging(source_name="sparklines", log_level="INFO")

    # Per chart instance
    from libs.common.logging import get_sparkline_logger, log_with_context
    logger = get_sparkline_logger("revenue-trend")
    log_with_context(logger, "WARNING", "Line had no points", segment=2)
"""

from libs.common.logging.config import (
    SPARKLINES_LOGGER_NAME,
    RenderIDFilter,
    SparklineLoggerAdapter,
    configure_logging,
    get_silent_logger,
    get_sparkline_logger,
    log_with_context,
)
from libs.common.logging.context import (
    RenderContext,
    clear_render_id,
    generate_render_id,
    get_render_id,
    set_render_id,
)
from libs.common.logging.formatter import JSONFormatter

__all__ = [
    # Configuration
    "SPARKLINES_LOGGER_NAME",
    "configure_logging",
    "get_sparkline_logger",
    "get_silent_logger",
    "log_with_context",
    "RenderIDFilter",
    "SparklineLoggerAdapter",
    # Render ID management
    "generate_render_id",
    "get_render_id",
    "set_render_id",
    "clear_render_id",
    "RenderContext",
    # Formatter (for advanced usage)
    "JSONFormatter",
]
