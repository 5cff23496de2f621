"""Tests for logging configuration.

Tests verify:
- configure_logging sets up JSON logging on the root logger
- RenderIDFilter adds render IDs to log records
- SparklineLoggerAdapter tags records with the sparkline id
- log_with_context adds context fields
"""

import json
import logging
from collections.abc import Iterator
from io import StringIO

import pytest

from libs.common.logging.config import (
    SPARKLINES_LOGGER_NAME,
    RenderIDFilter,
    SparklineLoggerAdapter,
    configure_logging,
    get_silent_logger,
    get_sparkline_logger,
    log_with_context,
)
from libs.common.logging.context import RenderContext, clear_render_id
from libs.common.logging.formatter import JSONFormatter


def _record() -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="/path/to/file.py",
        lineno=42,
        msg="Test",
        args=(),
        exc_info=None,
    )


@pytest.fixture()
def captured() -> Iterator[tuple[logging.Logger, StringIO]]:
    """Logger writing JSON lines into a buffer."""
    stream = StringIO()
    logger = logging.getLogger("tests.sparklines.capture")
    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter(source_name="test"))
    handler.addFilter(RenderIDFilter())
    logger.addHandler(handler)
    yield logger, stream
    logger.handlers.clear()


class TestRenderIDFilter:
    """Test suite for RenderIDFilter."""

    def setup_method(self) -> None:
        clear_render_id()

    def teardown_method(self) -> None:
        clear_render_id()

    def test_filter_adds_render_id(self) -> None:
        """Test that the filter copies the render ID of the context."""
        record = _record()

        with RenderContext("render-123"):
            result = RenderIDFilter().filter(record)

        assert result is True
        assert record.render_id == "render-123"  # type: ignore[attr-defined]

    def test_filter_adds_none_outside_render(self) -> None:
        """Test that the filter adds None when no render is in progress."""
        record = _record()

        assert RenderIDFilter().filter(record) is True
        assert record.render_id is None  # type: ignore[attr-defined]


class TestConfigureLogging:
    """Test suite for configure_logging."""

    def teardown_method(self) -> None:
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.setLevel(logging.WARNING)

    def test_returns_root_logger(self) -> None:
        """Test that configure_logging returns the root logger."""
        assert configure_logging(source_name="test") is logging.getLogger()

    def test_sets_log_level(self) -> None:
        """Test that the level is applied, case insensitively."""
        assert configure_logging(log_level="debug").level == logging.DEBUG
        assert configure_logging(log_level="WARNING").level == logging.WARNING

    def test_level_defaults_to_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that SPARKLINES_LOG_LEVEL is used when no level is passed."""
        monkeypatch.setenv("SPARKLINES_LOG_LEVEL", "error")

        assert configure_logging().level == logging.ERROR

    def test_invalid_level_raises_error(self) -> None:
        """Test that an unknown level raises ValueError."""
        with pytest.raises(ValueError, match="Invalid log level"):
            configure_logging(log_level="LOUD")

    def test_installs_single_json_handler(self) -> None:
        """Test that existing handlers are replaced by one JSON handler."""
        root_logger = logging.getLogger()
        dummy = logging.StreamHandler()
        root_logger.addHandler(dummy)

        configure_logging(source_name="test")

        assert len(root_logger.handlers) == 1
        handler = root_logger.handlers[0]
        assert handler is not dummy
        assert isinstance(handler.formatter, JSONFormatter)
        assert any(isinstance(f, RenderIDFilter) for f in handler.filters)


class TestLoggers:
    """Test suite for logger factories."""

    def test_sparkline_logger_uses_package_logger(self) -> None:
        """Test that the sparkline logger wraps the package logger."""
        adapter = get_sparkline_logger("revenue-trend")

        assert isinstance(adapter, SparklineLoggerAdapter)
        assert adapter.logger.name == SPARKLINES_LOGGER_NAME

    def test_silent_logger_discards(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that the silent logger does not reach any handler."""
        silent = get_silent_logger()

        with caplog.at_level(logging.DEBUG):
            silent.error("not shown")

        assert caplog.records == []
        assert silent.propagate is False


class TestSparklineLoggerAdapter:
    """Test suite for SparklineLoggerAdapter."""

    def test_adds_sparkline_id_to_context(self, captured: tuple[logging.Logger, StringIO]) -> None:
        """Test that records carry the sparkline id in their context."""
        logger, stream = captured

        SparklineLoggerAdapter(logger, "revenue-trend").warning("Cannot draw sparklines")

        log_dict = json.loads(stream.getvalue())
        assert log_dict["context"] == {"sparkline_id": "revenue-trend"}

    def test_keeps_caller_context(self, captured: tuple[logging.Logger, StringIO]) -> None:
        """Test that context passed by the caller is merged, not replaced."""
        logger, stream = captured
        adapter = SparklineLoggerAdapter(logger, "revenue-trend")

        log_with_context(adapter, "INFO", "Sparkline rendered", points=9)

        log_dict = json.loads(stream.getvalue())
        assert log_dict["context"] == {"points": 9, "sparkline_id": "revenue-trend"}

    def test_render_id_is_reported(self, captured: tuple[logging.Logger, StringIO]) -> None:
        """Test that records emitted during a render carry its render ID."""
        logger, stream = captured

        with RenderContext("render-7"):
            SparklineLoggerAdapter(logger).info("Sparkline rendered")

        assert json.loads(stream.getvalue())["render_id"] == "render-7"


class TestLogWithContext:
    """Test suite for log_with_context."""

    def test_adds_context_fields(self, captured: tuple[logging.Logger, StringIO]) -> None:
        """Test that keyword fields end up in the context dict."""
        logger, stream = captured

        log_with_context(logger, "WARNING", "Cluttered", step_width=0.5, points=400)

        log_dict = json.loads(stream.getvalue())
        assert log_dict["context"] == {"step_width": 0.5, "points": 400}

    @pytest.mark.parametrize("level", ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    def test_levels(self, captured: tuple[logging.Logger, StringIO], level: str) -> None:
        """Test that the given level is used."""
        logger, stream = captured

        log_with_context(logger, level, f"Test {level}", field="value")

        log_dict = json.loads(stream.getvalue())
        assert log_dict["level"] == level
        assert log_dict["message"] == f"Test {level}"
