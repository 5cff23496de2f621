"""JSON log formatter for structured logging.

Outputs one JSON object per log record with a fixed schema so that log lines
from many chart instances on one page can be filtered by sparkline and render.

Example log output:
    {
        "timestamp": "2025-10-21T10:30:00.000Z",
        "level": "WARNING",
        "source": "sparklines",
        "render_id": "3f2a9c0d41b7",
        "message": "Cannot draw sparklines without values",
        "context": {
            "sparkline_id": "revenue-trend"
        }
    }
"""

import json
import logging
import traceback
from datetime import UTC, datetime
from types import TracebackType
from typing import Any

# LogRecord attributes that are never copied into the context dict
_RESERVED_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "taskName",
        "render_id",
        "context",
        "exc_info",
        "exc_text",
        "stack_info",
    }
)


class JSONFormatter(logging.Formatter):
    """Custom formatter that outputs logs as JSON.

    Attributes:
        source_name: Name of the component emitting logs
        include_context: Whether to include extra context fields

    Example:
        >>> formatter = JSONFormatter(source_name="sparklines")
        >>> handler = logging.StreamHandler()
        >>> handler.setFormatter(formatter)
        >>> logger = logging.getLogger(__name__)
        >>> logger.addHandler(handler)
        >>> logger.warning("Line had no points", extra={"context": {"segment": 2}})
    """

    def __init__(
        self, source_name: str, include_context: bool = True, *args: Any, **kwargs: Any
    ) -> None:
        """Initialize the JSON formatter.

        Args:
            source_name: Name of the emitting component (e.g., "sparklines")
            include_context: Whether to include context dict in output
            *args: Additional args passed to parent Formatter
            **kwargs: Additional kwargs passed to parent Formatter
        """
        super().__init__(*args, **kwargs)
        self.source_name = source_name
        self.include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as JSON.

        Args:
            record: The log record to format

        Returns:
            JSON string representation of the log record
        """
        log_entry: dict[str, Any] = {
            "timestamp": self._format_timestamp(record.created),
            "level": record.levelname,
            "source": self.source_name,
            "render_id": getattr(record, "render_id", None),
            "message": record.getMessage(),
        }

        if self.include_context:
            context = self._extract_context(record)
            if context:
                log_entry["context"] = context

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self._format_exception(record.exc_info),
            }

        log_entry["location"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        return json.dumps(log_entry, default=str)

    def _format_timestamp(self, created: float) -> str:
        """Format timestamp as ISO 8601 in UTC.

        Example:
            >>> JSONFormatter(source_name="test")._format_timestamp(1697896200.0)
            '2023-10-21T13:50:00.000Z'
        """
        dt = datetime.fromtimestamp(created, tz=UTC)
        return dt.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    def _extract_context(self, record: logging.LogRecord) -> dict[str, Any] | None:
        """Extract context dict from log record.

        An explicit ``context`` dict wins; otherwise every non reserved
        attribute passed through ``extra`` is collected.
        """
        context = getattr(record, "context", None)
        if context and isinstance(context, dict):
            return dict(context)

        extra = {
            key: value for key, value in record.__dict__.items() if key not in _RESERVED_FIELDS
        }
        return extra if extra else None

    def _format_exception(
        self,
        exc_info: tuple[type[BaseException] | None, BaseException | None, TracebackType | None],
    ) -> str:
        return "".join(traceback.format_exception(*exc_info))
