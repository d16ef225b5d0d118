"""Logging setup for the Vectorize tools.

Records go to stderr: stdout carries the MCP stdio transport. Call sites
attach context through ``extra=``; the fields in ``CONTEXT_FIELDS`` are
rendered by both formatters.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

from vectorize_mcp.config import Environment, get_settings

# Keys passed via ``extra=`` that end up in the output
CONTEXT_FIELDS = (
    "tool",
    "operation",
    "url",
    "status",
    "error_code",
    "path",
    "version",
    "environment",
)

# Third-party loggers capped at WARNING
QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "mcp")


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the context fields present on a record."""
    return {
        field: getattr(record, field)
        for field in CONTEXT_FIELDS
        if getattr(record, field, None) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the record's context fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **record_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class DevFormatter(logging.Formatter):
    """Single-line console output; context fields are appended as key=value."""

    FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    DATE_FORMAT = "%H:%M:%S"

    def __init__(self) -> None:
        super().__init__(fmt=self.FORMAT, datefmt=self.DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        # Keep a trailing traceback on its own lines
        head, sep, tail = line.partition("\n")
        return f"{head} | {pairs}{sep}{tail}"


def setup_logging(
    level: str | None = None,
    json_output: bool | None = None,
) -> logging.Logger:
    """Install a single stderr handler on the root logger.

    Args:
        level: Log level name; defaults to ``Settings.log_level``.
        json_output: Force JSON or console output; defaults to JSON outside
            development.

    Returns:
        The root logger.
    """
    settings = get_settings()
    numeric_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)
    if json_output is None:
        json_output = settings.environment != Environment.DEVELOPMENT

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(JSONFormatter() if json_output else DevFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
