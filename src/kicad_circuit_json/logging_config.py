"""Logging infrastructure for the converter.

Provides configurable levels and per-run correlation: every conversion run
gets a short id that is attached to each log record emitted while it runs.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

# Conversion run tracking for log correlation
run_id_ctx: ContextVar[str | None] = ContextVar("run_id", default=None)


def get_run_id() -> str | None:
    """Get the current conversion run ID if available."""
    return run_id_ctx.get()


@contextmanager
def conversion_run(run_id: str | None = None) -> Iterator[str]:
    """Bind a run ID to every log record emitted inside the block."""
    rid = run_id or uuid.uuid4().hex[:8]
    token = run_id_ctx.set(rid)
    try:
        yield rid
    finally:
        run_id_ctx.reset(token)


class _RunIdFilter(logging.Filter):
    """Ensure records from plain loggers still format with %(run_id)s."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_id"):
            record.run_id = get_run_id() or "-"
        return True


def setup_logging(
    level: int | str | None = None,
    format_string: str | None = None,
) -> logging.Logger:
    """Configure logging for the application.

    Args:
        level: Logging level (e.g., 'DEBUG', 'INFO', 'ERROR').
               Defaults to LOGGING_LEVEL env var or 'INFO'.
        format_string: Custom log format string. Defaults to a structured format.

    Returns:
        The root logger configured for the application.
    """
    if level is None:
        level = os.environ.get("LOGGING_LEVEL", "INFO")

    if format_string is None:
        format_string = "%(asctime)s [%(levelname)s] [%(name)s] [run=%(run_id)s] %(message)s"

    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers.clear()

    # stderr: stdout carries the MCP stdio transport
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(format_string))
    console_handler.addFilter(_RunIdFilter())
    logger.addHandler(console_handler)

    return logger


class RunLoggerAdapter(logging.LoggerAdapter[Any]):
    """Logger adapter that automatically adds the run ID to log records."""

    def process(self, msg: str, kwargs: Any) -> tuple[str, Any]:
        extra = kwargs.get("extra")
        if extra is None:
            extra = {}
        run_id = get_run_id()
        if run_id is not None:
            extra["run_id"] = run_id
        kwargs["extra"] = extra
        return msg, kwargs


def create_logger(name: str) -> RunLoggerAdapter:
    """Create and return a logger for a module.

    Args:
        name: The module name (typically __name__).

    Returns:
        A configured logger with run context support.
    """
    return RunLoggerAdapter(logging.getLogger(name), {})
