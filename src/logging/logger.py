# src/logging/logger.py — v1
"""Logger factory with JSON and text formatters.

Both formatters render the entity a store operation runs on (see
``entity_context``), so cascaded saves and deletes can be told apart in
the output.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from docmapper.logging.context import get_context

LOGGER_NAME = "docmapper"


class JsonFormatter(logging.Formatter):
    """One JSON object per record.

    ``entity`` (``<type>-<id>``) and ``operation`` are top-level keys and
    only present inside a store operation.
    """

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
        }
        if ctx.subject is not None:
            log_entry["entity"] = ctx.subject
        if ctx.operation is not None:
            log_entry["operation"] = ctx.operation
        log_entry["message"] = record.getMessage()

        data = getattr(record, "data", None)
        if data:
            log_entry["data"] = data
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter for development."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        parts = [
            datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            f"[{record.levelname:8s}]",
            record.name,
        ]
        if ctx.subject is not None:
            parts.append(f"[{ctx.subject}]")
        if ctx.operation:
            parts.append(f"({ctx.operation})")
        parts.append(f"— {record.getMessage()}")
        line = " ".join(parts)
        if record.exc_info and record.exc_info[1] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str) -> logging.Logger:
    """Get a named logger below ``docmapper``. Configuration is applied by setup_logging()."""
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "json",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 30,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the ``docmapper`` logger.

    Re-running replaces the handlers installed before. Records still
    propagate, so an embedding application keeps receiving them.

    Returns:
        The configured ``docmapper`` logger.
    """
    formatter = JsonFormatter() if log_format == "json" else TextFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        from docmapper.logging.handlers import create_rotating_handler

        handlers.append(create_rotating_handler(log_file, rotation=rotation, retention=retention))

    library_logger = logging.getLogger(LOGGER_NAME)
    library_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    library_logger.handlers.clear()
    for handler in handlers:
        handler.setFormatter(formatter)
        library_logger.addHandler(handler)
    return library_logger


def setup_logging_from_settings(settings: Any) -> logging.Logger:
    """Apply the logging section of a Settings instance."""
    return setup_logging(
        level=settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
