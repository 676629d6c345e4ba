"""
Structured JSON logging configuration.

This module provides:
- JSON-formatted log output suitable for log shipping
- A human-readable text format for local development
- Consistent log structure for applications embedding the library

The library itself never configures logging on import; every module only
creates a logger with logging.getLogger(__name__). Applications call
setup_logging() once at startup.

Log Structure (JSON):
{
    "timestamp": "2024-01-15T10:30:00.000Z",
    "level": "DEBUG",
    "logger": "health_items.items.base",
    "message": "Parsed thing",
    "extra": { ... }
}

Usage:
    from health_items.core.logging_config import setup_logging

    setup_logging(level="DEBUG")
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from health_items.core.config import settings

# Attributes present on every LogRecord; anything else came from extra={...}
_STANDARD_ATTRS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "stack_info", "exc_info", "exc_text", "thread", "threadName",
    "taskName", "message",
}


# =============================================================================
# JSON FORMATTER
# =============================================================================

class JSONFormatter(logging.Formatter):
    """
    JSON log formatter.

    Produces single-line JSON logs with consistent structure.
    All timestamps are UTC.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as single-line JSON."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }

        if extra:
            log_entry["extra"] = extra

        return json.dumps(log_entry, default=str, ensure_ascii=False)


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> None:
    """
    Configure structured logging for an application using the library.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
            Defaults to settings.log_level.
        json_format: If True, use JSON format; if False, use human-readable format.
            Defaults to settings.log_format.

    Environment Variables:
        LOG_LEVEL: Override the log level
        LOG_FORMAT: Override format ("json" or "text")
    """
    if level is None:
        level = settings.log_level
    if json_format is None:
        json_format = settings.log_format == "json"

    level = os.environ.get("LOG_LEVEL", level).upper()
    json_format = os.environ.get("LOG_FORMAT", "json" if json_format else "text").lower() == "json"

    handler = logging.StreamHandler(sys.stdout)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers = [handler]

    package_logger = logging.getLogger("health_items")
    package_logger.setLevel(level)
    package_logger.handlers = []  # Inherit from root
    package_logger.propagate = True

    logging.getLogger(__name__).info(
        "Logging configured",
        extra={"level": level, "format": "json" if json_format else "text"}
    )
