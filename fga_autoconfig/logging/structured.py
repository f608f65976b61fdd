"""Structured JSON logging for the OpenFGA binding.

Logs go to stdout as JSON lines, with an optional copy in LOG_FILE.
Every line written during one bind carries the same ``bind_id`` so the
gate/validate/map/construct steps of a single startup can be correlated.
"""

import json
import logging
import sys
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

from fga_autoconfig.config.settings import get_logging_settings

LOGGER_NAME = "fga_autoconfig"

bind_id_var: ContextVar[str] = ContextVar("bind_id", default="")


class JSONFormatter(logging.Formatter):
    """Formats log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "bind_id": bind_id_var.get(""),
        }
        # Merge structured fields passed via `extra={"event_data": {...}}`
        if hasattr(record, "event_data"):
            log_entry.update(record.event_data)
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging() -> None:
    """Configure the package logger with JSON output."""
    settings = get_logging_settings()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.handlers.clear()

    formatter = JSONFormatter()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)
    logger.addHandler(stdout_handler)

    if settings.log_file:
        file_handler = logging.FileHandler(settings.log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Avoid duplicate output through the root logger
    logger.propagate = False


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def generate_bind_id() -> str:
    return uuid.uuid4().hex[:12]


class BindTimer:
    """Context manager measuring how long a bind step took."""

    def __init__(self):
        self.start_time: float = 0
        self.elapsed_ms: float = 0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        self.elapsed_ms = round((time.perf_counter() - self.start_time) * 1000, 2)
