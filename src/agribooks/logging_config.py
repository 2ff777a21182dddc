"""Logging setup for the API process and the reminder engine.

Modules log through ``logging.getLogger(__name__)``; setup_logging() attaches a
single stdout handler to the ``agribooks`` package logger. Context passed via
``extra=`` (reminder_id, user_id, reminder_type, ...) becomes top-level keys in
the JSON output.
"""
import json
import logging
import sys
from datetime import datetime, timezone

_RESERVED_ATTRS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "asctime",
    }
)


class StructuredFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO", structured: bool = True) -> logging.Logger:
    """Configure the ``agribooks`` logger; safe to call more than once.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        structured: Emit JSON lines when True, plain text otherwise.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("agribooks")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    if structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    logger.addHandler(handler)
    logger.propagate = False
    return logger
