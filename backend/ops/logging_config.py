"""
Logging configuration for the Ledgerbook backend.

Two output styles share one set of loggers:
- console: one readable line per record, structured ``extra`` context
  appended as key=value pairs (default when DEBUG is on)
- json: one JSON object per line on stdout

Environment variables:
- LOG_FORMAT: "json" or "console"
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: DEBUG in debug, INFO otherwise)
- LOG_FILE: optional path; records are also written there, rotated at 5 MB
"""
import json
import logging
import os
from datetime import datetime, timezone


APP_LOGGERS = (
    "accounting",
    "firm",
    "inventory",
    "invoicing",
    "parties",
    "reports",
    "ops",
)

# Attributes every LogRecord carries; anything else came in through ``extra``.
RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def record_context(record: logging.LogRecord) -> dict:
    """The ``extra`` mapping a record was logged with."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in RECORD_ATTRS and not key.startswith("_")
    }


class ConsoleFormatter(logging.Formatter):
    """``[time] LEVEL logger message | key=value ...``"""

    def __init__(self):
        super().__init__("[{asctime}] {levelname} {name} {message}", style="{")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = record_context(record)
        if context:
            pairs = " ".join(f"{key}={value}" for key, value in sorted(context.items()))
            line = f"{line} | {pairs}"
        return line


class JsonFormatter(logging.Formatter):
    """
    JSON lines with timestamp, level, logger, message, source location,
    the formatted exception when there is one, and the ``extra`` context.
    Values that are not JSON-native (Decimal, date) are rendered with str().
    """

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.lineno}",
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        context = record_context(record)
        if context:
            payload["context"] = context

        return json.dumps(payload, default=str)


def _handlers(formatter: str, log_file: str) -> dict:
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": formatter,
            "stream": "ext://sys.stdout",
        },
        "null": {
            "class": "logging.NullHandler",
        },
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "formatter": formatter,
            "filename": log_file,
            "maxBytes": 5 * 1024 * 1024,
            "backupCount": 3,
            "encoding": "utf-8",
        }
    return handlers


def get_logging_config(debug: bool = False) -> dict:
    """
    Build the Django LOGGING dict.

    Application loggers propagate to the root handlers so pytest's caplog
    sees their records.
    """
    level = os.environ.get("LOG_LEVEL", "DEBUG" if debug else "INFO")
    formatter = os.environ.get("LOG_FORMAT", "console" if debug else "json")
    if formatter not in ("console", "json"):
        formatter = "json"
    log_file = os.environ.get("LOG_FILE", "")

    handlers = _handlers(formatter, log_file)
    outputs = [name for name in ("console", "file") if name in handlers]

    loggers = {
        "": {"handlers": outputs, "level": level},
        "django": {"handlers": outputs, "level": "INFO", "propagate": False},
        "django.request": {
            "handlers": outputs,
            "level": level if debug else "ERROR",
            "propagate": False,
        },
        "django.db.backends": {"handlers": ["null"], "level": "INFO", "propagate": False},
    }
    for name in APP_LOGGERS:
        loggers[name] = {"level": level, "propagate": True}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "console": {"()": "ops.logging_config.ConsoleFormatter"},
            "json": {"()": "ops.logging_config.JsonFormatter"},
        },
        "handlers": handlers,
        "loggers": loggers,
    }
