"""Logging setup for the race data API.

Handlers hang off the ``race_api`` package logger. Store faults are logged
with their route and parameters passed as ``extra={"context": {...}}``;
both formatters below render that mapping, so a log line always says which
lookup failed and with what input.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any

ROOT_LOGGER_NAME = "race_api"

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(module)s:%(funcName)s | %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Driver loggers that flood DEBUG output with command and topology events.
DRIVER_LOGGERS = ("pymongo",)


def _record_context(record: logging.LogRecord) -> dict[str, Any] | None:
    context = getattr(record, "context", None)
    if isinstance(context, dict) and context:
        return context
    return None


class JSONExceptionFormatter(logging.Formatter):
    """One JSON object per line, for container log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": {
                "file": record.filename,
                "function": record.funcName,
                "line": record.lineno,
            },
        }

        if context := _record_context(record):
            entry["context"] = context

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        # BSON values such as ObjectId may appear in query parameters.
        return json.dumps(entry, default=str)


class ContextTextFormatter(logging.Formatter):
    """Pipe-separated text lines with any query context appended as JSON."""

    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT, datefmt=TEXT_DATEFMT)

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = _record_context(record)
        if context is None:
            return text
        # The traceback, if any, stays below the first line.
        first, newline, rest = text.partition("\n")
        return f"{first} | {json.dumps(context, default=str)}{newline}{rest}"


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
    json_format: bool = False,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the package logger.

    Calling it again replaces the previous handlers, so each app built by
    ``create_app`` logs exactly once per record.

    Args:
        level: Level name, case-insensitive. Unknown names fall back to INFO.
        log_file: Extra file destination; parent directories are created.
        json_format: Emit JSON lines instead of pipe-separated text.

    Returns:
        The ``race_api`` logger.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    formatter: logging.Formatter = (
        JSONExceptionFormatter() if json_format else ContextTextFormatter()
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    for name in DRIVER_LOGGERS:
        logging.getLogger(name).setLevel(max(numeric_level, logging.WARNING))

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """The package logger, or a named child of it (``race_api.<name>``)."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
