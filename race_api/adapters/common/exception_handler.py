"""Exception handling utilities for consistent error formatting.

Formats exceptions as structured JSON for logs, maps them to HTTP status
codes and builds the client-facing error body.
"""

import json
import logging
import traceback
from typing import Any

from ...core.domain.exceptions import (
    NotFoundError,
    RaceApiError,
    ServiceUnavailableError,
    StoreConnectionError,
    StoreQueryError,
    StoreTimeoutError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error."


def format_exception_json(
    exc: Exception,
    include_trace: bool = False,
    extra_context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Format any exception as structured JSON.

    Works with both RaceApiError and standard Python exceptions.

    Args:
        exc: The exception to format.
        include_trace: If True, include full stack trace.
        extra_context: Additional context to include in output.

    Returns:
        Dictionary with structured error information.
    """
    if isinstance(exc, RaceApiError):
        result = exc.to_dict(include_trace=include_trace)
        if extra_context:
            result.setdefault("context", {}).update(extra_context)
        return result

    tb = traceback.extract_tb(exc.__traceback__) if exc.__traceback__ else []
    last_frame = tb[-1] if tb else None

    result: dict[str, Any] = {
        "error": {
            "type": type(exc).__name__,
            "code": "PYTHON_ERR",
            "message": str(exc),
        },
        "location": {
            "class": "<unknown>",
            "method": last_frame.name if last_frame else "<unknown>",
            "file": (
                last_frame.filename.split("\\")[-1].split("/")[-1] if last_frame else "<unknown>"
            ),
            "line": last_frame.lineno if last_frame else 0,
        },
    }

    if extra_context:
        result["context"] = extra_context

    if include_trace:
        result["stack_trace"] = [
            line.strip()
            for line in traceback.format_exception(type(exc), exc, exc.__traceback__)
            if line.strip()
        ]

    return result


def log_exception(
    exc: Exception,
    log: logging.Logger | None = None,
    level: int = logging.ERROR,
    extra_context: dict[str, Any] | None = None,
) -> None:
    """Log exception in structured JSON format.

    Args:
        exc: The exception to log.
        log: Logger instance to use (defaults to module logger).
        level: Logging level (default: ERROR).
        extra_context: Additional context to include.
    """
    log_instance = log or logger

    exc_data = format_exception_json(exc, include_trace=True, extra_context=extra_context)
    log_instance.log(level, json.dumps(exc_data, indent=2, default=str))


def get_error_code(exc: Exception) -> str:
    """Get the error code from an exception (e.g. "RACE_NF_002" or "PYTHON_ERR")."""
    if isinstance(exc, RaceApiError):
        return exc.error_code
    return "PYTHON_ERR"


def get_http_status_code(exc: Exception) -> int:
    """Map exception type to appropriate HTTP status code.

    Args:
        exc: The exception to map.

    Returns:
        HTTP status code (400, 404, 500, 503 or 504).
    """
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ServiceUnavailableError | StoreConnectionError):
        return 503
    if isinstance(exc, StoreTimeoutError):
        return 504
    return 500


def get_log_level(exc: Exception) -> int:
    """Client errors log as warnings and server faults as errors.

    Query failures and timeouts are logged with their route and parameters
    where they are raised, so the response handler only notes them at DEBUG.
    """
    if isinstance(exc, StoreQueryError | StoreTimeoutError):
        return logging.DEBUG
    return logging.WARNING if get_http_status_code(exc) < 500 else logging.ERROR


def error_body(exc: Exception, key: str = "error") -> dict[str, Any]:
    """Build the client-safe JSON body for an exception.

    Messages of RaceApiError subclasses are written to be shown to callers.
    Anything else is reported with a generic message so internal detail
    never leaks into a response.

    Args:
        exc: The exception to describe.
        key: Body key holding the message.

    Returns:
        Dictionary like ``{"error": "...", "code": "RACE_NF_002"}``.
    """
    if isinstance(exc, RaceApiError):
        return {key: exc.message, "code": exc.error_code}
    return {key: GENERIC_ERROR_MESSAGE, "code": get_error_code(exc)}
