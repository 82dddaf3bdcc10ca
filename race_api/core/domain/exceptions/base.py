"""Base error type shared by every failure the API reports.

A ``RaceApiError`` message is always safe to return to a caller. Anything
that must stay server side (the driver exception, its traceback, the query
parameters) travels on the instance as ``cause`` and ``extra_context`` and
only reaches the logs.
"""

import inspect
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import FrameType
from typing import Any

_EXCEPTIONS_PACKAGE = __name__.rpartition(".")[0]


@dataclass(frozen=True)
class RaiseSite:
    """Where in the application code an error was raised."""

    owner: str
    function: str
    file: str
    line: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.owner,
            "method": self.function,
            "file": self.file,
            "line": self.line,
            "timestamp": self.timestamp,
        }


UNKNOWN_SITE = RaiseSite("<unknown>", "<unknown>", "<unknown>", 0, timestamp="")


def _is_constructor_frame(frame: FrameType, error: Exception) -> bool:
    if frame.f_globals.get("__name__", "").startswith(_EXCEPTIONS_PACKAGE):
        return True
    return frame.f_locals.get("self") is error


def _find_raise_site(error: Exception) -> RaiseSite:
    """First frame that is not constructing ``error``, i.e. the ``raise`` statement.

    Frames are skipped by what they are doing rather than by a fixed depth,
    so subclasses that override ``__init__`` still report their caller.
    """
    frame = inspect.currentframe()
    try:
        while frame is not None and _is_constructor_frame(frame, error):
            frame = frame.f_back
        if frame is None:
            return UNKNOWN_SITE
        instance = frame.f_locals.get("self")
        return RaiseSite(
            owner=type(instance).__name__ if instance is not None else "<module>",
            function=frame.f_code.co_name,
            file=frame.f_code.co_filename.replace("\\", "/").rsplit("/", 1)[-1],
            line=frame.f_lineno,
        )
    finally:
        del frame


class RaceApiError(Exception):
    """Root of the API's error hierarchy.

    Subclasses only set ``error_code``; the HTTP status is derived from the
    class by the inbound adapters.

    Example:
        try:
            document = await store.find_one(collection, query)
        except PyMongoError as e:
            raise StoreQueryError(
                "Internal server error.",
                cause=e,
                context={"route": "get_driver", "params": {"driverCode": "NOR"}},
            ) from e
    """

    error_code: str = "RACE_ERR_001"

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """
        Args:
            message: Caller-facing message.
            cause: Underlying exception, logged but never returned.
            context: Server-side details such as route and parameters.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = dict(context or {})
        self.location = _find_raise_site(self)

    @property
    def cause_trace(self) -> list[str]:
        """Formatted traceback lines of ``cause``, empty when there is none."""
        if self.cause is None:
            return []
        lines = traceback.format_exception(type(self.cause), self.cause, self.cause.__traceback__)
        return [line.rstrip() for chunk in lines for line in chunk.splitlines() if line.strip()]

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Structured form used for JSON logs and CLI error panels.

        The returned dict is a fresh copy, so callers may add request context
        to it without touching the exception.
        """
        result: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }
        if self.extra_context:
            result["context"] = dict(self.extra_context)
        if self.cause is not None:
            result["cause"] = {"type": type(self.cause).__name__, "message": str(self.cause)}
            if include_trace:
                result["stack_trace"] = self.cause_trace
        return result
