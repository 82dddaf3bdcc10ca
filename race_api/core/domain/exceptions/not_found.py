"""Lookup exceptions raised when the store holds no matching document."""

from .base import RaceApiError


class NotFoundError(RaceApiError):
    """No document (or an empty result set) matched the lookup."""

    error_code = "RACE_NF_001"


class EventNotFoundError(NotFoundError):
    """No event document matches the event name and year."""

    error_code = "RACE_NF_002"


class SessionNotFoundError(NotFoundError):
    """The event exists but the requested session data does not.

    Kept distinct from EventNotFoundError so callers can tell a missing
    event from a missing session by the error code and message.
    """

    error_code = "RACE_NF_003"
