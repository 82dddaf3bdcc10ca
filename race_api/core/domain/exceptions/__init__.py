"""Exception hierarchy for the race data API.

Import from this package directly:

    from race_api.core.domain.exceptions import RaceApiError, EventNotFoundError
"""

from .base import RaceApiError, RaiseSite
from .not_found import EventNotFoundError, NotFoundError, SessionNotFoundError
from .store import (
    ServiceUnavailableError,
    StoreConnectionError,
    StoreError,
    StoreQueryError,
    StoreTimeoutError,
)
from .validation import InvalidParameterError, MissingParameterError, ValidationError

__all__ = [
    # Base
    "RaiseSite",
    "RaceApiError",
    # Validation
    "ValidationError",
    "MissingParameterError",
    "InvalidParameterError",
    # Not found
    "NotFoundError",
    "EventNotFoundError",
    "SessionNotFoundError",
    # Store
    "StoreError",
    "ServiceUnavailableError",
    "StoreConnectionError",
    "StoreQueryError",
    "StoreTimeoutError",
]
