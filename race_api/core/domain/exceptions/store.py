"""Document store exceptions."""

from .base import RaceApiError


class StoreError(RaceApiError):
    """Base error for document store operations."""

    error_code = "RACE_DB_001"


class ServiceUnavailableError(StoreError):
    """The store connection has not been established yet."""

    error_code = "RACE_DB_002"


class StoreConnectionError(StoreError):
    """Failed to connect to MongoDB at startup.

    Common causes:
    - Invalid connection string or credentials
    - Network connectivity issues
    - Server selection timed out
    """

    error_code = "RACE_DB_003"


class StoreQueryError(StoreError):
    """A query failed inside the driver or on the server."""

    error_code = "RACE_DB_004"


class StoreTimeoutError(StoreError):
    """A query did not complete within the configured timeout."""

    error_code = "RACE_DB_005"
