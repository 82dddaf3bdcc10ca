"""Request parameter validation exceptions."""

from .base import RaceApiError


class ValidationError(RaceApiError):
    """A path parameter failed validation."""

    error_code = "RACE_VAL_001"


class MissingParameterError(ValidationError):
    """A required path parameter is absent or blank."""

    error_code = "RACE_VAL_002"


class InvalidParameterError(ValidationError):
    """A path parameter has the wrong type or shape."""

    error_code = "RACE_VAL_003"
