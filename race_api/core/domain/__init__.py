"""Domain layer: exceptions, parameter validation and filter primitives."""

from .filters import IgnoreCase, session_projection, sessions_projection, without_id
from .params import (
    normalize_driver_code,
    parse_round,
    parse_year,
    require_text,
    validate_session_name,
)

__all__ = [
    "IgnoreCase",
    "normalize_driver_code",
    "parse_round",
    "parse_year",
    "require_text",
    "session_projection",
    "sessions_projection",
    "validate_session_name",
    "without_id",
]
