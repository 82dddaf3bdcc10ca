"""Path parameter validation shared by every lookup."""

import re

from .exceptions import InvalidParameterError, MissingParameterError

_INTEGER_RE = re.compile(r"^-?[0-9]+$")

DRIVER_CODE_LENGTH = 3


def require_text(value: str | None, name: str) -> str:
    """Return ``value`` unchanged, rejecting missing or blank input.

    Raises:
        MissingParameterError: If the value is None, empty or whitespace only.
    """
    if value is None or not value.strip():
        raise MissingParameterError(f"{name} parameter is required.", context={"parameter": name})
    return value


def parse_int(value: str | None, name: str) -> int:
    """Parse a base-10 integer path parameter.

    Unlike a lenient prefix parse, trailing garbage such as ``2024abc`` is
    rejected.

    Raises:
        MissingParameterError: If the value is missing.
        InvalidParameterError: If the value is not an integer.
    """
    text = require_text(value, name).strip()
    if not _INTEGER_RE.match(text):
        raise InvalidParameterError(
            f"{name} parameter must be a valid number.",
            context={"parameter": name, "value": value},
        )
    return int(text)


def parse_year(value: str | None) -> int:
    return parse_int(value, "Year")


def parse_round(value: str | None) -> int:
    return parse_int(value, "Round")


def normalize_driver_code(value: str | None) -> str:
    """Upper-case a driver code and check it is exactly three letters.

    Raises:
        MissingParameterError: If the code is missing.
        InvalidParameterError: If the normalized code is not three letters.
    """
    code = require_text(value, "DriverCode").strip().upper()
    if len(code) != DRIVER_CODE_LENGTH or not code.isalpha():
        raise InvalidParameterError(
            "Driver code must be exactly 3 letters.",
            context={"parameter": "DriverCode", "value": value},
        )
    return code


def validate_session_name(value: str | None) -> str:
    """Check a session name can be used inside a projection field path.

    Raises:
        MissingParameterError: If the name is missing.
        InvalidParameterError: If the name contains ``.`` or starts with ``$``.
    """
    name = require_text(value, "SessionName")
    if "." in name or name.startswith("$"):
        raise InvalidParameterError(
            "SessionName parameter must not contain '.' or start with '$'.",
            context={"parameter": "SessionName", "value": value},
        )
    return name
