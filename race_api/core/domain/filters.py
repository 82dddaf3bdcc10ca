"""Store-agnostic filter building blocks."""

from dataclasses import dataclass

SESSIONS_FIELD = "Sessions"
ID_FIELD = "_id"


@dataclass(frozen=True)
class IgnoreCase:
    """Filter value matched as a whole string, ignoring case.

    Adapters decide how to express this natively (collation, anchored
    case-insensitive pattern, casefold comparison). Partial matches are
    never allowed: ``IgnoreCase("mclare")`` does not match ``McLaren``.
    """

    value: str

    def matches(self, candidate: object) -> bool:
        return isinstance(candidate, str) and candidate.casefold() == self.value.casefold()


def without_id() -> dict[str, int]:
    """Projection that drops the internal identifier."""
    return {ID_FIELD: 0}


def session_projection(session_name: str) -> dict[str, int]:
    """Projection that keeps only ``Sessions.<session_name>``."""
    return {f"{SESSIONS_FIELD}.{session_name}": 1, ID_FIELD: 0}


def sessions_projection() -> dict[str, int]:
    """Projection that keeps only the ``Sessions`` mapping."""
    return {SESSIONS_FIELD: 1, ID_FIELD: 0}
