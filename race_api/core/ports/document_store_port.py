"""Port definition for read-only document store access."""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

Document = dict[str, Any]
SortSpec = Sequence[tuple[str, int]]


class DocumentStorePort(Protocol):
    """Port for reading documents from named collections.

    Filter values may be plain values (exact match) or
    :class:`~race_api.core.domain.filters.IgnoreCase` markers.
    """

    @property
    def is_connected(self) -> bool:
        """True once the startup handshake has succeeded."""
        ...

    async def find_one(
        self,
        collection: str,
        query: Mapping[str, Any],
        projection: Mapping[str, int] | None = None,
    ) -> Document | None:
        """Return the first matching document, or None."""
        ...

    async def find(
        self,
        collection: str,
        query: Mapping[str, Any],
        projection: Mapping[str, int] | None = None,
        sort: SortSpec | None = None,
    ) -> list[Document]:
        """Return every matching document, optionally sorted."""
        ...
