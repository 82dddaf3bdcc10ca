"""MongoDB adapter implementing the read-only document store port."""

import logging
import re
from collections.abc import Mapping
from typing import Any, Literal

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.collation import Collation, CollationStrength
from pymongo.errors import PyMongoError

from ...core.domain.exceptions import ServiceUnavailableError, StoreConnectionError
from ...core.domain.filters import IgnoreCase
from ...core.ports.document_store_port import Document, SortSpec

logger = logging.getLogger(__name__)

# Strength 2 compares base letters and accents but ignores case.
CASE_INSENSITIVE_COLLATION = Collation(locale="en", strength=CollationStrength.SECONDARY)


def _redact_uri(uri: str) -> str:
    """Hide credentials in a connection string before logging it."""
    return re.sub(r"//[^@/]+@", "//***@", uri)


class MongoDocumentStore:
    """Async MongoDB access through pymongo's ``AsyncMongoClient``.

    The handle starts disconnected. :meth:`connect` performs the startup
    handshake (a ``ping`` against the server) and moves it to connected.
    There is no reconnect path; a failed handshake is fatal to startup.
    """

    def __init__(
        self,
        uri: str,
        database: str,
        *,
        connect_timeout_ms: int = 5000,
        case_insensitive_strategy: Literal["collation", "regex"] = "collation",
    ) -> None:
        """Initialize the adapter without touching the network.

        Args:
            uri: MongoDB connection string.
            database: Database name holding the race collections.
            connect_timeout_ms: Server selection timeout for the handshake.
            case_insensitive_strategy: How :class:`IgnoreCase` filter values
                are rendered: a collation query, or an anchored regex.
        """
        self.uri = uri
        self.database_name = database
        self.connect_timeout_ms = connect_timeout_ms
        self.case_insensitive_strategy = case_insensitive_strategy
        self._client: AsyncMongoClient | None = None
        self._db: AsyncDatabase | None = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    async def connect(self) -> None:
        """Open the client and verify the server answers.

        Raises:
            StoreConnectionError: If the server cannot be reached.
        """
        client: AsyncMongoClient = AsyncMongoClient(
            self.uri, serverSelectionTimeoutMS=self.connect_timeout_ms
        )
        try:
            await client.admin.command("ping")
        except PyMongoError as e:
            await client.close()
            raise StoreConnectionError(
                "Failed to connect to MongoDB",
                cause=e,
                context={"uri": _redact_uri(self.uri), "database": self.database_name},
            ) from e

        self._client = client
        self._db = client[self.database_name]
        logger.info("Successfully connected to MongoDB database '%s'.", self.database_name)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
        self._client = None
        self._db = None
        logger.info("MongoDB connection closed.")

    def _collection(self, name: str):
        if self._db is None:
            raise ServiceUnavailableError("Database not connected. Please try again later.")
        return self._db[name]

    def _render_query(
        self, query: Mapping[str, Any]
    ) -> tuple[dict[str, Any], Collation | None]:
        """Translate ``IgnoreCase`` markers into a MongoDB filter.

        Returns:
            The filter and, for the collation strategy, the collation to use.
        """
        rendered: dict[str, Any] = {}
        collation = None
        for field, value in query.items():
            if not isinstance(value, IgnoreCase):
                rendered[field] = value
            elif self.case_insensitive_strategy == "regex":
                rendered[field] = {"$regex": f"^{re.escape(value.value)}$", "$options": "i"}
            else:
                rendered[field] = value.value
                collation = CASE_INSENSITIVE_COLLATION
        return rendered, collation

    async def find_one(
        self,
        collection: str,
        query: Mapping[str, Any],
        projection: Mapping[str, int] | None = None,
    ) -> Document | None:
        rendered, collation = self._render_query(query)
        kwargs: dict[str, Any] = {}
        if collation is not None:
            kwargs["collation"] = collation
        return await self._collection(collection).find_one(rendered, projection, **kwargs)

    async def find(
        self,
        collection: str,
        query: Mapping[str, Any],
        projection: Mapping[str, int] | None = None,
        sort: SortSpec | None = None,
    ) -> list[Document]:
        rendered, collation = self._render_query(query)
        kwargs: dict[str, Any] = {}
        if collation is not None:
            kwargs["collation"] = collation
        if sort:
            kwargs["sort"] = list(sort)
        cursor = self._collection(collection).find(rendered, projection, **kwargs)
        return await cursor.to_list()

    async def count_documents(self, collection: str) -> int:
        """Estimated document count, used by the ``check`` CLI command."""
        return await self._collection(collection).estimated_document_count()
