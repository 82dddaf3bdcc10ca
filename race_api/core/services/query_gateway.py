"""Query gateway: one read-only lookup per HTTP route."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from ...config.settings import Settings
from ..domain.exceptions import (
    EventNotFoundError,
    NotFoundError,
    ServiceUnavailableError,
    SessionNotFoundError,
    StoreQueryError,
    StoreTimeoutError,
)
from ..domain.filters import (
    SESSIONS_FIELD,
    IgnoreCase,
    session_projection,
    sessions_projection,
    without_id,
)
from ..domain.params import (
    normalize_driver_code,
    parse_round,
    parse_year,
    require_text,
    validate_session_name,
)
from ..ports.document_store_port import Document, DocumentStorePort

logger = logging.getLogger(__name__)

T = TypeVar("T")

NOT_CONNECTED_MESSAGE = "Database not connected. Please try again later."
INTERNAL_ERROR_MESSAGE = "Internal server error."
TIMEOUT_MESSAGE = "Database query timed out."


class QueryGateway:
    """Validates path parameters, issues one store query and shapes the result.

    Every public method follows the same sequence:

    1. fail with ``ServiceUnavailableError`` if the store is not connected;
    2. validate parameters (``ValidationError`` subclasses, no store call);
    3. issue exactly one ``find_one``/``find`` bounded by the query timeout;
    4. raise a ``NotFoundError`` subclass for a missing document or an empty
       result set, otherwise return the JSON-ready payload.

    Store faults are logged with route and parameters and surfaced as
    ``StoreQueryError``/``StoreTimeoutError`` carrying a generic message.
    """

    def __init__(self, store: DocumentStorePort, settings: Settings) -> None:
        self.store = store
        self.settings = settings
        self.timeout = settings.query_timeout_seconds

    def _ensure_connected(self) -> None:
        if not self.store.is_connected:
            raise ServiceUnavailableError(NOT_CONNECTED_MESSAGE)

    async def _run(
        self,
        route: str,
        params: dict[str, Any],
        call: Callable[[], Awaitable[T]],
    ) -> T:
        """Await a single store call, converting faults to store errors."""
        context = {"route": route, "params": params}
        try:
            return await asyncio.wait_for(call(), timeout=self.timeout)
        except TimeoutError as e:
            logger.error(
                "Query timed out after %ss in %s", self.timeout, route, extra={"context": context}
            )
            raise StoreTimeoutError(TIMEOUT_MESSAGE, cause=e, context=context) from e
        except Exception as e:
            logger.exception("Error querying store in %s", route, extra={"context": context})
            raise StoreQueryError(INTERNAL_ERROR_MESSAGE, cause=e, context=context) from e

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def get_event_sessions(self, event_name: str | None, year: str | None) -> Document:
        """All sessions of an event, looked up by exact name and year."""
        self._ensure_connected()
        event_name = require_text(event_name, "EventName")
        year_value = parse_year(year)

        document = await self._run(
            "get_event_sessions",
            {"eventName": event_name, "year": year_value},
            lambda: self.store.find_one(
                self.settings.result_collection,
                {"EventName": event_name, "Year": year_value},
                sessions_projection(),
            ),
        )

        if not document:
            raise EventNotFoundError(f"Event '{event_name}' for year {year_value} not found.")

        sessions = document.get(SESSIONS_FIELD)
        if not sessions:
            raise SessionNotFoundError(
                f"Sessions data not found for event '{event_name}' in {year_value}."
            )

        return {"eventName": event_name, "year": year_value, "sessions": sessions}

    async def get_event_session(
        self,
        event_name: str | None,
        year: str | None,
        session_name: str | None,
    ) -> Document:
        """A single named session, projected so only that session is fetched."""
        self._ensure_connected()
        event_name = require_text(event_name, "EventName")
        year_value = parse_year(year)
        session_name = validate_session_name(session_name)

        document = await self._run(
            "get_event_session",
            {"eventName": event_name, "year": year_value, "sessionName": session_name},
            lambda: self.store.find_one(
                self.settings.result_collection,
                {"EventName": event_name, "Year": year_value},
                session_projection(session_name),
            ),
        )

        if not document:
            raise EventNotFoundError(f"Event '{event_name}' for year {year_value} not found.")

        sessions = document.get(SESSIONS_FIELD)
        session_data = sessions.get(session_name) if isinstance(sessions, dict) else None
        if not session_data:
            raise SessionNotFoundError(
                f"Session '{session_name}' not found for event '{event_name}' in {year_value}."
            )

        return {
            "eventName": event_name,
            "year": year_value,
            "sessionName": session_name,
            "sessionData": session_data,
        }

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------

    async def get_analysis(self, year: str | None) -> list[Document]:
        self._ensure_connected()
        year_value = parse_year(year)

        documents = await self._run(
            "get_analysis",
            {"year": year_value},
            lambda: self.store.find(
                self.settings.analysis_collection, {"year": year_value}, without_id()
            ),
        )

        if not documents:
            raise NotFoundError(f"No analysis data found for year {year_value}.")
        return documents

    # ------------------------------------------------------------------
    # Schedule
    # ------------------------------------------------------------------

    async def get_schedule(self, year: str | None) -> Document:
        """Every round of a season, ordered by round number."""
        self._ensure_connected()
        year_value = parse_year(year)

        rounds = await self._run(
            "get_schedule",
            {"year": year_value},
            lambda: self.store.find(
                self.settings.schedule_collection,
                {"Year": year_value},
                without_id(),
                sort=[("RoundNumber", 1)],
            ),
        )

        if not rounds:
            raise NotFoundError(f"No schedule found for year {year_value}.")

        return {"year": year_value, "totalRounds": len(rounds), "schedule": rounds}

    async def get_schedule_round(self, year: str | None, round_number: str | None) -> Document:
        self._ensure_connected()
        year_value = parse_year(year)
        round_value = parse_round(round_number)

        document = await self._run(
            "get_schedule_round",
            {"year": year_value, "round": round_value},
            lambda: self.store.find_one(
                self.settings.schedule_collection,
                {"Year": year_value, "RoundNumber": round_value},
                without_id(),
            ),
        )

        if not document:
            raise NotFoundError(f"Round {round_value} not found in {year_value} schedule.")
        return document

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    async def list_drivers(self) -> Document:
        self._ensure_connected()

        drivers = await self._run(
            "list_drivers",
            {},
            lambda: self.store.find(self.settings.drivers_collection, {}, without_id()),
        )

        if not drivers:
            raise NotFoundError("No drivers found.")
        return {"totalDrivers": len(drivers), "drivers": drivers}

    async def get_driver(self, driver_code: str | None) -> Document:
        """A driver by three-letter code; the code is upper-cased before lookup."""
        self._ensure_connected()
        code = normalize_driver_code(driver_code)

        document = await self._run(
            "get_driver",
            {"driverCode": code},
            lambda: self.store.find_one(
                self.settings.drivers_collection, {"driver_code": code}, without_id()
            ),
        )

        if not document:
            raise NotFoundError(f"Driver with code '{code}' not found.")
        return document

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------

    async def list_teams(self) -> Document:
        self._ensure_connected()

        teams = await self._run(
            "list_teams",
            {},
            lambda: self.store.find(self.settings.teams_collection, {}, without_id()),
        )

        if not teams:
            raise NotFoundError("No teams found.")
        return {"totalTeams": len(teams), "teams": teams}

    async def get_team(self, short_name: str | None) -> Document:
        """A team by short name, compared as a whole string ignoring case."""
        self._ensure_connected()
        short_name = require_text(short_name, "ShortName").strip()

        document = await self._run(
            "get_team",
            {"shortName": short_name},
            lambda: self.store.find_one(
                self.settings.teams_collection,
                {"short_name": IgnoreCase(short_name)},
                without_id(),
            ),
        )

        if not document:
            raise NotFoundError(f"Team '{short_name}' not found.")
        return document

    # ------------------------------------------------------------------
    # Circuits
    # ------------------------------------------------------------------

    async def list_circuits(self) -> Document:
        self._ensure_connected()

        circuits = await self._run(
            "list_circuits",
            {},
            lambda: self.store.find(self.settings.circuits_collection, {}, without_id()),
        )

        if not circuits:
            raise NotFoundError("No circuits found.")
        return {"totalCircuits": len(circuits), "circuits": circuits}

    async def get_circuit(self, circuit_id: str | None) -> Document:
        """A circuit by id, compared as a whole string ignoring case."""
        self._ensure_connected()
        circuit_id = require_text(circuit_id, "CircuitId").strip()

        document = await self._run(
            "get_circuit",
            {"circuitId": circuit_id},
            lambda: self.store.find_one(
                self.settings.circuits_collection,
                {"circuitId": IgnoreCase(circuit_id)},
                without_id(),
            ),
        )

        if not document:
            raise NotFoundError(f"Circuit '{circuit_id}' not found.")
        return document
