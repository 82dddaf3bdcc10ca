"""
Pytest configuration and shared fixtures.
"""

import asyncio
import copy
from collections.abc import Mapping
from typing import Any

import pytest
from fastapi.testclient import TestClient

from race_api.adapters.inbound.api.main import create_app
from race_api.config.settings import Settings
from race_api.core.domain.filters import IgnoreCase


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: HTTP-level tests against an in-memory store")


SAMPLE_RESULTS = [
    {
        "_id": "665f1c2e9b1e8a0012345601",
        "EventName": "Monaco Grand Prix",
        "Year": 2025,
        "Sessions": {
            "Practice 1": {"fastest": "LEC", "laps": 31},
            "Qualifying": {"pole": "NOR", "time": "1:09.954"},
            "Sprint": {},
        },
    },
    {
        "_id": "665f1c2e9b1e8a0012345602",
        "EventName": "Bahrain Grand Prix",
        "Year": 2025,
    },
]

SAMPLE_ANALYSIS = [
    {"_id": "a1", "year": 2025, "kind": "tyre_degradation", "event": "Monaco Grand Prix"},
    {"_id": "a2", "year": 2025, "kind": "race_pace", "event": "Monaco Grand Prix"},
    {"_id": "a3", "year": 2024, "kind": "race_pace", "event": "Abu Dhabi Grand Prix"},
]

SAMPLE_SCHEDULE = [
    {"_id": "s3", "Year": 2025, "RoundNumber": 3, "EventName": "Japanese Grand Prix"},
    {"_id": "s1", "Year": 2025, "RoundNumber": 1, "EventName": "Australian Grand Prix"},
    {"_id": "s2", "Year": 2025, "RoundNumber": 2, "EventName": "Chinese Grand Prix"},
    {"_id": "s0", "Year": 2024, "RoundNumber": 1, "EventName": "Bahrain Grand Prix"},
]

SAMPLE_DRIVERS = [
    {"_id": "d1", "driver_code": "NOR", "full_name": "Lando Norris", "number": 4},
    {"_id": "d2", "driver_code": "VER", "full_name": "Max Verstappen", "number": 1},
]

SAMPLE_TEAMS = [
    {"_id": "t1", "short_name": "McLaren", "full_name": "McLaren Formula 1 Team"},
    {"_id": "t2", "short_name": "Red Bull", "full_name": "Oracle Red Bull Racing"},
]

SAMPLE_CIRCUITS = [
    {"_id": "c1", "circuitId": "monaco", "name": "Circuit de Monaco"},
    {"_id": "c2", "circuitId": "Silverstone", "name": "Silverstone Circuit"},
]


def _lookup(document: Mapping[str, Any], path: str) -> tuple[bool, Any]:
    current: Any = document
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return False, None
        current = current[part]
    return True, current


def _assign(target: dict[str, Any], path: str, value: Any) -> None:
    parts = path.split(".")
    for part in parts[:-1]:
        target = target.setdefault(part, {})
    target[parts[-1]] = value


class FakeDocumentStore:
    """In-memory DocumentStorePort with a call log.

    Mimics the subset of MongoDB behaviour the gateway relies on: exact and
    IgnoreCase equality on top-level fields, inclusion/exclusion projections
    with dotted paths, and ascending/descending sorts.
    """

    def __init__(
        self,
        collections: dict[str, list[dict[str, Any]]] | None = None,
        *,
        connected: bool = True,
        error: Exception | None = None,
        delay: float = 0.0,
    ) -> None:
        self.collections = copy.deepcopy(collections or {})
        self.connected = connected
        self.error = error
        self.delay = delay
        self.calls: list[dict[str, Any]] = []

    @property
    def is_connected(self) -> bool:
        return self.connected

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @staticmethod
    def _matches(document: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
        for field, expected in query.items():
            actual = document.get(field)
            if isinstance(expected, IgnoreCase):
                if not expected.matches(actual):
                    return False
            elif actual != expected:
                return False
        return True

    @staticmethod
    def _project(
        document: Mapping[str, Any], projection: Mapping[str, int] | None
    ) -> dict[str, Any]:
        if not projection:
            return copy.deepcopy(dict(document))

        included = [path for path, flag in projection.items() if flag and path != "_id"]
        if included:
            result: dict[str, Any] = {}
            for path in included:
                found, value = _lookup(document, path)
                if found:
                    _assign(result, path, copy.deepcopy(value))
            if projection.get("_id", 1) and "_id" in document:
                result["_id"] = document["_id"]
            return result

        return {
            key: copy.deepcopy(value)
            for key, value in document.items()
            if projection.get(key, 1)
        }

    async def _record(self, operation: str, collection: str, query, projection, sort=None):
        self.calls.append(
            {
                "operation": operation,
                "collection": collection,
                "query": dict(query),
                "projection": dict(projection) if projection else None,
                "sort": list(sort) if sort else None,
            }
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error

    async def find_one(self, collection, query, projection=None):
        await self._record("find_one", collection, query, projection)
        for document in self.collections.get(collection, []):
            if self._matches(document, query):
                return self._project(document, projection)
        return None

    async def find(self, collection, query, projection=None, sort=None):
        await self._record("find", collection, query, projection, sort)
        documents = [d for d in self.collections.get(collection, []) if self._matches(d, query)]
        for field, direction in reversed(list(sort or [])):
            documents.sort(key=lambda d: d.get(field), reverse=direction < 0)
        return [self._project(d, projection) for d in documents]


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None, query_timeout_seconds=0.5, log_level="WARNING")


@pytest.fixture
def sample_collections(settings):
    """Sample documents keyed by the configured collection names."""
    return {
        settings.result_collection: SAMPLE_RESULTS,
        settings.analysis_collection: SAMPLE_ANALYSIS,
        settings.schedule_collection: SAMPLE_SCHEDULE,
        settings.drivers_collection: SAMPLE_DRIVERS,
        settings.teams_collection: SAMPLE_TEAMS,
        settings.circuits_collection: SAMPLE_CIRCUITS,
    }


@pytest.fixture
def make_store(sample_collections):
    """Factory for seeded stores, e.g. ``make_store(error=RuntimeError())``."""

    def _make(**kwargs) -> FakeDocumentStore:
        collections = kwargs.pop("collections", sample_collections)
        return FakeDocumentStore(collections, **kwargs)

    return _make


@pytest.fixture
def store(make_store):
    """Connected in-memory store seeded with sample documents."""
    return make_store()


@pytest.fixture
def empty_store(make_store):
    """Connected store with no documents at all."""
    return make_store(collections={})


@pytest.fixture
def disconnected_store(make_store):
    """Store whose startup handshake has not completed."""
    return make_store(connected=False)


@pytest.fixture
def make_client(settings):
    """Factory building a TestClient around a given store."""
    clients: list[TestClient] = []

    def _make(store_instance) -> TestClient:
        client = TestClient(create_app(settings, store=store_instance))
        client.__enter__()
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client, store):
    """TestClient over the seeded store."""
    return make_client(store)
