"""FastAPI application for the race data API."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .... import __version__
from ....config.logging import setup_logging
from ....config.settings import Settings, get_settings
from ....core.domain.exceptions import RaceApiError
from ....core.ports.document_store_port import DocumentStorePort
from ....core.services.query_gateway import QueryGateway
from ...common.exception_handler import log_exception
from ...outbound.mongo_adapter import MongoDocumentStore
from .errors import error_response
from .routers import analysis, circuits, drivers, events, health, schedule, teams

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> MongoDocumentStore:
    return MongoDocumentStore(
        settings.mongo_uri,
        settings.database,
        connect_timeout_ms=settings.connect_timeout_ms,
        case_insensitive_strategy=settings.case_insensitive_strategy,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect the store on startup and close it on shutdown.

    Only stores created by the factory are connected here; an injected
    store is owned by the caller. A failed connection aborts startup.
    """
    store = app.state.store
    owns_store = app.state.owns_store
    settings: Settings = app.state.settings

    logger.info("Race data API starting up...")
    if owns_store:
        try:
            await store.connect()
        except RaceApiError as exc:
            log_exception(exc, log=logger, level=logging.CRITICAL)
            raise

    base_url = f"http://localhost:{settings.port}"
    logger.info("API server listening at %s", base_url)
    logger.info("Example usage:")
    logger.info("  All sessions: %s/api/events/Monaco%%20Grand%%20Prix/2025/sessions", base_url)
    logger.info(
        "  Specific session: %s/api/events/Monaco%%20Grand%%20Prix/2025/sessions/Practice%%201",
        base_url,
    )
    logger.info("  Schedule: %s/api/schedule/2025", base_url)
    logger.info("API docs available at /docs")

    try:
        yield
    finally:
        logger.info("Race data API shutting down...")
        if owns_store:
            await store.close()


def create_app(
    settings: Settings | None = None,
    store: DocumentStorePort | None = None,
) -> FastAPI:
    """Build the application and wire the gateway to its store.

    Args:
        settings: Application settings; defaults to the environment.
        store: Document store to query. When omitted a MongoDB store is
            built from ``settings`` and connected during startup.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, log_file=settings.log_file, json_format=settings.log_json)

    app = FastAPI(
        title="Race Data API",
        description=(
            "Read-only query API over F1 race data: event sessions, season schedules, "
            "drivers, teams, circuits and analysis results."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.owns_store = store is None
    app.state.store = store if store is not None else build_store(settings)
    app.state.gateway = QueryGateway(app.state.store, settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(events.router)
    app.include_router(analysis.router)
    app.include_router(schedule.router)
    app.include_router(drivers.router)
    app.include_router(teams.router)
    app.include_router(circuits.router)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    @app.exception_handler(RaceApiError)
    async def race_api_error_handler(request: Request, exc: RaceApiError) -> JSONResponse:
        return error_response(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Unknown routes and methods answer with the same ``error`` body."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        return error_response(request, exc)

    return app
