"""Liveness and readiness endpoints."""

from fastapi import APIRouter, Depends

from ..... import __version__
from .....core.domain.exceptions import ServiceUnavailableError
from .....core.services.query_gateway import NOT_CONNECTED_MESSAGE, QueryGateway
from ..deps import get_gateway
from ..models import ErrorResponse, PingResponse, ReadyResponse

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/ping", response_model=PingResponse)
async def ping() -> PingResponse:
    """Liveness check. Never touches the database."""
    return PingResponse(message="Pong")


@router.get(
    "/ready",
    response_model=ReadyResponse,
    responses={503: {"model": ErrorResponse, "description": "Database not connected"}},
)
async def readiness_check(gateway: QueryGateway = Depends(get_gateway)) -> ReadyResponse:
    """Readiness probe: succeeds once the startup handshake has completed.

    Raises:
        ServiceUnavailableError: While the store is disconnected.
    """
    if not gateway.store.is_connected:
        raise ServiceUnavailableError(NOT_CONNECTED_MESSAGE)
    return ReadyResponse(status="ready", store="connected", version=__version__)
