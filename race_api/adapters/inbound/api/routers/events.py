"""Event session endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from .....core.services.query_gateway import QueryGateway
from ..deps import get_gateway
from ..encoding import encode_documents
from ..models import ERROR_RESPONSES, EventSessionResponse, EventSessionsResponse

router = APIRouter(prefix="/api/events", tags=["events"])


@router.get(
    "/{event_name}/{year}/sessions",
    response_model=EventSessionsResponse,
    responses=ERROR_RESPONSES,
)
async def get_event_sessions(
    event_name: str,
    year: str,
    gateway: QueryGateway = Depends(get_gateway),
) -> dict[str, Any]:
    """All sessions for an event by name and year.

    Example: ``/api/events/Monaco%20Grand%20Prix/2025/sessions``
    """
    return encode_documents(await gateway.get_event_sessions(event_name, year))


@router.get(
    "/{event_name}/{year}/sessions/{session_name}",
    response_model=EventSessionResponse,
    responses=ERROR_RESPONSES,
)
async def get_event_session(
    event_name: str,
    year: str,
    session_name: str,
    gateway: QueryGateway = Depends(get_gateway),
) -> dict[str, Any]:
    """A single session for an event by name, year and session name.

    Example: ``/api/events/Monaco%20Grand%20Prix/2025/sessions/Practice%201``
    """
    return encode_documents(await gateway.get_event_session(event_name, year, session_name))
