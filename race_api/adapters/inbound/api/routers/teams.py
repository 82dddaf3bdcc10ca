"""Team endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from .....core.services.query_gateway import QueryGateway
from ..deps import get_gateway
from ..encoding import encode_documents
from ..models import ERROR_RESPONSES, TeamsResponse

router = APIRouter(prefix="/api/teams", tags=["teams"])


@router.get("", response_model=TeamsResponse, responses=ERROR_RESPONSES)
async def list_teams(gateway: QueryGateway = Depends(get_gateway)) -> dict[str, Any]:
    return encode_documents(await gateway.list_teams())


@router.get("/{short_name}", response_model=dict[str, Any], responses=ERROR_RESPONSES)
async def get_team(
    short_name: str,
    gateway: QueryGateway = Depends(get_gateway),
) -> dict[str, Any]:
    """A team by short name, matched ignoring case (``mclaren`` finds ``McLaren``)."""
    return encode_documents(await gateway.get_team(short_name))
