"""Season schedule endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from .....core.services.query_gateway import QueryGateway
from ..deps import get_gateway
from ..encoding import encode_documents
from ..models import ERROR_RESPONSES, ScheduleResponse

router = APIRouter(prefix="/api/schedule", tags=["schedule"])


@router.get("/{year}", response_model=ScheduleResponse, responses=ERROR_RESPONSES)
async def get_schedule(
    year: str,
    gateway: QueryGateway = Depends(get_gateway),
) -> dict[str, Any]:
    """All rounds of a season, sorted by round number."""
    return encode_documents(await gateway.get_schedule(year))


@router.get("/{year}/{round_number}", response_model=dict[str, Any], responses=ERROR_RESPONSES)
async def get_schedule_round(
    year: str,
    round_number: str,
    gateway: QueryGateway = Depends(get_gateway),
) -> dict[str, Any]:
    return encode_documents(await gateway.get_schedule_round(year, round_number))
