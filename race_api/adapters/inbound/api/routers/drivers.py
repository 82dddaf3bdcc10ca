"""Driver endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from .....core.services.query_gateway import QueryGateway
from ..deps import get_gateway
from ..encoding import encode_documents
from ..models import ERROR_RESPONSES, DriversResponse

router = APIRouter(prefix="/api/drivers", tags=["drivers"])


@router.get("", response_model=DriversResponse, responses=ERROR_RESPONSES)
async def list_drivers(gateway: QueryGateway = Depends(get_gateway)) -> dict[str, Any]:
    return encode_documents(await gateway.list_drivers())


@router.get("/{driver_code}", response_model=dict[str, Any], responses=ERROR_RESPONSES)
async def get_driver(
    driver_code: str,
    gateway: QueryGateway = Depends(get_gateway),
) -> dict[str, Any]:
    """A driver by three-letter code, e.g. ``/api/drivers/nor``."""
    return encode_documents(await gateway.get_driver(driver_code))
