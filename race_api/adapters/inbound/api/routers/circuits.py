"""Circuit endpoints."""

from typing import Any

from fastapi import APIRouter, Depends

from .....core.services.query_gateway import QueryGateway
from ..deps import get_gateway
from ..encoding import encode_documents
from ..models import ERROR_RESPONSES, CircuitsResponse

router = APIRouter(prefix="/api/circuits", tags=["circuits"])


@router.get("", response_model=CircuitsResponse, responses=ERROR_RESPONSES)
async def list_circuits(gateway: QueryGateway = Depends(get_gateway)) -> dict[str, Any]:
    return encode_documents(await gateway.list_circuits())


@router.get("/{circuit_id}", response_model=dict[str, Any], responses=ERROR_RESPONSES)
async def get_circuit(
    circuit_id: str,
    gateway: QueryGateway = Depends(get_gateway),
) -> dict[str, Any]:
    """A circuit by id, matched ignoring case."""
    return encode_documents(await gateway.get_circuit(circuit_id))
