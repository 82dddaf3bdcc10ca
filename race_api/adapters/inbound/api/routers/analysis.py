"""Analysis endpoint.

Errors from this route are keyed ``message`` rather than ``error``. Existing
consumers read that key, so the difference is kept.
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from .....core.domain.exceptions import RaceApiError
from .....core.services.query_gateway import QueryGateway
from ..deps import get_gateway
from ..encoding import encode_documents
from ..errors import error_response
from ..models import AnalysisErrorResponse

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


@router.get(
    "/{year}",
    response_model=list[dict[str, Any]],
    responses={
        status: {"model": AnalysisErrorResponse, "description": description}
        for status, description in (
            (400, "Invalid year"),
            (404, "No analysis data for the year"),
            (500, "Internal server error"),
            (503, "Database not connected"),
            (504, "Database query timed out"),
        )
    },
)
async def get_analysis(
    year: str,
    request: Request,
    gateway: QueryGateway = Depends(get_gateway),
) -> list[dict[str, Any]] | JSONResponse:
    """Every analysis document recorded for a season."""
    try:
        return encode_documents(await gateway.get_analysis(year))
    except RaceApiError as exc:
        return error_response(request, exc, key="message")
