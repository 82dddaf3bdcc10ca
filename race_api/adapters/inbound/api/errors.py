"""Translate exceptions into JSON error responses."""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from ...common.exception_handler import (
    error_body,
    get_http_status_code,
    get_log_level,
    log_exception,
)

logger = logging.getLogger(__name__)


def error_response(request: Request, exc: Exception, key: str = "error") -> JSONResponse:
    """Log ``exc`` with request context and build its JSON response.

    Args:
        request: The incoming request.
        exc: The exception raised while handling it.
        key: Body key for the message. The analysis route uses "message".

    Returns:
        JSONResponse with the mapped status code and a client-safe body.
    """
    log_exception(
        exc,
        log=logger,
        level=get_log_level(exc),
        extra_context={"path": str(request.url.path), "method": request.method},
    )
    return JSONResponse(status_code=get_http_status_code(exc), content=error_body(exc, key=key))
