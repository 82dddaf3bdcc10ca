"""FastAPI dependency injection for the race data API."""

from fastapi import Request

from ....core.services.query_gateway import QueryGateway


def get_gateway(request: Request) -> QueryGateway:
    """Return the gateway built by the application factory."""
    return request.app.state.gateway
