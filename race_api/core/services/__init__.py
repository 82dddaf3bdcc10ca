"""Application services."""

from .query_gateway import QueryGateway

__all__ = ["QueryGateway"]
