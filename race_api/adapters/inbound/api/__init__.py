"""HTTP adapter exposing the query gateway through FastAPI."""

from .main import create_app

__all__ = ["create_app"]
