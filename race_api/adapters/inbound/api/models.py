"""Pydantic models for API responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _CamelModel(BaseModel):
    """Response envelope serialised with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)


class PingResponse(BaseModel):
    message: str = Field("Pong", description="Liveness reply")


class ReadyResponse(BaseModel):
    status: str = Field(..., description="Readiness status")
    store: str = Field(..., description="Document store connection state")
    version: str = Field(..., description="API version")


class EventSessionsResponse(_CamelModel):
    """All sessions recorded for an event."""

    event_name: str = Field(..., alias="eventName", description="Event name as requested")
    year: int = Field(..., description="Season year")
    sessions: dict[str, Any] = Field(..., description="Session name to session data")


class EventSessionResponse(_CamelModel):
    """A single session of an event."""

    event_name: str = Field(..., alias="eventName", description="Event name as requested")
    year: int = Field(..., description="Season year")
    session_name: str = Field(..., alias="sessionName", description="Session name as requested")
    session_data: Any = Field(..., alias="sessionData", description="Stored session data")


class ScheduleResponse(_CamelModel):
    """Season schedule ordered by round number."""

    year: int = Field(..., description="Season year")
    total_rounds: int = Field(..., alias="totalRounds", description="Number of rounds")
    schedule: list[dict[str, Any]] = Field(..., description="Schedule entries")


class DriversResponse(_CamelModel):
    total_drivers: int = Field(..., alias="totalDrivers")
    drivers: list[dict[str, Any]]


class TeamsResponse(_CamelModel):
    total_teams: int = Field(..., alias="totalTeams")
    teams: list[dict[str, Any]]


class CircuitsResponse(_CamelModel):
    total_circuits: int = Field(..., alias="totalCircuits")
    circuits: list[dict[str, Any]]


class ErrorResponse(BaseModel):
    """Error body returned by every route except analysis.

    Example:
        {"error": "Event 'Monaco Grand Prix' for year 2031 not found.", "code": "RACE_NF_002"}
    """

    error: str = Field(..., description="Human-readable error message")
    code: str | None = Field(None, description="Error code (e.g., RACE_NF_002)")


class AnalysisErrorResponse(BaseModel):
    """Error body of the analysis route, which keys the message as ``message``."""

    message: str = Field(..., description="Human-readable error message")
    code: str | None = Field(None, description="Error code (e.g., RACE_NF_001)")


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid path parameter"},
    404: {"model": ErrorResponse, "description": "No matching document"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
    503: {"model": ErrorResponse, "description": "Database not connected"},
    504: {"model": ErrorResponse, "description": "Database query timed out"},
}
