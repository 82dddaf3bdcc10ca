"""Configuration management for the race data API."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Connection strings copied from hosted consoles or injected as container
    secrets sometimes carry a BOM that breaks URI parsing.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # MongoDB connection
    mongo_uri: str = "mongodb://localhost:27017"
    database: str = "f1"
    connect_timeout_ms: int = 5000

    @field_validator("mongo_uri", "database", mode="after")
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from connection values."""
        return _sanitize_secret(value)

    # Collections
    result_collection: str = "results"
    analysis_collection: str = "analysis"
    schedule_collection: str = "schedule"
    drivers_collection: str = "drivers"
    teams_collection: str = "teams"
    circuits_collection: str = "circuits"

    # Query behaviour
    query_timeout_seconds: float = 10.0
    case_insensitive_strategy: Literal["collation", "regex"] = "collation"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None

    debug: bool = False

    @property
    def collections(self) -> dict[str, str]:
        """Map of entity name to configured collection name."""
        return {
            "results": self.result_collection,
            "analysis": self.analysis_collection,
            "schedule": self.schedule_collection,
            "drivers": self.drivers_collection,
            "teams": self.teams_collection,
            "circuits": self.circuits_collection,
        }


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings()
