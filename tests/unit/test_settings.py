"""Unit tests for settings loading."""

from pathlib import Path

import pytest

from race_api.config.settings import Settings

pytestmark = pytest.mark.unit


def test_defaults(monkeypatch):
    for name in ("PORT", "CORS_ORIGINS", "CASE_INSENSITIVE_STRATEGY", "RESULT_COLLECTION"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.port == 3000
    assert settings.cors_origins == ["*"]
    assert settings.case_insensitive_strategy == "collation"
    assert settings.collections["results"] == "results"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("MONGO_URI", "mongodb://mongo.internal:27017")
    monkeypatch.setenv("DATABASE", "motorsport")
    monkeypatch.setenv("RESULT_COLLECTION", "event_results")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("CORS_ORIGINS", '["https://pitwall.example"]')

    settings = Settings(_env_file=None)

    assert settings.mongo_uri == "mongodb://mongo.internal:27017"
    assert settings.database == "motorsport"
    assert settings.result_collection == "event_results"
    assert settings.collections["results"] == "event_results"
    assert settings.port == 8080
    assert settings.cors_origins == ["https://pitwall.example"]


def test_connection_values_are_sanitized(monkeypatch):
    monkeypatch.setenv("MONGO_URI", "\ufeffmongodb://localhost:27017  ")
    settings = Settings(_env_file=None)
    assert settings.mongo_uri == "mongodb://localhost:27017"


def test_env_file_is_read(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("DATABASE", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("DATABASE=f1_archive\nQUERY_TIMEOUT_SECONDS=2.5\n", encoding="utf-8")

    settings = Settings(_env_file=env_file)

    assert settings.database == "f1_archive"
    assert settings.query_timeout_seconds == 2.5


def test_invalid_strategy_rejected():
    with pytest.raises(ValueError):
        Settings(_env_file=None, case_insensitive_strategy="substring")
