"""Configuration - verifies environment-driven settings."""

import pytest
from pydantic import ValidationError

from recordkit.config import Settings, get_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("STORAGE_BACKEND", raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "memory"
    assert settings.database_url == "sqlite+aiosqlite:///recordkit.db"
    assert settings.find_batch_size == 100
    assert settings.audit_log is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "sql")
    monkeypatch.setenv("FIND_BATCH_SIZE", "25")
    settings = Settings(_env_file=None)
    assert settings.storage_backend == "sql"
    assert settings.find_batch_size == 25


def test_postgres_url_rewritten_for_asyncpg():
    settings = Settings(database_url="postgresql://u:p@db:5432/records")
    assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/records"


def test_rejects_unknown_backend():
    with pytest.raises(ValidationError):
        Settings(storage_backend="redis")


def test_rejects_non_positive_batch_size():
    with pytest.raises(ValidationError):
        Settings(find_batch_size=0)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()
    get_settings.cache_clear()
