"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Settings come from environment variables or .env, never hardcoded in callers
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - Defaults work out of the box: in-memory storage, local SQLite file for the SQL backend
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """recordkit settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    storage_backend: Literal["memory", "sql"] = "memory"
    find_batch_size: int = 100

    # Database
    database_url: str = "sqlite+aiosqlite:///recordkit.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs arrive as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("find_batch_size")
    @classmethod
    def positive_batch_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("find_batch_size must be at least 1")
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Hooks
    audit_log: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
