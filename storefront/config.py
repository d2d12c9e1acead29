"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default, so the app starts with no environment at all
    - get_settings() is cached (lru_cache): single instance per process
    - user_id_insert_attempts >= 1

Design Decisions:
    - SQLite (aiosqlite) by default, PostgreSQL (asyncpg) when DATABASE_URL points at one
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///storefront.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Stores
    seed_on_startup: bool = True
    user_id_insert_attempts: int = Field(1, ge=1)

    # API
    cors_origins: list[str] = ["http://localhost:3000"]
    host: str = "0.0.0.0"
    port: int = 3000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
