"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Secrets (JWT_SECRET) come from the environment; the default is for local use only
    - database_url always names an async driver (postgres URLs -> postgresql+asyncpg)
    - bcrypt_rounds stays inside bcrypt's accepted range [4, 31]
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Alembic reuses Settings for its URL so both paths normalize it the same way
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ASYNC_POSTGRES = "postgresql+asyncpg://"
_SYNC_POSTGRES_PREFIXES = ("postgresql://", "postgres://")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = f"{_ASYNC_POSTGRES}koinonia:koinonia@db:5432/koinonia"
    database_pool_size: int = Field(20, ge=1)
    database_max_overflow: int = Field(10, ge=0)

    # Auth
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = Field(7, ge=1)
    bcrypt_rounds: int = Field(10, ge=4, le=31)

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """Hosting providers hand out postgres:// URLs; the engine needs asyncpg."""
        if isinstance(v, str):
            for prefix in _SYNC_POSTGRES_PREFIXES:
                if v.startswith(prefix):
                    return _ASYNC_POSTGRES + v[len(prefix):]
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
