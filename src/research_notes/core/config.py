from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Research Notes API"
    app_env: str = "development"  # development, testing, production
    debug: bool = False
    enable_openapi: bool | None = None  # Unset: on everywhere except production

    # Database
    # postgresql+asyncpg://... in production, sqlite+aiosqlite:///... for local runs
    database_url: str
    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False
    auto_create_schema: bool = False  # Create tables on startup instead of running Alembic

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Metrics
    metrics_api_key: str | None = None  # If set, /metrics requires this key

    # Health
    health_cache_ttl: float = 10.0  # seconds

    @property
    def openapi_enabled(self) -> bool:
        if self.enable_openapi is None:
            return self.app_env != "production"
        return self.enable_openapi

    @field_validator("cors_origins")
    @classmethod
    def validate_cors_origins(cls, v: list[str]) -> list[str]:
        """Validate CORS origins - reject wildcards when credentials are used."""
        for origin in v:
            if origin == "*":
                raise ValueError(
                    "CORS wildcard '*' is not allowed when allow_credentials=True. "
                    "Specify explicit origins instead."
                )
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
