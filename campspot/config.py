"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Database credentials come from environment variables (or .env), never code
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - Connection parts (DB_HOST, DB_USER, DB_PASS, DB_NAME, DB_PORT) are the
      primary interface; DATABASE_URL overrides them when set
    - Defaults provided for all non-secret settings
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    db_host: str = "localhost"
    db_user: str = "campspot"
    db_pass: str = "campspot"
    db_name: str = "campspot"
    db_port: int = 5432
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 10
    # Seconds a request waits for a free pooled connection before failing
    database_pool_timeout: float = 300.0

    # HTTP
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origin: str = "http://localhost:8080"

    # Image uploads
    upload_dir: str = "uploads"
    upload_url_prefix: str = "/uploads"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def sqlalchemy_url(self) -> str:
        """Effective async database URL."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_pass,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
