"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

ASYNC_DRIVER = "postgresql+asyncpg"
SYNC_DRIVER = "postgresql"

# Scheme spellings that all mean PostgreSQL (hosted providers hand out "postgres://")
POSTGRES_SCHEMES = {"postgres", "postgresql", "postgresql+asyncpg", "postgresql+psycopg2"}


class Settings(BaseSettings):
    """Settings for the finance learning API, read from the environment and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "Finance Learning API"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 5000

    # A full URL (e.g. from a hosting provider) wins over the parts below
    database_url_override: str | None = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "finlearn"
    postgres_password: str = ""
    postgres_db: str = "finance_app"

    # Local development only; deployments run Alembic
    database_create_tables: bool = False

    cors_origins: list[str] = ["*"]

    def _source_url(self) -> URL:
        if self.database_url_override:
            return make_url(self.database_url_override)
        return URL.create(
            SYNC_DRIVER,
            username=self.postgres_user,
            password=self.postgres_password or None,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
        )

    @computed_field
    @property
    def database_url(self) -> str:
        """
        Async URL for the app engine.

        PostgreSQL URLs are moved to asyncpg and lose their query string,
        which asyncpg rejects; SSL is passed through ``connect_args`` instead
        (see ``database_requires_ssl``). Other backends are used verbatim.
        """
        url = self._source_url()
        if url.drivername not in POSTGRES_SCHEMES:
            return self.database_url_override
        return url.set(drivername=ASYNC_DRIVER, query={}).render_as_string(hide_password=False)

    @computed_field
    @property
    def database_requires_ssl(self) -> bool:
        query = self._source_url().query
        return query.get("sslmode") == "require" or query.get("ssl") == "require"

    @computed_field
    @property
    def database_url_sync(self) -> str:
        """Sync URL for Alembic (psycopg2, or pysqlite for a local SQLite file). Keeps the query string."""
        url = self._source_url()
        driver = SYNC_DRIVER if url.drivername in POSTGRES_SCHEMES else url.get_backend_name()
        return url.set(drivername=driver).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
