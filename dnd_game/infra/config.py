"""Settings and environment-keyed connection resolution.

``settings`` is the single source of truth for both the application engine
(``settings.database_url``) and Alembic (``settings.database_url_sync``).
"""

from __future__ import annotations

import logging
from functools import cached_property
from pathlib import Path
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import URL, pool

from dnd_game.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENVIRONMENTS = ("development", "test", "production")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "development"

    # PostgreSQL (production)
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "dnd_game"
    db_user: str = "postgres"
    db_password: str = "password"
    db_ssl: bool = False

    # SQLite (development)
    db_filename: str = "./data/database.db"

    log_level: str = "INFO"
    log_dir: str | None = None
    bcrypt_rounds: int = 12

    @cached_property
    def connection(self) -> ConnectionConfig:
        return resolve_connection(self.app_env, self)

    @property
    def database_url(self) -> str:
        return self.connection.url.render_as_string(hide_password=False)

    @property
    def database_url_sync(self) -> str:
        return self.connection.sync_url.render_as_string(hide_password=False)


class _Connection(BaseModel):
    model_config = ConfigDict(frozen=True)

    @property
    def dialect(self) -> str:
        return self.url.get_backend_name()


class DevelopmentConnection(_Connection):
    """Local file-backed SQLite store, single user, no pooling."""

    environment: Literal["development"] = "development"
    filename: Path

    @property
    def url(self) -> URL:
        return URL.create("sqlite+aiosqlite", database=str(self.filename))

    @property
    def sync_url(self) -> URL:
        return URL.create("sqlite", database=str(self.filename))

    def engine_kwargs(self) -> dict[str, Any]:
        return {"poolclass": pool.NullPool}

    def sync_engine_kwargs(self) -> dict[str, Any]:
        return {"poolclass": pool.NullPool}


class TestConnection(_Connection):
    """Ephemeral in-memory SQLite store.

    Every engine built from this variant owns a distinct database that lives
    exactly as long as the engine's single pooled connection.
    """

    __test__ = False  # not a pytest class

    environment: Literal["test"] = "test"

    @property
    def url(self) -> URL:
        return URL.create("sqlite+aiosqlite", database=":memory:")

    @property
    def sync_url(self) -> URL:
        return URL.create("sqlite", database=":memory:")

    def engine_kwargs(self) -> dict[str, Any]:
        return {"poolclass": pool.StaticPool, "connect_args": {"check_same_thread": False}}

    def sync_engine_kwargs(self) -> dict[str, Any]:
        return self.engine_kwargs()


class ProductionConnection(_Connection):
    """Networked PostgreSQL server with a bounded connection pool."""

    environment: Literal["production"] = "production"
    host: str = "localhost"
    port: int = 5432
    database: str = "dnd_game"
    user: str = "postgres"
    password: str = "password"
    ssl: bool = False
    pool_min: int = 2
    pool_max: int = 10
    pool_timeout: int = 60

    @property
    def url(self) -> URL:
        return self._url("postgresql+asyncpg")

    @property
    def sync_url(self) -> URL:
        return self._url("postgresql+psycopg2")

    def _url(self, drivername: str) -> URL:
        return URL.create(
            drivername,
            username=self.user,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )

    def engine_kwargs(self) -> dict[str, Any]:
        # SQLAlchemy keeps pool_size connections and opens up to max_overflow more.
        kwargs: dict[str, Any] = {
            "pool_size": self.pool_min,
            "max_overflow": self.pool_max - self.pool_min,
            "pool_timeout": self.pool_timeout,
            "pool_pre_ping": True,
        }
        if self.ssl:
            kwargs["connect_args"] = {"ssl": "require"}
        return kwargs

    def sync_engine_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"poolclass": pool.NullPool}
        if self.ssl:
            kwargs["connect_args"] = {"sslmode": "require"}
        return kwargs


ConnectionConfig = Annotated[
    Union[DevelopmentConnection, TestConnection, ProductionConnection],
    Field(discriminator="environment"),
]

_connection_adapter: TypeAdapter[ConnectionConfig] = TypeAdapter(ConnectionConfig)


def resolve_connection(environment: str, source: Settings | None = None) -> ConnectionConfig:
    """Return connection parameters for ``environment``.

    Raises ConfigurationError for names outside ENVIRONMENTS; nothing is
    connected before the name has been validated.
    """
    source = source or settings
    try:
        conn = _connection_adapter.validate_python({
            "environment": environment,
            "filename": source.db_filename,
            "host": source.db_host,
            "port": source.db_port,
            "database": source.db_name,
            "user": source.db_user,
            "password": source.db_password,
            "ssl": source.db_ssl,
        })
    except ValidationError as exc:
        if environment not in ENVIRONMENTS:
            raise ConfigurationError(
                f"Unknown database environment {environment!r}; "
                f"expected one of: {', '.join(ENVIRONMENTS)}"
            ) from exc
        raise ConfigurationError(f"Invalid {environment} database settings: {exc}") from exc

    if isinstance(conn, ProductionConnection) and conn.ssl:
        logger.warning(
            "DB_SSL enabled: connecting to %s:%s with TLS but WITHOUT server "
            "certificate verification (sslmode=require)",
            conn.host,
            conn.port,
        )
    return conn


settings = Settings()
