"""
Database session management.

``Database`` owns the single async engine and session factory for the
process. It is built once at startup, connected once, and handed to request
handlers through ``finlearn.api.deps``. If the first connection attempt
fails the instance stays disconnected; there is no reconnect from the
request path and every gated endpoint answers 500 instead.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from finlearn.db.base import Base
from finlearn.db import models  # noqa: F401 - Import models to register them

logger = logging.getLogger(__name__)


class DatabaseNotConnected(RuntimeError):
    """Raised when a session is requested before a successful connect()."""


class Database:
    """Connection handle shared by all requests."""

    def __init__(self, url: str, *, echo: bool = False, requires_ssl: bool = False) -> None:
        self.url = url
        self.echo = echo
        self.requires_ssl = requires_ssl
        self.engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_connected(self) -> bool:
        return self._sessionmaker is not None

    @property
    def name(self) -> str | None:
        """Database name from the URL (file path for SQLite)."""
        return make_url(self.url).database

    def _engine_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {"echo": self.echo, "pool_pre_ping": True}
        if make_url(self.url).get_backend_name() == "postgresql":
            options.update(pool_size=5, max_overflow=10)
            if self.requires_ssl:
                options["connect_args"] = {"ssl": "require"}
        return options

    async def connect(self, *, create_tables: bool = False) -> bool:
        """
        Open the engine and verify it with a round trip.

        Returns True on success. On failure the error is logged, the engine
        is disposed and the handle is left unset.
        """
        engine = create_async_engine(self.url, **self._engine_options())
        if engine.dialect.name == "sqlite":
            _enable_sqlite_foreign_keys(engine)

        try:
            async with engine.begin() as conn:
                await conn.execute(text("SELECT 1"))
                if create_tables:
                    await conn.run_sync(Base.metadata.create_all)
        except Exception:
            logger.exception("Database connection error")
            await engine.dispose()
            return False

        self.engine = engine
        self._sessionmaker = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info("Connected to database %s", self.name)
        return True

    async def disconnect(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
        self.engine = None
        self._sessionmaker = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; roll back if the caller raises."""
        if self._sessionmaker is None:
            raise DatabaseNotConnected("Database not connected")
        async with self._sessionmaker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise


def _enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores FOREIGN KEY clauses (and ON DELETE CASCADE) unless asked."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
