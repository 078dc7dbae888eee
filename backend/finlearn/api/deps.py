"""
FastAPI dependencies for database access.

Handlers never touch module-level connection state: the ``Database`` built
at startup lives on ``app.state.database`` and each request gets its own
``AsyncSession`` from it. Tests install a different ``Database`` on the
same attribute.

The gate is fail-closed: with no connected database, the request is
answered with a 500 before the handler body runs.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from finlearn.db.session import Database
from finlearn.errors import ApiError


async def get_database(request: Request) -> Database:
    """Return the connected ``Database`` or refuse the request."""
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None or not database.is_connected:
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Database connection failed",
            message="Database not connected",
        )
    return database


async def get_db(
    database: Annotated[Database, Depends(get_database)],
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with database.session() as session:
        yield session


# Type alias for dependency injection
DbSession = Annotated[AsyncSession, Depends(get_db)]
