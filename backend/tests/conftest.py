"""Pytest configuration and fixtures."""

import pytest
from collections.abc import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from finlearn.db.session import Database
from finlearn.main import app


@pytest.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """A fresh SQLite database installed as the app's connection handle."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    assert await db.connect(create_tables=True)
    previous = getattr(app.state, "database", None)
    app.state.database = db
    yield db
    app.state.database = previous
    await db.disconnect()


@pytest.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def drop_table(database: Database):
    """Drop a table to make the next store call against it fail."""

    async def _drop(name: str) -> None:
        async with database.engine.begin() as conn:
            await conn.execute(text(f"DROP TABLE {name}"))

    return _drop


async def create_module(client: AsyncClient, **fields) -> dict:
    r = await client.post("/modules", json={"title": "Crypto Basics", **fields})
    assert r.status_code == 200
    return r.json()


async def create_chapter(client: AsyncClient, module_id: str, **fields) -> dict:
    r = await client.post(f"/modules/{module_id}/chapters", json={"title": "Introduction", **fields})
    assert r.status_code == 200
    return r.json()
