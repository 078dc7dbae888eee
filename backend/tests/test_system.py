"""Liveness, diagnostics and the database gate."""

import logging

from httpx import AsyncClient

from finlearn.api.routes import system
from finlearn.db.session import Database
from finlearn.main import app


async def test_root_is_plain_text(client: AsyncClient) -> None:
    r = await client.get("/")
    assert r.status_code == 200
    assert r.text == "Finance Learning API Running"


async def test_health_does_not_need_database(client: AsyncClient, monkeypatch) -> None:
    monkeypatch.setattr(app.state, "database", None)
    r = await client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["message"] == "Server is running"
    assert "timestamp" in body


async def test_database_check_lists_tables(client: AsyncClient) -> None:
    r = await client.get("/test")
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Database connection successful"
    assert body["database"].endswith("test.db")
    for table in ("modules", "chapters", "notes", "bookmarks", "reviews", "feedback", "user_states"):
        assert table in body["collections"]


async def test_requests_fail_closed_without_database(client: AsyncClient, monkeypatch) -> None:
    monkeypatch.setattr(app.state, "database", None)
    r = await client.get("/modules")
    assert r.status_code == 500
    assert r.json() == {"error": "Database connection failed", "message": "Database not connected"}


async def test_requests_fail_closed_when_connect_failed(client: AsyncClient, monkeypatch, tmp_path) -> None:
    broken = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'x.db'}")
    assert await broken.connect() is False
    assert not broken.is_connected

    monkeypatch.setattr(app.state, "database", broken)
    r = await client.post("/reviews", json={"user_id": "u1", "user_name": "A", "text": "t", "rating": 5})
    assert r.status_code == 500
    assert r.json()["error"] == "Database connection failed"


async def test_invalid_path_id_is_a_client_error(client: AsyncClient) -> None:
    r = await client.get("/chapters/not-a-uuid")
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request"


async def test_malformed_body_is_a_client_error(client: AsyncClient) -> None:
    r = await client.post("/modules", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid request"


async def test_unknown_path_uses_error_body(client: AsyncClient) -> None:
    r = await client.get("/no-such-route")
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}


async def test_wrong_method_uses_error_body(client: AsyncClient) -> None:
    r = await client.put("/reviews", json={})
    assert r.status_code == 405
    assert r.json() == {"error": "Method Not Allowed"}
    assert "GET" in r.headers["allow"]


async def test_unexpected_error_is_a_generic_500_logged_once(
    client: AsyncClient, monkeypatch, caplog
) -> None:
    monkeypatch.setattr(system, "datetime", None)

    with caplog.at_level(logging.ERROR, logger="finlearn.errors"):
        r = await client.get("/health")

    assert r.status_code == 500
    assert r.json() == {"error": "Internal server error"}
    unhandled = [rec for rec in caplog.records if rec.getMessage().startswith("Unhandled error")]
    assert len(unhandled) == 1
    assert unhandled[0].exc_info is not None
