"""Onboarding and recently-viewed state."""

import pytest
from httpx import AsyncClient

from finlearn.db.models import UserState
from finlearn.db.session import Database

ONBOARDING = {"user_id": "u1", "age": "25-34", "domains": ["crypto", "stocks"], "experience": "beginner"}


async def test_unknown_user_has_not_onboarded(client: AsyncClient) -> None:
    r = await client.get("/user/onboarding/nobody")
    assert r.status_code == 200
    assert r.json() == {"onboardingCompleted": False}


async def test_save_onboarding(client: AsyncClient) -> None:
    r = await client.post("/user/onboarding", json=ONBOARDING)
    assert r.status_code == 200
    assert r.json() == {"success": True}

    r = await client.get("/user/onboarding/u1")
    assert r.json() == {"onboardingCompleted": True}


@pytest.mark.parametrize("missing", ["user_id", "age", "domains", "experience"])
async def test_onboarding_missing_field_is_rejected(client: AsyncClient, missing: str) -> None:
    body = {k: v for k, v in ONBOARDING.items() if k != missing}

    r = await client.post("/user/onboarding", json=body)
    assert r.status_code == 400
    assert r.json() == {"error": "Missing user_id, age, domains, or experience"}


async def test_onboarding_last_write_wins(client: AsyncClient, database: Database) -> None:
    await client.post("/user/onboarding", json=ONBOARDING)
    await client.post("/user/onboarding", json={**ONBOARDING, "experience": "advanced", "domains": ["real estate"]})

    async with database.session() as session:
        state = await session.get(UserState, "u1")
    assert state.experience == "advanced"
    assert state.domains == ["real estate"]
    assert state.onboarding_completed is True


async def test_onboarding_store_failure_echoes_details(client: AsyncClient, drop_table) -> None:
    await drop_table("user_states")

    r = await client.post("/user/onboarding", json=ONBOARDING)
    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "Failed to save onboarding"
    assert "user_states" in body["details"]


async def test_recently_viewed_defaults_to_empty(client: AsyncClient) -> None:
    r = await client.get("/user/recently-viewed/nobody")
    assert r.status_code == 200
    assert r.json() == []


async def test_save_recently_viewed(client: AsyncClient) -> None:
    modules = [{"id": "m1", "title": "Crypto Basics"}, {"id": "m2", "title": "Trading"}]

    r = await client.post("/user/recently-viewed/u1", json={"recentlyViewed": modules})
    assert r.status_code == 200
    assert r.json() == {"success": True}
    assert (await client.get("/user/recently-viewed/u1")).json() == modules

    await client.post("/user/recently-viewed/u1", json={"recentlyViewed": ["m3"]})
    assert (await client.get("/user/recently-viewed/u1")).json() == ["m3"]


@pytest.mark.parametrize("value", ["m1", {"id": "m1"}, None, 3])
async def test_recently_viewed_must_be_a_list(client: AsyncClient, value) -> None:
    r = await client.post("/user/recently-viewed/u1", json={"recentlyViewed": value})
    assert r.status_code == 400
    assert r.json() == {"error": "recentlyViewed must be an array"}


async def test_upserts_only_touch_their_own_fields(client: AsyncClient) -> None:
    await client.post("/user/recently-viewed/u1", json={"recentlyViewed": ["m1"]})
    await client.post("/user/onboarding", json=ONBOARDING)
    await client.post("/user/recently-viewed/u1", json={"recentlyViewed": ["m2"]})

    assert (await client.get("/user/onboarding/u1")).json() == {"onboardingCompleted": True}
    assert (await client.get("/user/recently-viewed/u1")).json() == ["m2"]
