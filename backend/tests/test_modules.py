"""Module and category endpoints."""

from httpx import AsyncClient

from conftest import create_chapter, create_module


async def test_create_module_applies_defaults(client: AsyncClient) -> None:
    module = await create_module(client, description="Learn the basics")
    assert module["title"] == "Crypto Basics"
    assert module["category"] == "General"
    assert module["difficulty"] == "beginner"
    assert module["estimated_time"] == 30
    assert module["tags"] == []
    assert module["id"]


async def test_empty_values_fall_back_to_defaults(client: AsyncClient) -> None:
    module = await create_module(client, category="", difficulty="", estimated_time=0, tags=[])
    assert module["category"] == "General"
    assert module["difficulty"] == "beginner"
    assert module["estimated_time"] == 30


async def test_explicit_values_are_kept(client: AsyncClient) -> None:
    module = await create_module(
        client, category="Trading", difficulty="advanced", estimated_time=45, tags=["stocks"]
    )
    assert module["category"] == "Trading"
    assert module["difficulty"] == "advanced"
    assert module["estimated_time"] == 45
    assert module["tags"] == ["stocks"]


async def test_identical_posts_create_distinct_modules(client: AsyncClient) -> None:
    first = await create_module(client)
    second = await create_module(client)
    assert first["id"] != second["id"]

    r = await client.get("/modules")
    assert len(r.json()) == 2


async def test_list_is_newest_first(client: AsyncClient) -> None:
    older = await create_module(client, title="Older")
    newer = await create_module(client, title="Newer")

    r = await client.get("/modules")
    assert [m["id"] for m in r.json()] == [newer["id"], older["id"]]


async def test_category_filter(client: AsyncClient) -> None:
    await create_module(client, title="Crypto", category="Crypto")
    await create_module(client, title="Stocks", category="Trading")

    r = await client.get("/modules", params={"category": "Trading"})
    assert [m["title"] for m in r.json()] == ["Stocks"]

    r = await client.get("/modules", params={"category": "all"})
    assert len(r.json()) == 2


async def test_categories_are_distinct(client: AsyncClient) -> None:
    await create_module(client, category="Trading")
    await create_module(client, category="Trading")
    await create_module(client, category="Crypto")

    r = await client.get("/categories")
    assert r.status_code == 200
    assert r.json() == [{"category": "Crypto"}, {"category": "Trading"}]


async def test_update_replaces_fields(client: AsyncClient) -> None:
    module = await create_module(client, category="Crypto")

    r = await client.put(
        f"/modules/{module['id']}",
        json={"title": "Crypto Advanced", "category": "Crypto", "difficulty": "advanced", "estimated_time": 90},
    )
    assert r.status_code == 200
    assert r.json() == {"success": True}

    [stored] = (await client.get("/modules")).json()
    assert stored["title"] == "Crypto Advanced"
    assert stored["difficulty"] == "advanced"
    assert stored["estimated_time"] == 90
    assert stored["description"] is None


async def test_delete_module_removes_its_chapters(client: AsyncClient) -> None:
    module = await create_module(client)
    await create_chapter(client, module["id"])

    r = await client.delete(f"/modules/{module['id']}")
    assert r.status_code == 200
    assert r.json() == {"success": True}

    assert (await client.get("/modules")).json() == []
    assert (await client.get("/chapters")).json() == []


async def test_store_failure_is_a_generic_500(client: AsyncClient, drop_table) -> None:
    await drop_table("chapters")
    await drop_table("modules")

    r = await client.get("/modules")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to fetch modules"}
