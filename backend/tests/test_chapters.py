"""Chapter endpoints, including cross-module references."""

from uuid import uuid4

from httpx import AsyncClient

from conftest import create_chapter, create_module


async def test_create_and_list_module_chapters(client: AsyncClient) -> None:
    module = await create_module(client)
    other = await create_module(client, title="Trading")
    chapter = await create_chapter(client, module["id"], content="Blockchains...", video_url="https://v/1")
    await create_chapter(client, other["id"])

    assert chapter["module_id"] == module["id"]
    assert chapter["image_url"] is None
    assert chapter["referenced_chapter"] is None

    r = await client.get(f"/modules/{module['id']}/chapters")
    assert r.status_code == 200
    assert [c["id"] for c in r.json()] == [chapter["id"]]

    r = await client.get("/chapters")
    assert len(r.json()) == 2


async def test_create_chapter_for_unknown_module(client: AsyncClient) -> None:
    r = await client.post(f"/modules/{uuid4()}/chapters", json={"title": "Orphan"})
    assert r.status_code == 404
    assert r.json() == {"error": "Module not found"}


async def test_get_missing_chapter(client: AsyncClient) -> None:
    r = await client.get(f"/chapters/{uuid4()}")
    assert r.status_code == 404
    assert r.json() == {"error": "Chapter not found"}


async def test_get_chapter_without_reference(client: AsyncClient) -> None:
    module = await create_module(client)
    chapter = await create_chapter(client, module["id"])

    r = await client.get(f"/chapters/{chapter['id']}")
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == chapter["id"]
    assert "referencedChapterData" not in body


async def test_referenced_chapter_is_resolved_with_module(client: AsyncClient) -> None:
    basics = await create_module(client, title="Investing Basics", category="Investing")
    target = await create_chapter(client, basics["id"], title="Compound Interest")

    crypto = await create_module(client, title="Crypto Fundamentals", category="Crypto")
    chapter = await create_chapter(client, crypto["id"], title="Staking", referenced_chapter=target["id"])

    r = await client.get(f"/chapters/{chapter['id']}")
    assert r.status_code == 200
    ref = r.json()["referencedChapterData"]
    assert ref["id"] == target["id"]
    assert ref["title"] == "Compound Interest"
    assert ref["moduleTitle"] == "Investing Basics"
    assert ref["moduleCategory"] == "Investing"


async def test_referenced_module_without_title_uses_placeholder(client: AsyncClient) -> None:
    untitled = await create_module(client, title=None)
    target = await create_chapter(client, untitled["id"])
    module = await create_module(client)
    chapter = await create_chapter(client, module["id"], referenced_chapter=target["id"])

    ref = (await client.get(f"/chapters/{chapter['id']}")).json()["referencedChapterData"]
    assert ref["moduleTitle"] == "Unknown Module"
    assert ref["moduleCategory"] == "General"


async def test_dangling_reference_is_ignored(client: AsyncClient) -> None:
    module = await create_module(client)
    chapter = await create_chapter(client, module["id"], referenced_chapter=str(uuid4()))

    r = await client.get(f"/chapters/{chapter['id']}")
    assert r.status_code == 200
    assert "referencedChapterData" not in r.json()


async def test_update_and_delete_chapter(client: AsyncClient) -> None:
    module = await create_module(client)
    chapter = await create_chapter(client, module["id"], video_url="https://v/1")

    r = await client.put(f"/chapters/{chapter['id']}", json={"title": "Key Concepts", "content": "..."})
    assert r.status_code == 200
    assert r.json() == {"success": True}

    body = (await client.get(f"/chapters/{chapter['id']}")).json()
    assert body["title"] == "Key Concepts"
    assert body["video_url"] is None

    r = await client.delete(f"/chapters/{chapter['id']}")
    assert r.json() == {"success": True}
    assert (await client.get(f"/chapters/{chapter['id']}")).status_code == 404
