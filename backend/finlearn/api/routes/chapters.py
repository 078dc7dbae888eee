"""Chapter CRUD routes."""

import logging
from uuid import UUID

from fastapi import APIRouter
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from finlearn.api.deps import DbSession
from finlearn.db.models import Chapter, Module, utcnow
from finlearn.errors import not_found, store_errors
from finlearn.schemas.base import SuccessResponse
from finlearn.schemas.chapters import (
    ChapterCreate,
    ChapterDetail,
    ChapterRead,
    ChapterUpdate,
    ReferencedChapterData,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chapters"])


async def _resolve_reference(db: AsyncSession, chapter: Chapter) -> ReferencedChapterData | None:
    """
    Load the chapter ``chapter`` points at, plus its module's title/category.

    Returns None for no reference or a dangling one. A missing module falls
    back to "Unknown Module"/"General". The lookups are separate reads and
    may observe concurrent writes in between.
    """
    if chapter.referenced_chapter is None:
        return None

    referenced = await db.get(Chapter, chapter.referenced_chapter)
    if referenced is None:
        logger.info("Chapter %s references missing chapter %s", chapter.id, chapter.referenced_chapter)
        return None

    module = await db.get(Module, referenced.module_id)
    return ReferencedChapterData(
        **ChapterRead.model_validate(referenced).model_dump(),
        module_title=(module.title if module else None) or "Unknown Module",
        module_category=(module.category if module else None) or "General",
    )


@router.get("/modules/{module_id}/chapters", response_model=list[ChapterRead])
async def list_module_chapters(module_id: UUID, db: DbSession) -> list[ChapterRead]:
    """List all chapters of a module."""
    with store_errors("Failed to fetch chapters"):
        result = await db.execute(select(Chapter).where(Chapter.module_id == module_id))
    return [ChapterRead.model_validate(c) for c in result.scalars()]


@router.post("/modules/{module_id}/chapters", response_model=ChapterRead)
async def create_chapter(module_id: UUID, data: ChapterCreate, db: DbSession) -> ChapterRead:
    """Create a chapter in a module.

    The module must exist. ``referenced_chapter`` is stored as given.
    """
    with store_errors("Failed to create chapter"):
        if await db.get(Module, module_id) is None:
            raise not_found("Module not found")

        now = utcnow()
        new_chapter = Chapter(
            module_id=module_id,
            title=data.title,
            content=data.content,
            video_url=data.video_url,
            image_url=data.image_url or None,
            referenced_chapter=data.referenced_chapter,
            created_at=now,
            updated_at=now,
        )
        db.add(new_chapter)
        await db.commit()
        await db.refresh(new_chapter)
    return ChapterRead.model_validate(new_chapter)


@router.get("/chapters", response_model=list[ChapterRead])
async def list_chapters(db: DbSession) -> list[ChapterRead]:
    """List every chapter (admin dashboard)."""
    with store_errors("Failed to fetch chapters"):
        result = await db.execute(select(Chapter))
    return [ChapterRead.model_validate(c) for c in result.scalars()]


@router.get("/chapters/{chapter_id}", response_model=ChapterDetail)
async def get_chapter(chapter_id: UUID, db: DbSession) -> ChapterDetail:
    """Get a chapter, resolving the chapter it references if any."""
    with store_errors("Failed to fetch chapter"):
        chapter = await db.get(Chapter, chapter_id)
        if chapter is None:
            raise not_found("Chapter not found")
        referenced_data = await _resolve_reference(db, chapter)

    return ChapterDetail(
        **ChapterRead.model_validate(chapter).model_dump(),
        referenced_chapter_data=referenced_data,
    )


@router.put("/chapters/{chapter_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def update_chapter(chapter_id: UUID, data: ChapterUpdate, db: DbSession) -> SuccessResponse:
    """Replace a chapter's fields. Omitted fields become null."""
    stmt = (
        update(Chapter)
        .where(Chapter.id == chapter_id)
        .values(**data.model_dump(), updated_at=utcnow())
    )
    with store_errors("Failed to update chapter"):
        await db.execute(stmt)
        await db.commit()
    return SuccessResponse()


@router.delete("/chapters/{chapter_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_chapter(chapter_id: UUID, db: DbSession) -> SuccessResponse:
    """Delete a chapter."""
    with store_errors("Failed to delete chapter"):
        await db.execute(delete(Chapter).where(Chapter.id == chapter_id))
        await db.commit()
    return SuccessResponse()
