"""Bookmark routes. Bookmarks are created and removed, never edited."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query
from sqlalchemy import delete, select

from finlearn.api.deps import DbSession
from finlearn.db.models import Bookmark, utcnow
from finlearn.errors import bad_request, store_errors
from finlearn.schemas.base import SuccessResponse
from finlearn.schemas.bookmarks import BookmarkCreate, BookmarkRead

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("", response_model=list[BookmarkRead])
async def list_bookmarks(
    db: DbSession,
    user_id: Annotated[str | None, Query(alias="userId")] = None,
) -> list[BookmarkRead]:
    """List a user's bookmarks, newest first. ``userId`` is required."""
    if not user_id:
        raise bad_request("Missing userId")

    query = select(Bookmark).where(Bookmark.user_id == user_id).order_by(Bookmark.created_at.desc())
    with store_errors("Failed to fetch bookmarks"):
        result = await db.execute(query)
    return [BookmarkRead.model_validate(b) for b in result.scalars()]


@router.post("", response_model=BookmarkRead)
async def create_bookmark(data: BookmarkCreate, db: DbSession) -> BookmarkRead:
    """Add a bookmark.

    Module and chapter titles are copied from the request as-is.
    """
    new_bookmark = Bookmark(
        **data.model_dump(exclude={"tags", "is_important"}),
        tags=data.tags or [],
        is_important=data.is_important or False,
        created_at=utcnow(),
    )
    with store_errors("Failed to add bookmark"):
        db.add(new_bookmark)
        await db.commit()
        await db.refresh(new_bookmark)
    return BookmarkRead.model_validate(new_bookmark)


@router.delete("/{bookmark_id}", response_model=SuccessResponse)
async def delete_bookmark(bookmark_id: UUID, db: DbSession) -> SuccessResponse:
    """Remove a bookmark."""
    with store_errors("Failed to remove bookmark"):
        await db.execute(delete(Bookmark).where(Bookmark.id == bookmark_id))
        await db.commit()
    return SuccessResponse(message="Bookmark removed")
