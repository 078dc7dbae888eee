"""Notes CRUD routes."""

from uuid import UUID

from fastapi import APIRouter
from sqlalchemy import delete, select, update

from finlearn.api.deps import DbSession
from finlearn.db.models import Note, utcnow
from finlearn.errors import store_errors
from finlearn.schemas.base import SuccessResponse
from finlearn.schemas.notes import NoteCreate, NoteRead, NoteUpdate

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get("", response_model=list[NoteRead])
async def list_notes(db: DbSession) -> list[NoteRead]:
    """List every note."""
    with store_errors("Failed to fetch notes"):
        result = await db.execute(select(Note))
    return [NoteRead.model_validate(n) for n in result.scalars()]


@router.get("/user/{user_id}", response_model=list[NoteRead])
async def list_user_notes(user_id: str, db: DbSession) -> list[NoteRead]:
    """List a user's notes, newest first."""
    query = select(Note).where(Note.user_id == user_id).order_by(Note.created_at.desc())
    with store_errors("Failed to fetch user notes"):
        result = await db.execute(query)
    return [NoteRead.model_validate(n) for n in result.scalars()]


@router.post("", response_model=NoteRead)
async def create_note(data: NoteCreate, db: DbSession) -> NoteRead:
    """Create a new note.

    ``content`` is taken from ``content``, else ``text``, else "".
    """
    now = utcnow()
    new_note = Note(
        user_id=data.user_id,
        module_id=data.module_id,
        chapter_id=data.chapter_id,
        title=data.title,
        topic=data.topic,
        content=data.resolved_content,
        tags=data.tags or [],
        created_at=now,
        updated_at=now,
    )
    with store_errors("Failed to create note"):
        db.add(new_note)
        await db.commit()
        await db.refresh(new_note)
    return NoteRead.model_validate(new_note)


@router.put("/{note_id}", response_model=SuccessResponse)
async def update_note(note_id: UUID, data: NoteUpdate, db: DbSession) -> SuccessResponse:
    """Update a note's topic, content and tags (same content fallback as create)."""
    stmt = (
        update(Note)
        .where(Note.id == note_id)
        .values(
            topic=data.topic,
            content=data.resolved_content,
            tags=data.tags or [],
            updated_at=utcnow(),
        )
    )
    with store_errors("Failed to update note"):
        await db.execute(stmt)
        await db.commit()
    return SuccessResponse(message="Note updated")


@router.delete("/{note_id}", response_model=SuccessResponse)
async def delete_note(note_id: UUID, db: DbSession) -> SuccessResponse:
    """Delete a note."""
    with store_errors("Failed to delete note"):
        await db.execute(delete(Note).where(Note.id == note_id))
        await db.commit()
    return SuccessResponse(message="Note deleted")
