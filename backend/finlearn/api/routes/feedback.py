"""Feedback routes, including the admin status workflow."""

from uuid import UUID

from fastapi import APIRouter
from sqlalchemy import delete, select, update

from finlearn.api.deps import DbSession
from finlearn.db.models import Feedback, FeedbackStatus, utcnow
from finlearn.errors import bad_request, store_errors
from finlearn.schemas.base import SuccessResponse
from finlearn.schemas.feedback import FeedbackCreate, FeedbackRead, FeedbackStatusUpdate

router = APIRouter(prefix="/feedback", tags=["feedback"])

VALID_STATUSES = {s.value for s in FeedbackStatus}


@router.get("", response_model=list[FeedbackRead])
async def list_feedback(db: DbSession) -> list[FeedbackRead]:
    """List feedback, newest first."""
    with store_errors("Failed to fetch feedback"):
        result = await db.execute(select(Feedback).order_by(Feedback.created_at.desc()))
    return [FeedbackRead.model_validate(f) for f in result.scalars()]


@router.post("", response_model=FeedbackRead)
async def create_feedback(data: FeedbackCreate, db: DbSession) -> FeedbackRead:
    """Submit feedback. New entries always start in status "new"."""
    if not (data.user_id and data.user_name and data.message):
        raise bad_request("Missing required fields: user_id, user_name, message")

    now = utcnow()
    feedback = Feedback(
        user_id=data.user_id,
        user_name=data.user_name,
        user_email=data.user_email or "",
        subject=data.subject or "General Feedback",
        message=data.message,
        rating=data.rating or 0,
        category=data.category or "general",
        status=FeedbackStatus.NEW.value,
        created_at=now,
        updated_at=now,
    )
    with store_errors("Failed to add feedback"):
        db.add(feedback)
        await db.commit()
        await db.refresh(feedback)
    return FeedbackRead.model_validate(feedback)


@router.put("/{feedback_id}/status", response_model=SuccessResponse, response_model_exclude_none=True)
async def update_feedback_status(
    feedback_id: UUID,
    data: FeedbackStatusUpdate,
    db: DbSession,
) -> SuccessResponse:
    """Move feedback to new, in-progress or resolved."""
    if data.status not in VALID_STATUSES:
        raise bad_request("Invalid status")

    stmt = (
        update(Feedback)
        .where(Feedback.id == feedback_id)
        .values(status=data.status, updated_at=utcnow())
    )
    with store_errors("Failed to update feedback status"):
        await db.execute(stmt)
        await db.commit()
    return SuccessResponse()


@router.delete("/{feedback_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_feedback(feedback_id: UUID, db: DbSession) -> SuccessResponse:
    """Delete a feedback entry."""
    with store_errors("Failed to delete feedback"):
        await db.execute(delete(Feedback).where(Feedback.id == feedback_id))
        await db.commit()
    return SuccessResponse()
