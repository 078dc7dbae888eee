"""Review routes (create and list only)."""

from fastapi import APIRouter
from sqlalchemy import select

from finlearn.api.deps import DbSession
from finlearn.db.models import Review, utcnow
from finlearn.errors import bad_request, store_errors
from finlearn.schemas.reviews import ReviewCreate, ReviewRead

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=list[ReviewRead])
async def list_reviews(db: DbSession) -> list[ReviewRead]:
    """List reviews, newest first."""
    with store_errors("Failed to fetch reviews"):
        result = await db.execute(select(Review).order_by(Review.created_at.desc()))
    return [ReviewRead.model_validate(r) for r in result.scalars()]


@router.post("", response_model=ReviewRead)
async def create_review(data: ReviewCreate, db: DbSession) -> ReviewRead:
    """Add a review. All fields must be present and non-empty (a 0 rating counts as missing)."""
    if not (data.user_id and data.user_name and data.text and data.rating):
        raise bad_request("Missing user_id, user_name, text, or rating")

    review = Review(
        user_id=data.user_id,
        user_name=data.user_name,
        text=data.text,
        rating=data.rating,
        created_at=utcnow(),
    )
    with store_errors("Failed to add review"):
        db.add(review)
        await db.commit()
        await db.refresh(review)
    return ReviewRead.model_validate(review)
