"""
Per-user state routes: onboarding answers and recently viewed modules.

Both writes are upserts keyed by user_id (INSERT ... ON CONFLICT DO UPDATE)
with last-write-wins semantics; there is no version check.
"""

import logging
from typing import Any

from fastapi import APIRouter, status
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from finlearn.api.deps import DbSession
from finlearn.db.models import UserState, utcnow
from finlearn.errors import ApiError, bad_request, store_errors
from finlearn.schemas.base import SuccessResponse
from finlearn.schemas.users import OnboardingStatus, OnboardingUpsert, RecentlyViewedUpsert

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


async def upsert_user_state(db: AsyncSession, user_id: str, values: dict[str, Any]) -> None:
    """Insert the user's row or overwrite ``values`` on the existing one."""
    dialect = db.get_bind().dialect.name
    insert = postgresql.insert if dialect == "postgresql" else sqlite.insert

    values = {**values, "updated_at": utcnow()}
    stmt = insert(UserState).values(user_id=user_id, **values)
    stmt = stmt.on_conflict_do_update(index_elements=[UserState.user_id], set_=values)
    await db.execute(stmt)
    await db.commit()


@router.post("/onboarding", response_model=SuccessResponse, response_model_exclude_none=True)
async def save_onboarding(data: OnboardingUpsert, db: DbSession) -> SuccessResponse:
    """Save onboarding answers and mark onboarding as completed."""
    logger.info(
        "Received onboarding data for user %s (age=%r, domains=%r, experience=%r)",
        data.user_id, data.age, data.domains, data.experience,
    )
    if not (data.user_id and data.age and data.domains and data.experience):
        raise bad_request("Missing user_id, age, domains, or experience")

    try:
        await upsert_user_state(
            db,
            data.user_id,
            {
                "age": data.age,
                "domains": data.domains,
                "experience": data.experience,
                "onboarding_completed": True,
            },
        )
    except SQLAlchemyError as exc:
        logger.exception("Error saving onboarding")
        # The client shows this detail on the onboarding screen
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to save onboarding",
            details=str(exc),
        ) from exc
    return SuccessResponse()


@router.get("/onboarding/{user_id}", response_model=OnboardingStatus)
async def get_onboarding_status(user_id: str, db: DbSession) -> OnboardingStatus:
    """Whether the user finished onboarding. Unknown users haven't."""
    query = select(UserState.onboarding_completed).where(UserState.user_id == user_id)
    with store_errors("Failed to check onboarding status"):
        completed = (await db.execute(query)).scalar_one_or_none()
    return OnboardingStatus(onboarding_completed=bool(completed))


@router.get("/recently-viewed/{user_id}", response_model=list[Any])
async def get_recently_viewed(user_id: str, db: DbSession) -> list[Any]:
    """The user's recently viewed modules, or [] if none were saved."""
    query = select(UserState.recently_viewed_modules).where(UserState.user_id == user_id)
    with store_errors("Failed to fetch recently viewed modules"):
        recently_viewed = (await db.execute(query)).scalar_one_or_none()
    return recently_viewed or []


@router.post("/recently-viewed/{user_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def save_recently_viewed(
    user_id: str,
    data: RecentlyViewedUpsert,
    db: DbSession,
) -> SuccessResponse:
    """Replace the user's recently viewed modules."""
    if not isinstance(data.recently_viewed, list):
        raise bad_request("recentlyViewed must be an array")

    with store_errors("Failed to save recently viewed modules"):
        await upsert_user_state(db, user_id, {"recently_viewed_modules": data.recently_viewed})
    return SuccessResponse()
