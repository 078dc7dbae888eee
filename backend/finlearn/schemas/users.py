"""Per-user state schemas (onboarding and recently viewed modules)."""

from typing import Any

from pydantic import Field

from finlearn.schemas.base import BaseSchema


class OnboardingUpsert(BaseSchema):
    """Onboarding answers. All four fields are required.

    Upsert semantics: answers for an existing user_id replace the old ones.
    """

    user_id: str | None = None
    age: Any = None
    domains: Any = None
    experience: Any = None


class OnboardingStatus(BaseSchema):
    onboarding_completed: bool = Field(False, alias="onboardingCompleted")


class RecentlyViewedUpsert(BaseSchema):
    """Replacement list of recently viewed modules.

    Typed as Any so that a non-list yields the route's own 400 message.
    """

    recently_viewed: Any = Field(None, validation_alias="recentlyViewed")
