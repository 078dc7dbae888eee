"""Feedback schemas."""

from uuid import UUID

from pydantic import ConfigDict, Field

from finlearn.schemas.base import BaseSchema, ReadSchema, TimestampMixin


class FeedbackCreate(BaseSchema):
    """Schema for submitting feedback. user_id, user_name and message are required."""

    # The message is stored exactly as written
    model_config = ConfigDict(str_strip_whitespace=False)

    user_id: str | None = Field(None, max_length=255)
    user_name: str | None = Field(None, max_length=255)
    user_email: str | None = Field(None, max_length=255)
    subject: str | None = Field(None, max_length=255)
    message: str | None = None
    rating: int | None = None
    category: str | None = Field(None, max_length=100)


class FeedbackStatusUpdate(BaseSchema):
    """Status change request. Validated against FeedbackStatus by the route."""

    status: str | None = None


class FeedbackRead(TimestampMixin, ReadSchema):
    """Schema for reading feedback data."""

    id: UUID
    user_id: str
    user_name: str
    user_email: str
    subject: str
    message: str
    rating: int
    category: str
    status: str
