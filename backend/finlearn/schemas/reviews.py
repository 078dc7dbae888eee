"""Review schemas."""

from pydantic import ConfigDict, Field

from finlearn.schemas.base import BaseSchema, CreatedAtMixin, IDMixin, ReadSchema


class ReviewCreate(BaseSchema):
    """Schema for creating a review.

    Every field is required; presence is checked by the route so that a
    missing field yields the documented 400 body.
    """

    # Review text is stored exactly as written
    model_config = ConfigDict(str_strip_whitespace=False)

    user_id: str | None = Field(None, max_length=255)
    user_name: str | None = Field(None, max_length=255)
    text: str | None = None
    rating: int | None = None


class ReviewRead(IDMixin, CreatedAtMixin, ReadSchema):
    """Schema for reading review data."""

    user_id: str
    user_name: str
    text: str
    rating: int
