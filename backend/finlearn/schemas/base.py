"""Shared schema configuration and mixins."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base for every request/response body.

    Accepts ORM rows directly and both field names and aliases on input,
    so camelCase client fields and snake_case columns map to the same model.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class ReadSchema(BaseSchema):
    """
    Base for response bodies: stored values are echoed untouched.

    List it last among the bases; pydantic merges ``model_config`` from the
    bases in order, so a later ``BaseSchema`` subclass would turn stripping
    back on.
    """

    model_config = ConfigDict(str_strip_whitespace=False)


class CreatedAtMixin(BaseModel):
    """Append-only records (bookmarks, reviews) only carry a creation time."""

    created_at: datetime


class TimestampMixin(CreatedAtMixin):
    updated_at: datetime


class IDMixin(BaseModel):
    id: UUID


class SuccessResponse(BaseSchema):
    """Acknowledgement for writes that don't echo the record."""

    success: bool = True
    message: str | None = None
