"""Bookmark schemas."""

from pydantic import ConfigDict, Field

from finlearn.schemas.base import BaseSchema, CreatedAtMixin, IDMixin, ReadSchema


class BookmarkBase(BaseSchema):
    """Base bookmark schema.

    ``module_title`` and ``chapter_title`` are snapshots taken from the
    client at creation time, not looked up from the module/chapter.
    """

    chapter_id: str | None = Field(None, max_length=255)
    title: str | None = Field(None, max_length=255)
    module_id: str | None = Field(None, max_length=255)
    module_title: str | None = Field(None, max_length=255)
    chapter_title: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=100)
    notes: str | None = None
    user_id: str | None = Field(None, max_length=255)


class BookmarkCreate(BookmarkBase):
    """Schema for creating a bookmark."""

    # Snapshots and notes are stored exactly as sent
    model_config = ConfigDict(str_strip_whitespace=False)

    tags: list[str] | None = None
    is_important: bool | None = None


class BookmarkRead(IDMixin, CreatedAtMixin, BookmarkBase, ReadSchema):
    """Schema for reading bookmark data."""

    tags: list[str]
    is_important: bool
