"""Chapter schemas."""

from typing import Any
from uuid import UUID

from pydantic import Field, SerializerFunctionWrapHandler, model_serializer

from finlearn.schemas.base import BaseSchema, IDMixin, ReadSchema, TimestampMixin


class ChapterBase(BaseSchema):
    """Base chapter schema."""

    title: str | None = Field(None, max_length=255)
    content: str | None = None
    video_url: str | None = None
    image_url: str | None = None
    referenced_chapter: UUID | None = None


class ChapterCreate(ChapterBase):
    """Schema for creating a chapter. The module comes from the path."""

    pass


class ChapterUpdate(ChapterBase):
    """Schema for replacing a chapter. Omitted fields are stored as null."""

    pass


class ChapterRead(IDMixin, TimestampMixin, ChapterBase, ReadSchema):
    """Schema for reading chapter data."""

    module_id: UUID


class ReferencedChapterData(ChapterRead):
    """A referenced chapter with its module's title and category folded in."""

    module_title: str = Field("Unknown Module", alias="moduleTitle")
    module_category: str = Field("General", alias="moduleCategory")


class ChapterDetail(ChapterRead):
    """Single chapter, with the chapter it references resolved when possible."""

    referenced_chapter_data: ReferencedChapterData | None = Field(
        None, alias="referencedChapterData"
    )

    @model_serializer(mode="wrap")
    def omit_unresolved_reference(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # No resolved reference means no key at all, not null
        data = handler(self)
        if self.referenced_chapter_data is None:
            data.pop("referencedChapterData", None)
            data.pop("referenced_chapter_data", None)
        return data
