"""Note schemas."""

from uuid import UUID

from pydantic import AliasChoices, ConfigDict, Field

from finlearn.schemas.base import BaseSchema, ReadSchema, TimestampMixin


def resolve_content(content: str | None, text: str | None) -> str:
    """``content`` wins, then the legacy ``text`` field, then empty."""
    if content is not None:
        return content
    if text is not None:
        return text
    return ""


class NoteBody(BaseSchema):
    """Fields shared by create and update.

    ``text`` is the field name older clients used for ``content``.
    """

    # Note bodies are stored exactly as written
    model_config = ConfigDict(str_strip_whitespace=False)

    topic: str | None = Field(None, max_length=255)
    content: str | None = None
    text: str | None = None
    tags: list[str] | None = None

    @property
    def resolved_content(self) -> str:
        return resolve_content(self.content, self.text)


class NoteCreate(NoteBody):
    """Schema for creating a note.

    The web client sends camelCase ids; snake_case is accepted as well.
    """

    user_id: str | None = Field(None, validation_alias=AliasChoices("userId", "user_id"), max_length=255)
    module_id: str | None = Field(None, validation_alias=AliasChoices("moduleId", "module_id"), max_length=255)
    chapter_id: str | None = Field(None, validation_alias=AliasChoices("chapterId", "chapter_id"), max_length=255)
    title: str | None = Field(None, max_length=255)


class NoteUpdate(NoteBody):
    """Schema for updating a note's topic, content and tags."""

    pass


class NoteRead(TimestampMixin, ReadSchema):
    """Schema for reading note data."""

    id: UUID
    user_id: str | None
    module_id: str | None
    chapter_id: str | None
    title: str | None
    topic: str | None
    content: str
    tags: list[str]
