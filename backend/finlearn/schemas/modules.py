"""Module schemas."""

from pydantic import Field

from finlearn.schemas.base import BaseSchema, IDMixin, ReadSchema, TimestampMixin


class ModuleBase(BaseSchema):
    """Base module schema."""

    title: str | None = Field(None, max_length=255)
    description: str | None = None
    image_url: str | None = None
    category: str | None = Field(None, max_length=100)
    difficulty: str | None = Field(None, max_length=50)
    estimated_time: int | None = None  # Minutes
    tags: list[str] | None = None


class ModuleCreate(ModuleBase):
    """Schema for creating a module. Missing or empty fields take defaults."""

    pass


class ModuleUpdate(ModuleBase):
    """Schema for replacing a module. Omitted fields are stored as null."""

    pass


class ModuleRead(IDMixin, TimestampMixin, ModuleBase, ReadSchema):
    """Schema for reading module data."""

    pass


class CategoryRead(BaseSchema):
    category: str
