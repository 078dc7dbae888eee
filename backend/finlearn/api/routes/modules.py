"""Module CRUD routes."""

from uuid import UUID

from fastapi import APIRouter
from sqlalchemy import delete, select, update

from finlearn.api.deps import DbSession
from finlearn.db.models import Module, utcnow
from finlearn.errors import store_errors
from finlearn.schemas.base import SuccessResponse
from finlearn.schemas.modules import CategoryRead, ModuleCreate, ModuleRead, ModuleUpdate

router = APIRouter(tags=["modules"])

ALL_CATEGORIES = "all"


@router.get("/modules", response_model=list[ModuleRead])
async def list_modules(
    db: DbSession,
    category: str | None = None,
) -> list[ModuleRead]:
    """List modules, newest first. ``category=all`` is the same as no filter."""
    query = select(Module)
    if category and category != ALL_CATEGORIES:
        query = query.where(Module.category == category)
    query = query.order_by(Module.created_at.desc())

    with store_errors("Failed to fetch modules"):
        result = await db.execute(query)
    return [ModuleRead.model_validate(m) for m in result.scalars()]


@router.get("/categories", response_model=list[CategoryRead])
async def list_categories(db: DbSession) -> list[CategoryRead]:
    """Distinct module categories."""
    query = (
        select(Module.category)
        .where(Module.category.is_not(None))
        .distinct()
        .order_by(Module.category)
    )
    with store_errors("Failed to fetch categories"):
        result = await db.execute(query)
    return [CategoryRead(category=c) for c in result.scalars()]


@router.post("/modules", response_model=ModuleRead)
async def create_module(data: ModuleCreate, db: DbSession) -> ModuleRead:
    """Create a new module.

    Empty category/difficulty/estimated_time/tags fall back to
    "General"/"beginner"/30/[]. Identical bodies create separate modules.
    """
    now = utcnow()
    new_module = Module(
        title=data.title,
        description=data.description,
        image_url=data.image_url,
        category=data.category or "General",
        difficulty=data.difficulty or "beginner",
        estimated_time=data.estimated_time or 30,
        tags=data.tags or [],
        created_at=now,
        updated_at=now,
    )
    with store_errors("Failed to create module"):
        db.add(new_module)
        await db.commit()
        await db.refresh(new_module)
    return ModuleRead.model_validate(new_module)


@router.put("/modules/{module_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def update_module(module_id: UUID, data: ModuleUpdate, db: DbSession) -> SuccessResponse:
    """Replace a module's fields. Omitted fields become null."""
    stmt = (
        update(Module)
        .where(Module.id == module_id)
        .values(**data.model_dump(), updated_at=utcnow())
    )
    with store_errors("Failed to update module"):
        await db.execute(stmt)
        await db.commit()
    return SuccessResponse()


@router.delete("/modules/{module_id}", response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_module(module_id: UUID, db: DbSession) -> SuccessResponse:
    """Delete a module and, through the foreign key, its chapters."""
    with store_errors("Failed to delete module"):
        await db.execute(delete(Module).where(Module.id == module_id))
        await db.commit()
    return SuccessResponse()
