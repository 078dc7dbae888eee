"""Liveness and diagnostic routes."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse
from sqlalchemy import inspect

from finlearn.api.deps import DbSession
from finlearn.errors import ApiError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    return "Finance Learning API Running"


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint. Does not touch the database."""
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "message": "Server is running",
    }


@router.get("/test")
async def database_check(db: DbSession) -> dict:
    """Round-trip to the database and list its tables."""
    try:
        tables = await db.run_sync(lambda session: inspect(session.connection()).get_table_names())
    except Exception as exc:
        logger.exception("Database test error")
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Database connection failed",
            message=str(exc),
        ) from exc

    return {
        "message": "Database connection successful",
        "database": db.get_bind().url.database,
        "collections": sorted(tables),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
