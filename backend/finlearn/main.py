"""
Finance Learning API entry point.

Run with: uvicorn finlearn.main:app --reload
(or `python -m finlearn`, which reads host/port from settings)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from finlearn.config import get_settings
from finlearn.api.routes import (
    bookmarks,
    chapters,
    feedback,
    modules,
    notes,
    reviews,
    system,
    users,
)
from finlearn.db.session import Database
from finlearn.errors import register_exception_handlers

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Connect once at startup; a failed connect leaves the API fail-closed."""
    database = Database(
        settings.database_url,
        echo=settings.debug,
        requires_ssl=settings.database_requires_ssl,
    )
    if not await database.connect(create_tables=settings.database_create_tables):
        logger.error("Starting without a database; data endpoints will answer 500")
    app.state.database = database
    yield
    await database.disconnect()


app = FastAPI(
    title=settings.app_name,
    description="Modules, chapters, notes, bookmarks, reviews and feedback for the finance learning app",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# CORS middleware (added last, so it wraps the error middleware too)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(system.router)
app.include_router(modules.router)
app.include_router(chapters.router)
app.include_router(notes.router)
app.include_router(bookmarks.router)
app.include_router(reviews.router)
app.include_router(users.router)
app.include_router(feedback.router)


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run("finlearn.main:app", host=settings.host, port=settings.port)
