"""API routes package."""

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

__all__ = [
    "bookmarks",
    "chapters",
    "feedback",
    "modules",
    "notes",
    "reviews",
    "system",
    "users",
]
