"""Pydantic schemas for API request/response validation."""

from finlearn.schemas.base import SuccessResponse
from finlearn.schemas.modules import CategoryRead, ModuleCreate, ModuleRead, ModuleUpdate
from finlearn.schemas.chapters import (
    ChapterCreate,
    ChapterDetail,
    ChapterRead,
    ChapterUpdate,
    ReferencedChapterData,
)
from finlearn.schemas.notes import NoteCreate, NoteRead, NoteUpdate
from finlearn.schemas.bookmarks import BookmarkCreate, BookmarkRead
from finlearn.schemas.reviews import ReviewCreate, ReviewRead
from finlearn.schemas.feedback import FeedbackCreate, FeedbackRead, FeedbackStatusUpdate
from finlearn.schemas.users import OnboardingStatus, OnboardingUpsert, RecentlyViewedUpsert

__all__ = [
    # Common
    "SuccessResponse",
    # Modules
    "CategoryRead",
    "ModuleCreate",
    "ModuleRead",
    "ModuleUpdate",
    # Chapters
    "ChapterCreate",
    "ChapterDetail",
    "ChapterRead",
    "ChapterUpdate",
    "ReferencedChapterData",
    # Notes
    "NoteCreate",
    "NoteRead",
    "NoteUpdate",
    # Bookmarks
    "BookmarkCreate",
    "BookmarkRead",
    # Reviews
    "ReviewCreate",
    "ReviewRead",
    # Feedback
    "FeedbackCreate",
    "FeedbackRead",
    "FeedbackStatusUpdate",
    # User state
    "OnboardingStatus",
    "OnboardingUpsert",
    "RecentlyViewedUpsert",
]
