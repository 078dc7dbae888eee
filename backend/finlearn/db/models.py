"""
SQLAlchemy 2.0 Models for the finance learning API.

Uses modern declarative syntax with Mapped[] type annotations.
Column types are portable: JSON lists become JSONB on PostgreSQL, and
UUIDs use the generic Uuid type so the same models run on SQLite in tests.

User ids are opaque strings supplied by clients; there is no users table.
"""

from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import Any, Optional
from uuid import UUID, uuid4

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from finlearn.db.base import Base

# JSON everywhere, JSONB on PostgreSQL
JSONList = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================


class FeedbackStatus(str, PyEnum):
    """Triage status of a feedback entry."""

    NEW = "new"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"


# =============================================================================
# MODELS
# =============================================================================


class Module(Base):
    """
    Top-level learning unit (e.g. "Crypto Basics").

    Parent of chapters; deleting a module deletes its chapters at the
    database level.
    """

    __tablename__ = "modules"
    __table_args__ = (
        Index("idx_modules_category", "category"),
        Index("idx_modules_created_at", "created_at"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, default="General")
    difficulty: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, default="beginner")
    estimated_time: Mapped[Optional[int]] = mapped_column(nullable=True, default=30)  # Minutes
    tags: Mapped[Optional[list[str]]] = mapped_column(JSONList, nullable=True, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


class Chapter(Base):
    """
    A single lesson within a module.

    ``referenced_chapter`` optionally points at another chapter, usually in a
    different module. It is an unchecked pointer: a dangling reference is
    simply not resolved when the chapter is read.
    """

    __tablename__ = "chapters"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    module_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("modules.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    video_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    referenced_chapter: Mapped[Optional[UUID]] = mapped_column(Uuid, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


class Note(Base):
    """
    User note, optionally scoped to a module and/or chapter.

    ``content`` is never null; older clients send ``text`` instead and the
    routes fold it into ``content``.
    """

    __tablename__ = "notes"
    __table_args__ = (Index("idx_notes_user_created_at", "user_id", "created_at"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    module_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    chapter_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    topic: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tags: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


class Bookmark(Base):
    """
    A user's saved pointer to a module or chapter.

    ``module_title`` and ``chapter_title`` are snapshots copied from the
    request at creation time. They are not kept in sync with the source
    module/chapter and go stale when those are renamed.
    Module bookmarks carry a marker in ``chapter_id`` (e.g. "module-bookmark").
    """

    __tablename__ = "bookmarks"
    __table_args__ = (Index("idx_bookmarks_user_created_at", "user_id", "created_at"),)

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    chapter_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    module_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    module_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    chapter_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSONList, nullable=False, default=list)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_important: Mapped[bool] = mapped_column(default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


class Review(Base):
    """App review left by a user."""

    __tablename__ = "reviews"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


class Feedback(Base):
    """User feedback with an admin-managed triage status."""

    __tablename__ = "feedback"
    __table_args__ = (
        CheckConstraint("status IN ('new', 'in-progress', 'resolved')", name="valid_feedback_status"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False)
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_email: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    subject: Mapped[str] = mapped_column(String(255), nullable=False, default="General Feedback")
    message: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(nullable=False, default=0)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="general")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=FeedbackStatus.NEW.value)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )


class UserState(Base):
    """
    Per-user profile and progress (1 row per user id).

    Written with upserts keyed by ``user_id``; concurrent writers race and
    the last write wins.
    """

    __tablename__ = "user_states"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    age: Mapped[Optional[Any]] = mapped_column(JSONList, nullable=True)
    domains: Mapped[Optional[Any]] = mapped_column(JSONList, nullable=True)
    experience: Mapped[Optional[Any]] = mapped_column(JSONList, nullable=True)
    onboarding_completed: Mapped[bool] = mapped_column(default=False, nullable=False)
    recently_viewed_modules: Mapped[list[Any]] = mapped_column(JSONList, nullable=False, default=list)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
