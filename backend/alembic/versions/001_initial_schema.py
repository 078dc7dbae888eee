"""Initial schema.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-18

Creates:
- Content: modules, chapters (chapters cascade with their module)
- User data: notes, bookmarks, reviews, feedback
- user_states: one row per user id, written with upserts
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONList = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamp(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)


def upgrade() -> None:
    # ==========================================================================
    # MODULES TABLE
    # ==========================================================================
    op.create_table(
        "modules",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("difficulty", sa.String(50), nullable=True),
        sa.Column("estimated_time", sa.Integer(), nullable=True),
        sa.Column("tags", JSONList, nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_modules_category", "modules", ["category"])
    op.create_index("idx_modules_created_at", "modules", ["created_at"])

    # ==========================================================================
    # CHAPTERS TABLE
    # ==========================================================================
    op.create_table(
        "chapters",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("module_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("video_url", sa.Text(), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("referenced_chapter", sa.Uuid(), nullable=True),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["module_id"], ["modules.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_chapters_module_id", "chapters", ["module_id"])

    # ==========================================================================
    # NOTES TABLE
    # ==========================================================================
    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("module_id", sa.String(255), nullable=True),
        sa.Column("chapter_id", sa.String(255), nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("topic", sa.String(255), nullable=True),
        sa.Column("content", sa.Text(), server_default="", nullable=False),
        sa.Column("tags", JSONList, nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notes_user_created_at", "notes", ["user_id", "created_at"])

    # ==========================================================================
    # BOOKMARKS TABLE
    # ==========================================================================
    op.create_table(
        "bookmarks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("chapter_id", sa.String(255), nullable=True),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("module_id", sa.String(255), nullable=True),
        sa.Column("module_title", sa.String(255), nullable=True),
        sa.Column("chapter_title", sa.String(255), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("tags", JSONList, nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("is_important", sa.Boolean(), server_default=sa.false(), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_bookmarks_user_created_at", "bookmarks", ["user_id", "created_at"])

    # ==========================================================================
    # REVIEWS TABLE
    # ==========================================================================
    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("user_name", sa.String(255), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        _timestamp("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )

    # ==========================================================================
    # FEEDBACK TABLE
    # ==========================================================================
    op.create_table(
        "feedback",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("user_name", sa.String(255), nullable=False),
        sa.Column("user_email", sa.String(255), server_default="", nullable=False),
        sa.Column("subject", sa.String(255), server_default="General Feedback", nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("rating", sa.Integer(), server_default="0", nullable=False),
        sa.Column("category", sa.String(100), server_default="general", nullable=False),
        sa.Column("status", sa.String(20), server_default="new", nullable=False),
        _timestamp("created_at"),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("status IN ('new', 'in-progress', 'resolved')", name="valid_feedback_status"),
    )

    # ==========================================================================
    # USER_STATES TABLE
    # ==========================================================================
    op.create_table(
        "user_states",
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("age", JSONList, nullable=True),
        sa.Column("domains", JSONList, nullable=True),
        sa.Column("experience", JSONList, nullable=True),
        sa.Column("onboarding_completed", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("recently_viewed_modules", JSONList, nullable=False),
        _timestamp("updated_at"),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    # Drop tables in reverse dependency order
    op.drop_table("user_states")
    op.drop_table("feedback")
    op.drop_table("reviews")
    op.drop_index("idx_bookmarks_user_created_at", table_name="bookmarks")
    op.drop_table("bookmarks")
    op.drop_index("idx_notes_user_created_at", table_name="notes")
    op.drop_table("notes")
    op.drop_index("ix_chapters_module_id", table_name="chapters")
    op.drop_table("chapters")
    op.drop_index("idx_modules_created_at", table_name="modules")
    op.drop_index("idx_modules_category", table_name="modules")
    op.drop_table("modules")
