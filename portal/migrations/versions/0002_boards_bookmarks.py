"""free board, board meetings, bookmarks

Revision ID: 0002
Revises: 0001
Create Date: 2025-02-03 10:00:00
"""
from alembic import op
import sqlalchemy as sa


revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def timestamps():
    return [
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade():
    op.create_table(
        "free_posts",
        *timestamps(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("views", sa.Integer(), nullable=False),
    )

    op.create_table(
        "free_post_comments",
        *timestamps(),
        sa.Column("post_id", sa.Uuid(), sa.ForeignKey("free_posts.id"), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
    )
    op.create_index("ix_free_post_comments_post_id", "free_post_comments", ["post_id"])

    op.create_table(
        "board_meetings",
        *timestamps(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("meeting_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
    )
    op.create_index("ix_board_meetings_meeting_date", "board_meetings", ["meeting_date"])

    op.create_table(
        "board_meeting_files",
        *timestamps(),
        sa.Column("board_meeting_id", sa.Uuid(), sa.ForeignKey("board_meetings.id"), nullable=False),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_type", sa.String(255), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("file_path", sa.String(1024), nullable=False),
    )
    op.create_index("ix_board_meeting_files_board_meeting_id", "board_meeting_files", ["board_meeting_id"])

    op.create_table(
        "bookmarks",
        *timestamps(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("url", sa.String(2048), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("icon", sa.String(255), nullable=True),
        sa.Column("user_id", sa.Uuid(), nullable=False),
    )
    op.create_index("ix_bookmarks_user_id", "bookmarks", ["user_id"])


def downgrade():
    op.drop_table("bookmarks")
    op.drop_table("board_meeting_files")
    op.drop_table("board_meetings")
    op.drop_table("free_post_comments")
    op.drop_table("free_posts")
