"""initial schema

Revision ID: 0001
Revises:
Create Date: 2025-01-06 10:00:00
"""
from alembic import op
import sqlalchemy as sa


revision = "0001"
down_revision = None
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
        "users",
        *timestamps(),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "profiles",
        *timestamps(),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("department", sa.String(100), nullable=True),
        sa.Column("role", sa.String(50), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("image", sa.String(1024), nullable=True),
    )
    op.create_index("ix_profiles_email", "profiles", ["email"])

    op.create_table(
        "calendar_events",
        *timestamps(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
    )
    op.create_index("ix_calendar_events_start_time", "calendar_events", ["start_time"])

    op.create_table(
        "documents",
        *timestamps(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("file_path", sa.String(1024), nullable=False),
        sa.Column("file_type", sa.String(255), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
    )

    op.create_table(
        "notices",
        *timestamps(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("views", sa.Integer(), nullable=False),
        sa.Column("attachment_url", sa.String(1024), nullable=True),
    )
    op.create_table(
        "notice_comments",
        *timestamps(),
        sa.Column("notice_id", sa.Uuid(), sa.ForeignKey("notices.id"), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
    )
    op.create_index("ix_notice_comments_notice_id", "notice_comments", ["notice_id"])

    op.create_table(
        "donation_receipts",
        *timestamps(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("amount", sa.Numeric(14, 2), nullable=False),
        sa.Column("processed", sa.Boolean(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("receipt_file", sa.String(1024), nullable=True),
    )
    op.create_table(
        "donation_receipt_comments",
        *timestamps(),
        sa.Column("receipt_id", sa.Uuid(), sa.ForeignKey("donation_receipts.id"), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("author", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("attachment_url", sa.String(1024), nullable=True),
    )
    op.create_index("ix_donation_receipt_comments_receipt_id", "donation_receipt_comments", ["receipt_id"])

    op.create_table(
        "chats",
        *timestamps(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("creator_id", sa.Uuid(), nullable=False),
    )
    op.create_table(
        "chat_participants",
        *timestamps(),
        sa.Column("chat_id", sa.Uuid(), sa.ForeignKey("chats.id"), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("chat_id", "user_id", name="uq_chat_participant"),
    )
    op.create_index("ix_chat_participants_chat_id", "chat_participants", ["chat_id"])
    op.create_table(
        "messages",
        *timestamps(),
        sa.Column("chat_id", sa.Uuid(), sa.ForeignKey("chats.id"), nullable=False),
        sa.Column("sender_id", sa.Uuid(), nullable=False),
        sa.Column("sender_name", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("file_path", sa.String(1024), nullable=True),
        sa.Column("file_name", sa.String(255), nullable=True),
        sa.Column("file_type", sa.String(255), nullable=True),
        sa.Column("file_size", sa.BigInteger(), nullable=True),
    )
    op.create_index("ix_messages_chat_id", "messages", ["chat_id"])


def downgrade():
    op.drop_table("messages")
    op.drop_table("chat_participants")
    op.drop_table("chats")
    op.drop_table("donation_receipt_comments")
    op.drop_table("donation_receipts")
    op.drop_table("notice_comments")
    op.drop_table("notices")
    op.drop_table("documents")
    op.drop_table("calendar_events")
    op.drop_table("profiles")
    op.drop_table("users")
