"""initial schema

Revision ID: 5c1d2e7f9a10
Revises:
Create Date: 2025-11-20 14:02:11.418305

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1d2e7f9a10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create user, post, topic, reaction and comment tables."""
    op.create_table(
        "user_account",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=256), nullable=False),
        sa.Column("email", sa.String(length=256), nullable=False),
        sa.Column("password_hash", sa.String(length=1024), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_account_email", "user_account", ["email"], unique=True)

    op.create_table(
        "post",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(length=256), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False),
        sa.Column("dislikes", sa.Integer(), nullable=False),
        sa.CheckConstraint("likes >= 0", name="ck_post_likes_non_negative"),
        sa.CheckConstraint("dislikes >= 0", name="ck_post_dislikes_non_negative"),
        sa.ForeignKeyConstraint(["author_id"], ["user_account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_created_at", "post", ["created_at"])
    op.create_index("ix_post_expires_at", "post", ["expires_at"])

    op.create_table(
        "post_topic",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("topic", sa.String(length=16), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("post_id", "topic"),
    )

    op.create_table(
        "post_reaction",
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("kind", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("kind IN ('like', 'dislike')", name="ck_post_reaction_kind"),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["user_account.id"]),
        sa.PrimaryKeyConstraint("post_id", "user_id", "kind"),
    )
    op.create_index("ix_post_reaction_post_id", "post_reaction", ["post_id"])

    op.create_table(
        "post_comment",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("post_id", sa.Integer(), nullable=False),
        sa.Column("author_id", sa.Integer(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["user_account.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_post_comment_post_id", "post_comment", ["post_id"])


def downgrade() -> None:
    """Drop all Mingle tables."""
    op.drop_index("ix_post_comment_post_id", table_name="post_comment")
    op.drop_table("post_comment")
    op.drop_index("ix_post_reaction_post_id", table_name="post_reaction")
    op.drop_table("post_reaction")
    op.drop_table("post_topic")
    op.drop_index("ix_post_expires_at", table_name="post")
    op.drop_index("ix_post_created_at", table_name="post")
    op.drop_table("post")
    op.drop_index("ix_user_account_email", table_name="user_account")
    op.drop_table("user_account")
