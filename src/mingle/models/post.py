# src/mingle/models/post.py
"""SQLAlchemy models for posts and related attributes."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mingle.db.session import Base
from mingle.db.time import UTCDateTime, utcnow
from mingle.models.user import User


class Topic(StrEnum):
    """Fixed set of topics a post can be tagged with."""

    POLITICS = "Politics"
    HEALTH = "Health"
    SPORT = "Sport"
    TECH = "Tech"


class ReactionKind(StrEnum):
    LIKE = "like"
    DISLIKE = "dislike"


class Post(Base):
    """Time-limited content item.

    ``expires_at`` is fixed at creation. Whether a post is Live or Expired is
    never stored; see ``mingle.services.lifecycle``.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_post_likes_non_negative"),
        CheckConstraint("dislikes >= 0", name="ck_post_dislikes_non_negative"),
        Index("ix_post_created_at", "created_at"),
        Index("ix_post_expires_at", "expires_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)

    # Kept equal to the number of matching reaction rows; only
    # PostRepository.add_reaction changes them.
    likes: Mapped[int] = mapped_column(default=0, nullable=False)
    dislikes: Mapped[int] = mapped_column(default=0, nullable=False)

    author: Mapped[User] = relationship("User", lazy="joined")
    topic_rows: Mapped[list[PostTopic]] = relationship(
        "PostTopic",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostTopic.topic",
    )
    reactions: Mapped[list[PostReaction]] = relationship(
        "PostReaction",
        back_populates="post",
        cascade="all, delete-orphan",
    )
    comments: Mapped[list[PostComment]] = relationship(
        "PostComment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostComment.id",
    )

    @property
    def topics(self) -> list[str]:
        """Return the post's topic names."""
        return [row.topic for row in self.topic_rows]

    @property
    def author_name(self) -> str | None:
        return self.author.name if self.author is not None else None

    @property
    def liked_by(self) -> set[int]:
        """Return ids of users who liked the post."""
        return {r.user_id for r in self.reactions if r.kind == ReactionKind.LIKE}

    @property
    def disliked_by(self) -> set[int]:
        """Return ids of users who disliked the post."""
        return {r.user_id for r in self.reactions if r.kind == ReactionKind.DISLIKE}


class PostTopic(Base):
    """Membership of a post in one topic."""

    __tablename__ = "post_topic"

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    topic: Mapped[str] = mapped_column(String(16), primary_key=True)

    post: Mapped[Post] = relationship("Post", back_populates="topic_rows")


class PostReaction(Base):
    """A like or dislike from one user on one post."""

    __tablename__ = "post_reaction"
    __table_args__ = (
        CheckConstraint("kind IN ('like', 'dislike')", name="ck_post_reaction_kind"),
        Index("ix_post_reaction_post_id", "post_id"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        primary_key=True,
    )
    kind: Mapped[str] = mapped_column(String(8), primary_key=True)

    # Composite primary key prevents the same user reacting twice in the same way.

    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)

    post: Mapped[Post] = relationship("Post", back_populates="reactions")


class PostComment(Base):
    """Comment embedded in a post; it has no lifecycle of its own."""

    __tablename__ = "post_comment"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, default=utcnow, nullable=False)

    post: Mapped[Post] = relationship("Post", back_populates="comments")
    author: Mapped[User] = relationship("User", lazy="joined")

    @property
    def author_name(self) -> str | None:
        return self.author.name if self.author is not None else None
