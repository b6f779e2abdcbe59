# src/mingle/schemas/post.py
"""Post-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from mingle.db.time import utcnow
from mingle.models.post import Post, Topic
from mingle.repositories.post_repo import MAX_EXPIRATION_HOURS
from mingle.services.lifecycle import PostStatus, post_status, time_left


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=256)
    topics: list[Topic] = Field(..., min_length=1, description="One or more of Politics, Health, Sport, Tech")
    content: str = Field(..., min_length=1, max_length=10_000)
    expiration_hours: float | None = Field(
        None,
        gt=0,
        le=MAX_EXPIRATION_HOURS,
        alias="expirationHours",
        description="Lifetime in hours; fractions allowed. Defaults to DEFAULT_EXPIRATION_HOURS.",
    )

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class CommentCreate(BaseModel):
    """Schema for adding a comment."""

    text: str = Field(..., min_length=1, max_length=5000)

    model_config = ConfigDict(str_strip_whitespace=True)


class CommentResponse(BaseModel):
    id: int
    author_id: int
    author_name: str | None = None
    text: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostResponse(BaseModel):
    """Schema for post information returned by the API.

    ``status`` and ``time_left`` are derived when the response is built and
    are never read from storage.
    """

    id: int
    title: str
    topics: list[str]
    content: str
    author_id: int
    author_name: str | None = None
    created_at: datetime
    expires_at: datetime
    likes: int
    dislikes: int
    liked_by: list[int]
    disliked_by: list[int]
    comments: list[CommentResponse]
    status: PostStatus
    time_left: str

    @classmethod
    def from_post(cls, post: Post, now: datetime | None = None) -> PostResponse:
        """Build a response for ``post`` as seen at ``now``."""
        now = now or utcnow()
        return cls(
            id=post.id,
            title=post.title,
            topics=post.topics,
            content=post.content,
            author_id=post.author_id,
            author_name=post.author_name,
            created_at=post.created_at,
            expires_at=post.expires_at,
            likes=post.likes,
            dislikes=post.dislikes,
            liked_by=sorted(post.liked_by),
            disliked_by=sorted(post.disliked_by),
            comments=[CommentResponse.model_validate(c) for c in post.comments],
            status=post_status(post, now),
            time_left=time_left(post, now),
        )


class LikeResponse(BaseModel):
    message: str
    likes: int


class DislikeResponse(BaseModel):
    message: str
    dislikes: int


class CommentsResponse(BaseModel):
    message: str
    comments: list[CommentResponse]
