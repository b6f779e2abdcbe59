# src/mingle/models/__init__.py
"""SQLAlchemy models for the Mingle application."""

from .post import Post, PostComment, PostReaction, PostTopic, ReactionKind, Topic
from .user import User

__all__ = [
    "Post", "PostComment", "PostReaction", "PostTopic",
    "ReactionKind", "Topic",
    "User",
]
