"""Post lifecycle and interaction authorization rules.

Everything here is a pure function of a post's state, the acting user and the
current time. Nothing reads the clock implicitly or touches the database, so
the rules can be exercised against any object exposing the attributes in
``PostLike``.

Checks for like and dislike run in a fixed order so the reported error is
deterministic when several apply:

1. the actor is the author -> ``SelfInteractionDenied``
2. the post has expired -> ``PostExpired``
3. the actor already reacted this way -> ``DuplicateInteraction``

Comments only check expiry. Deletion only checks authorship, so an author can
delete an expired post.
"""

from __future__ import annotations

from collections.abc import Collection
from datetime import datetime
from enum import StrEnum
from typing import Protocol

from mingle.core.exceptions import (
    DuplicateInteraction,
    NotAuthor,
    PostExpired,
    SelfInteractionDenied,
)
from mingle.db.time import as_utc
from mingle.models.post import ReactionKind

__all__ = [
    "PostLike",
    "PostStatus",
    "can_interact",
    "check_can_comment",
    "check_can_delete",
    "check_can_dislike",
    "check_can_like",
    "check_can_react",
    "post_status",
    "time_left",
]

EXPIRED_LABEL = "Expired"


class PostStatus(StrEnum):
    LIVE = "Live"
    EXPIRED = "Expired"


class PostLike(Protocol):
    """Attributes the rules read from a post."""

    author_id: int
    expires_at: datetime

    @property
    def liked_by(self) -> Collection[int]: ...

    @property
    def disliked_by(self) -> Collection[int]: ...


def post_status(post: PostLike, now: datetime) -> PostStatus:
    """Return Live while ``now <= expires_at``, Expired afterwards."""
    if as_utc(now) > as_utc(post.expires_at):
        return PostStatus.EXPIRED
    return PostStatus.LIVE


def time_left(post: PostLike, now: datetime) -> str:
    """Describe the time remaining before expiry, e.g. ``"2d 5h"`` or ``"15m"``."""
    if post_status(post, now) is PostStatus.EXPIRED:
        return EXPIRED_LABEL

    remaining = int((as_utc(post.expires_at) - as_utc(now)).total_seconds())
    days, remaining = divmod(remaining, 86_400)
    hours, remaining = divmod(remaining, 3_600)
    minutes = remaining // 60

    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def can_interact(post: PostLike, now: datetime) -> bool:
    """Return False once the post has expired."""
    return post_status(post, now) is PostStatus.LIVE


def check_can_react(post: PostLike, actor_id: int, kind: ReactionKind, now: datetime) -> None:
    """Raise if ``actor_id`` may not add a reaction of ``kind`` to ``post``."""
    verb = "like" if kind is ReactionKind.LIKE else "dislike"
    if actor_id == post.author_id:
        raise SelfInteractionDenied(f"You cannot {verb} your own post")
    if not can_interact(post, now):
        raise PostExpired(f"Cannot {verb} an expired post")
    reacted = post.liked_by if kind is ReactionKind.LIKE else post.disliked_by
    if actor_id in reacted:
        raise DuplicateInteraction(f"You have already {verb}d this post")


def check_can_like(post: PostLike, actor_id: int, now: datetime) -> None:
    check_can_react(post, actor_id, ReactionKind.LIKE, now)


def check_can_dislike(post: PostLike, actor_id: int, now: datetime) -> None:
    check_can_react(post, actor_id, ReactionKind.DISLIKE, now)


def check_can_comment(post: PostLike, actor_id: int, now: datetime) -> None:
    """Raise ``PostExpired`` if the post no longer accepts comments.

    ``actor_id`` is accepted for symmetry; authors may comment on their own posts.
    """
    if not can_interact(post, now):
        raise PostExpired("Cannot comment on an expired post")


def check_can_delete(post: PostLike, actor_id: int) -> None:
    """Raise ``NotAuthor`` unless ``actor_id`` wrote the post."""
    if actor_id != post.author_id:
        raise NotAuthor()
