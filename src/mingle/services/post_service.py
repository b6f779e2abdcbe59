"""Service-level helpers applying the lifecycle rules to stored posts."""
from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from mingle.core.exceptions import PostNotFound, ValidationFailed
from mingle.db.time import utcnow
from mingle.models.post import Post, ReactionKind
from mingle.repositories.post_repo import PostRepository
from mingle.services import lifecycle

__all__ = [
    "comment_on_post",
    "create_post",
    "delete_post",
    "get_post",
    "react_to_post",
]


def get_post(repo: PostRepository, post_id: int) -> Post:
    """Return the post or raise ``PostNotFound``."""
    post = repo.get_by_id(post_id)
    if post is None:
        raise PostNotFound()
    return post


def create_post(
    repo: PostRepository,
    *,
    author_id: int,
    title: str,
    topics: Iterable[str],
    content: str,
    expiration_hours: float,
    now: datetime | None = None,
) -> Post:
    """Create a post owned by ``author_id``."""
    return repo.create(
        author_id=author_id,
        title=title,
        topics=topics,
        content=content,
        expiration_hours=expiration_hours,
        now=now,
    )


def react_to_post(
    repo: PostRepository,
    post_id: int,
    actor_id: int,
    kind: ReactionKind,
    now: datetime | None = None,
) -> Post:
    """Like or dislike a post on behalf of ``actor_id``.

    The rules run first so the reported error follows their fixed order; the
    store then enforces uniqueness again inside its write.

    Raises:
        PostNotFound: If the post does not exist.
        SelfInteractionDenied: If the actor wrote the post.
        PostExpired: If the post has expired.
        DuplicateInteraction: If the actor already reacted this way.
    """
    now = now or utcnow()
    post = get_post(repo, post_id)
    lifecycle.check_can_react(post, actor_id, kind, now)
    return repo.add_reaction(post_id, actor_id, kind)


def comment_on_post(
    repo: PostRepository,
    post_id: int,
    actor_id: int,
    text: str,
    now: datetime | None = None,
) -> Post:
    """Append a comment from ``actor_id`` and return the updated post."""
    text = text.strip()
    if not text:
        raise ValidationFailed("Comment text is required")

    now = now or utcnow()
    post = get_post(repo, post_id)
    lifecycle.check_can_comment(post, actor_id, now)
    return repo.add_comment(post, author_id=actor_id, text=text, now=now)


def delete_post(repo: PostRepository, post_id: int, actor_id: int) -> None:
    """Hard-delete a post. Only its author may do this, expired or not."""
    post = get_post(repo, post_id)
    lifecycle.check_can_delete(post, actor_id)
    repo.delete(post)
