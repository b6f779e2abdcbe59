"""Data access helpers for working with posts."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import StrEnum

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mingle.core.exceptions import DuplicateInteraction, PostNotFound, ValidationFailed
from mingle.db.time import utcnow
from mingle.models.post import Post, PostComment, PostReaction, PostTopic, ReactionKind, Topic
from mingle.services.lifecycle import PostStatus

__all__ = ["MAX_EXPIRATION_HOURS", "MAX_PAGE_SIZE", "PostFilter", "PostRepository", "SortOrder"]

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 50
# Ten years.
MAX_EXPIRATION_HOURS = 87_600


class SortOrder(StrEnum):
    RECENT = "recent"
    INTEREST = "interest"


@dataclass(frozen=True)
class PostFilter:
    """Criteria accepted by ``PostRepository.list``."""

    topic: Topic | None = None
    status: PostStatus | None = None
    sort_by: SortOrder = SortOrder.RECENT
    limit: int = MAX_PAGE_SIZE


class PostRepository:
    """Thin wrapper around database access for post entities.

    Each mutating method is one unit of work and commits before returning.
    """

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def list(self, filters: PostFilter | None = None, now: datetime | None = None) -> list[Post]:
        """Return posts matching ``filters``.

        Status is evaluated against ``now`` at query time. The result never
        holds more than ``MAX_PAGE_SIZE`` posts.
        """
        filters = filters or PostFilter()
        now = now or utcnow()

        stmt = select(Post)
        if filters.topic is not None:
            stmt = stmt.where(Post.topic_rows.any(PostTopic.topic == filters.topic.value))
        if filters.status is PostStatus.LIVE:
            stmt = stmt.where(Post.expires_at >= now)
        elif filters.status is PostStatus.EXPIRED:
            stmt = stmt.where(Post.expires_at < now)

        if filters.sort_by is SortOrder.INTEREST:
            stmt = stmt.order_by(
                Post.likes.desc(),
                Post.dislikes.desc(),
                Post.created_at.desc(),
                Post.id.desc(),
            )
        else:
            stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())

        limit = max(1, min(filters.limit, MAX_PAGE_SIZE))
        return list(self.session.scalars(stmt.limit(limit)).unique())

    def create(
        self,
        *,
        author_id: int,
        title: str,
        topics: Iterable[str],
        content: str,
        expiration_hours: float,
        now: datetime | None = None,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance.

        Args:
            author_id: Id of the authenticated user creating the post.
            title: Post title.
            topics: Topic names; duplicates collapse and at least one is required.
            content: Post body.
            expiration_hours: Lifetime in hours. Fractions are allowed.
            now: Creation time, defaults to the current UTC time.

        Raises:
            ValidationFailed: If no topic is given, a topic is unknown, or the
                lifetime is not in (0, MAX_EXPIRATION_HOURS].
        """
        try:
            unique_topics = [Topic(topic) for topic in dict.fromkeys(topics)]
        except ValueError as err:
            raise ValidationFailed(str(err)) from err
        if not unique_topics:
            raise ValidationFailed("At least one topic is required")
        if not 0 < expiration_hours <= MAX_EXPIRATION_HOURS:
            raise ValidationFailed(
                f"expirationHours must be greater than 0 and at most {MAX_EXPIRATION_HOURS}"
            )

        created_at = now or utcnow()
        try:
            expires_at = created_at + timedelta(hours=expiration_hours)
        except (OverflowError, ValueError) as err:
            raise ValidationFailed("expirationHours is out of range") from err

        post = Post(
            author_id=author_id,
            title=title,
            content=content,
            created_at=created_at,
            expires_at=expires_at,
        )
        post.topic_rows = [PostTopic(topic=topic.value) for topic in unique_topics]
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        logger.info(
            "Created post %s by user %s expiring at %s",
            post.id,
            author_id,
            post.expires_at.isoformat(),
        )
        return post

    def add_reaction(self, post_id: int, user_id: int, kind: ReactionKind) -> Post:
        """Record a like or dislike and bump the matching counter atomically.

        The reaction row and the counter increment share one savepoint. The
        composite primary key on ``post_reaction`` rejects a second reaction of
        the same kind from the same user, so racing duplicates cannot both land.

        Raises:
            DuplicateInteraction: If the user already reacted this way.
            PostNotFound: If the post no longer exists.
        """
        counter = Post.likes if kind is ReactionKind.LIKE else Post.dislikes
        try:
            with self.session.begin_nested():
                # Counter first: a missing post must not surface as a key violation.
                result = self.session.execute(
                    update(Post)
                    .where(Post.id == post_id)
                    .values({counter: counter + 1})
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    raise PostNotFound()
                self.session.add(PostReaction(post_id=post_id, user_id=user_id, kind=kind.value))
                self.session.flush()
        except IntegrityError as err:
            logger.warning("Rejected duplicate %s on post %s by user %s", kind, post_id, user_id)
            raise DuplicateInteraction(f"You have already {kind}d this post") from err

        self.session.commit()
        post = self.get_by_id(post_id)
        if post is None:
            raise PostNotFound()
        self.session.refresh(post)
        return post

    def add_comment(
        self,
        post: Post,
        *,
        author_id: int,
        text: str,
        now: datetime | None = None,
    ) -> Post:
        """Append a comment to ``post`` and return the refreshed post."""
        comment = PostComment(
            post_id=post.id,
            author_id=author_id,
            text=text,
            created_at=now or utcnow(),
        )
        self.session.add(comment)
        self.session.commit()
        self.session.refresh(post)
        return post

    def delete(self, post: Post) -> None:
        """Permanently remove ``post`` together with its topics, reactions and comments."""
        post_id = post.id
        self.session.delete(post)
        self.session.commit()
        logger.info("Deleted post %s", post_id)
