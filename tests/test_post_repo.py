# tests/test_post_repo.py
"""Tests for the post store: creation, queries, reactions, comments and deletion."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import func, select

from mingle.core.exceptions import DuplicateInteraction, PostNotFound, ValidationFailed
from mingle.models import PostComment, PostReaction, PostTopic, ReactionKind, Topic
from mingle.repositories.post_repo import MAX_EXPIRATION_HOURS, MAX_PAGE_SIZE, PostFilter, SortOrder
from mingle.services.lifecycle import PostStatus

CREATED = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


def test_create_sets_expiry_from_hours(post_repo, test_user) -> None:
    post = post_repo.create(
        author_id=test_user.id,
        title="Quick one",
        topics=["Tech"],
        content="Short lived",
        expiration_hours=1.5,
        now=CREATED,
    )
    assert post.id is not None
    assert post.created_at == CREATED
    assert post.expires_at == CREATED + timedelta(hours=1, minutes=30)
    assert post.likes == 0
    assert post.dislikes == 0
    assert post.liked_by == set()
    assert post.comments == []
    assert post.author_name == "Mary"


def test_create_collapses_duplicate_topics(post_repo, test_user) -> None:
    post = post_repo.create(
        author_id=test_user.id,
        title="Two topics",
        topics=["Sport", "Health", "Sport"],
        content="Running is good for you",
        expiration_hours=2,
    )
    assert sorted(post.topics) == ["Health", "Sport"]


@pytest.mark.parametrize(
    ("topics", "hours"),
    [
        ([], 1),
        (["Cooking"], 1),
        (["Tech"], 0),
        (["Tech"], -3),
        (["Tech"], MAX_EXPIRATION_HOURS + 1),
        (["Tech"], 1e9),
    ],
)
def test_create_rejects_invalid_input(post_repo, test_user, topics, hours) -> None:
    with pytest.raises(ValidationFailed):
        post_repo.create(
            author_id=test_user.id,
            title="Bad",
            topics=topics,
            content="Bad",
            expiration_hours=hours,
        )


def test_create_rejects_expiry_past_calendar_end(post_repo, test_user) -> None:
    with pytest.raises(ValidationFailed, match="out of range"):
        post_repo.create(
            author_id=test_user.id,
            title="Far future",
            topics=["Tech"],
            content="Still here?",
            expiration_hours=MAX_EXPIRATION_HOURS,
            now=datetime(9999, 6, 1, tzinfo=UTC),
        )


def test_add_reaction_keeps_counter_in_step(post_repo, test_post, other_user, third_user) -> None:
    post_repo.add_reaction(test_post.id, other_user.id, ReactionKind.LIKE)
    post = post_repo.add_reaction(test_post.id, third_user.id, ReactionKind.LIKE)

    assert post.likes == 2
    assert post.liked_by == {other_user.id, third_user.id}
    assert post.dislikes == 0
    assert post.disliked_by == set()


def test_add_reaction_rejects_duplicate(post_repo, db_session, test_post, other_user) -> None:
    post_repo.add_reaction(test_post.id, other_user.id, ReactionKind.LIKE)

    with pytest.raises(DuplicateInteraction):
        post_repo.add_reaction(test_post.id, other_user.id, ReactionKind.LIKE)

    post = post_repo.get_by_id(test_post.id)
    db_session.refresh(post)
    assert post.likes == 1
    rows = db_session.scalar(
        select(func.count()).select_from(PostReaction).where(PostReaction.post_id == test_post.id)
    )
    assert rows == 1


def test_like_and_dislike_from_same_user(post_repo, test_post, other_user) -> None:
    post_repo.add_reaction(test_post.id, other_user.id, ReactionKind.LIKE)
    post = post_repo.add_reaction(test_post.id, other_user.id, ReactionKind.DISLIKE)
    assert (post.likes, post.dislikes) == (1, 1)
    assert other_user.id in post.liked_by
    assert other_user.id in post.disliked_by


def test_add_reaction_missing_post(post_repo, other_user) -> None:
    with pytest.raises(PostNotFound):
        post_repo.add_reaction(99999, other_user.id, ReactionKind.LIKE)


def test_add_comment_appends_in_order(post_repo, test_post, test_user, other_user) -> None:
    post_repo.add_comment(test_post, author_id=other_user.id, text="First!")
    post = post_repo.add_comment(test_post, author_id=test_user.id, text="Thanks")

    assert [c.text for c in post.comments] == ["First!", "Thanks"]
    assert [c.author_name for c in post.comments] == ["Olga", "Mary"]


def test_list_filters_by_topic(post_repo, make_post) -> None:
    tech = make_post(title="Tech", topics=("Tech",))
    sport = make_post(title="Sport", topics=("Sport", "Health"))

    assert [p.id for p in post_repo.list(PostFilter(topic=Topic.TECH))] == [tech.id]
    assert [p.id for p in post_repo.list(PostFilter(topic=Topic.HEALTH))] == [sport.id]
    assert post_repo.list(PostFilter(topic=Topic.POLITICS)) == []


def test_list_filters_by_status(post_repo, test_post, expired_post) -> None:
    live = post_repo.list(PostFilter(status=PostStatus.LIVE))
    expired = post_repo.list(PostFilter(status=PostStatus.EXPIRED))

    assert [p.id for p in live] == [test_post.id]
    assert [p.id for p in expired] == [expired_post.id]
    assert {p.id for p in post_repo.list()} == {test_post.id, expired_post.id}


def test_status_filter_uses_given_time(post_repo, make_post) -> None:
    post = make_post(expiration_hours=1, created_at=CREATED)

    at_expiry = post_repo.list(PostFilter(status=PostStatus.LIVE), now=CREATED + timedelta(hours=1))
    after = post_repo.list(PostFilter(status=PostStatus.EXPIRED), now=CREATED + timedelta(hours=2))

    assert [p.id for p in at_expiry] == [post.id]
    assert [p.id for p in after] == [post.id]


def test_list_recent_first(post_repo, make_post) -> None:
    older = make_post(title="Older", created_at=CREATED)
    newer = make_post(title="Newer", created_at=CREATED + timedelta(minutes=5))

    assert [p.id for p in post_repo.list()] == [newer.id, older.id]


def test_list_by_interest(post_repo, make_post, other_user, third_user) -> None:
    quiet = make_post(title="Quiet", created_at=CREATED + timedelta(minutes=10))
    popular = make_post(title="Popular", created_at=CREATED)
    divisive = make_post(title="Divisive", created_at=CREATED + timedelta(minutes=1))

    for user in (other_user, third_user):
        post_repo.add_reaction(popular.id, user.id, ReactionKind.LIKE)
    post_repo.add_reaction(divisive.id, other_user.id, ReactionKind.DISLIKE)

    ordered = post_repo.list(PostFilter(sort_by=SortOrder.INTEREST))
    assert [p.id for p in ordered] == [popular.id, divisive.id, quiet.id]


def test_list_never_exceeds_page_size(post_repo, make_post) -> None:
    for i in range(MAX_PAGE_SIZE + 2):
        make_post(title=f"Post {i}")

    assert len(post_repo.list(PostFilter(limit=1000))) == MAX_PAGE_SIZE
    assert len(post_repo.list(PostFilter(limit=3))) == 3


def test_delete_removes_dependents(post_repo, db_session, test_post, other_user) -> None:
    post_id = test_post.id
    post_repo.add_reaction(post_id, other_user.id, ReactionKind.LIKE)
    post_repo.add_comment(test_post, author_id=other_user.id, text="Bye")

    post_repo.delete(test_post)

    assert post_repo.get_by_id(post_id) is None
    for model in (PostTopic, PostReaction, PostComment):
        remaining = db_session.scalar(
            select(func.count()).select_from(model).where(model.post_id == post_id)
        )
        assert remaining == 0
