# src/mingle/api/endpoints/posts.py
"""Post-related endpoints for the Mingle API."""

from fastapi import APIRouter, Query, status

from mingle.api.dependencies import CurrentUserDep, PostRepoDep
from mingle.core.settings import settings
from mingle.db.time import utcnow
from mingle.models import ReactionKind, Topic
from mingle.repositories.post_repo import MAX_PAGE_SIZE, PostFilter, SortOrder
from mingle.schemas.common import MessageResponse
from mingle.schemas.post import (
    CommentCreate,
    CommentResponse,
    CommentsResponse,
    DislikeResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)
from mingle.services import post_service
from mingle.services.lifecycle import PostStatus

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostResponse])
async def list_posts(
    current_user: CurrentUserDep,
    posts: PostRepoDep,
    topic: Topic | None = Query(None, description="Only posts tagged with this topic"),
    status_filter: PostStatus | None = Query(None, alias="status", description="Live or Expired"),
    sort_by: SortOrder = Query(SortOrder.RECENT, alias="sortBy", description="recent or interest"),
    limit: int = Query(MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Maximum number of posts"),
) -> list[PostResponse]:
    """List posts with optional topic/status filters.

    Status is evaluated against the current time, so a post can move from
    Live to Expired between two identical requests.
    """
    now = utcnow()
    filters = PostFilter(topic=topic, status=status_filter, sort_by=sort_by, limit=limit)
    return [PostResponse.from_post(post, now) for post in posts.list(filters, now=now)]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: int, current_user: CurrentUserDep, posts: PostRepoDep) -> PostResponse:
    """Get a specific post by ID."""
    post = post_service.get_post(posts, post_id)
    return PostResponse.from_post(post)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    posts: PostRepoDep,
) -> PostResponse:
    """Create a post owned by the caller.

    ``expirationHours`` falls back to the configured default when omitted.
    """
    now = utcnow()
    post = post_service.create_post(
        posts,
        author_id=current_user.id,
        title=post_data.title,
        topics=post_data.topics,
        content=post_data.content,
        expiration_hours=post_data.expiration_hours or settings.default_expiration_hours,
        now=now,
    )
    return PostResponse.from_post(post, now)


@router.put("/{post_id}/like", response_model=LikeResponse)
async def like_post(post_id: int, current_user: CurrentUserDep, posts: PostRepoDep) -> LikeResponse:
    """Like someone else's live post once."""
    post = post_service.react_to_post(posts, post_id, current_user.id, ReactionKind.LIKE)
    return LikeResponse(message="Post liked", likes=post.likes)


@router.put("/{post_id}/dislike", response_model=DislikeResponse)
async def dislike_post(
    post_id: int,
    current_user: CurrentUserDep,
    posts: PostRepoDep,
) -> DislikeResponse:
    """Dislike someone else's live post once."""
    post = post_service.react_to_post(posts, post_id, current_user.id, ReactionKind.DISLIKE)
    return DislikeResponse(message="Post disliked", dislikes=post.dislikes)


@router.post(
    "/{post_id}/comment",
    response_model=CommentsResponse,
    status_code=status.HTTP_201_CREATED,
)
async def comment_on_post(
    post_id: int,
    comment: CommentCreate,
    current_user: CurrentUserDep,
    posts: PostRepoDep,
) -> CommentsResponse:
    """Add a comment to a live post and return the full comment thread."""
    post = post_service.comment_on_post(posts, post_id, current_user.id, comment.text)
    return CommentsResponse(
        message="Comment added",
        comments=[CommentResponse.model_validate(c) for c in post.comments],
    )


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(post_id: int, current_user: CurrentUserDep, posts: PostRepoDep) -> MessageResponse:
    """Permanently delete a post. Only its author may do this."""
    post_service.delete_post(posts, post_id, current_user.id)
    return MessageResponse(message="Post deleted")
