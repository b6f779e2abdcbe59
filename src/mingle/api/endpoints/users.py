"""User listing endpoints for the Mingle API."""

from collections.abc import Sequence

from fastapi import APIRouter, Query

from mingle.api.dependencies import CurrentUserDep, UserRepoDep
from mingle.models import User
from mingle.repositories.post_repo import MAX_PAGE_SIZE
from mingle.schemas.user import UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    current_user: CurrentUserDep,
    users: UserRepoDep,
    limit: int = Query(MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Maximum number of users"),
) -> Sequence[User]:
    """List registered users without their password hashes."""
    return users.list(limit=limit)
