"""Shared API dependencies for authentication and data access."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.orm import Session

from mingle.core import security
from mingle.core.exceptions import InvalidToken, Unauthorized
from mingle.db.session import get_db
from mingle.models import User
from mingle.repositories.post_repo import PostRepository
from mingle.repositories.user_repo import UserRepository

AUTH_HEADER = "auth-token"

# auto_error is off so a missing header maps to 401 rather than FastAPI's default.
auth_token_scheme = APIKeyHeader(name=AUTH_HEADER, auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_post_repository(db: SessionDep) -> PostRepository:
    """Return a post store bound to the request's session."""
    return PostRepository(db)


def get_user_repository(db: SessionDep) -> UserRepository:
    """Return a credential store bound to the request's session."""
    return UserRepository(db)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


def get_current_user(
    token: Annotated[str | None, Depends(auth_token_scheme)],
    users: UserRepoDep,
) -> User:
    """Resolve the user named by the ``auth-token`` header.

    Raises:
        Unauthorized: If the header is missing or empty.
        InvalidToken: If the token fails verification or its user no longer exists.
    """
    if not token:
        raise Unauthorized()
    user_id = security.verify_token(token)
    user = users.get_by_id(user_id)
    if user is None:
        raise InvalidToken("User not found")
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
