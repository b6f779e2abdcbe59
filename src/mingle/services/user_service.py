"""Registration and login helpers."""
from __future__ import annotations

import logging

from mingle.core import security
from mingle.core.exceptions import InvalidCredentials
from mingle.models.user import User
from mingle.repositories.user_repo import UserRepository

__all__ = ["authenticate", "register_user"]

logger = logging.getLogger(__name__)


def register_user(repo: UserRepository, *, name: str, email: str, password: str) -> User:
    """Hash the password and persist a new user.

    Raises:
        DuplicateEmail: If the email is already registered.
    """
    return repo.create(
        name=name,
        email=email,
        password_hash=security.hash_password(password),
    )


def authenticate(repo: UserRepository, *, email: str, password: str) -> str:
    """Return a bearer token for valid credentials.

    Raises:
        InvalidCredentials: If the email is unknown or the password is wrong.
    """
    user = repo.get_by_email(email)
    if user is None:
        raise InvalidCredentials("User does not exist")
    if not security.verify_password(password, user.password_hash):
        logger.info("Rejected login for user %s: wrong password", user.id)
        raise InvalidCredentials("Password is wrong")
    return security.issue_token(user.id)
