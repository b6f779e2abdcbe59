"""Data access helpers for user accounts."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mingle.core.exceptions import DuplicateEmail
from mingle.models.user import User

__all__ = ["UserRepository"]

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository:
    """Credential store backed by the ``user_account`` table."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, user_id: int) -> User | None:
        """Return a single user by primary key."""
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        """Return the user registered with ``email``, ignoring case."""
        stmt = select(User).where(func.lower(User.email) == normalize_email(email))
        return self.session.scalars(stmt).first()

    def list(self, limit: int = 50) -> Sequence[User]:
        """Return users in registration order."""
        return self.session.scalars(select(User).order_by(User.id).limit(limit)).all()

    def create(self, *, name: str, email: str, password_hash: str) -> User:
        """Persist a new user.

        Raises:
            DuplicateEmail: If the email is already registered. The unique
                index catches registrations that race past the lookup.
        """
        email = normalize_email(email)
        if self.get_by_email(email) is not None:
            raise DuplicateEmail()

        user = User(name=name, email=email, password_hash=password_hash)
        try:
            with self.session.begin_nested():
                self.session.add(user)
                self.session.flush()
        except IntegrityError as err:
            raise DuplicateEmail() from err

        self.session.commit()
        self.session.refresh(user)
        logger.info("Registered user %s", user.id)
        return user
