"""Domain exceptions raised by the Mingle stores, rules and services.

Every exception carries the HTTP status it maps to so the API layer can
translate it without a lookup table. The handlers live in
``mingle.api.errors``.
"""

from __future__ import annotations

from fastapi import status


class MingleError(Exception):
    """Base class for all expected application errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailed(MingleError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class InvalidCredentials(MingleError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid email or password"


class Unauthorized(MingleError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access denied"


class InvalidToken(Unauthorized):
    default_message = "Invalid token"


class NotFoundError(MingleError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class PostNotFound(NotFoundError):
    default_message = "Post not found"


class Forbidden(MingleError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class SelfInteractionDenied(Forbidden):
    default_message = "You cannot react to your own post"


class PostExpired(Forbidden):
    default_message = "This post has expired"


class NotAuthor(Forbidden):
    default_message = "Only the post author can delete this post"


class Conflict(MingleError):
    # Existing clients expect 400 rather than 409 here.
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class DuplicateInteraction(Conflict):
    default_message = "You have already reacted to this post"


class DuplicateEmail(Conflict):
    default_message = "User already exists"
