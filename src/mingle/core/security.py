"""Credential hashing and bearer token helpers."""
from __future__ import annotations

from datetime import timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from mingle.core.exceptions import InvalidToken
from mingle.core.settings import settings
from mingle.db.time import utcnow

# argon2 has no 72-byte input limit, so long passwords hash in full.
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    """Return a salted argon2 digest of ``password``."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if ``password`` matches the stored digest."""
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # Unrecognised or corrupt digest.
        return False


def issue_token(user_id: int) -> str:
    """Create a signed token whose subject is the user's id.

    The token has no ``exp`` claim unless ``TOKEN_EXPIRE_MINUTES`` is set.
    """
    to_encode: dict[str, object] = {"sub": str(user_id), "iat": utcnow()}
    if settings.token_expire_minutes is not None:
        to_encode["exp"] = utcnow() + timedelta(minutes=settings.token_expire_minutes)
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def verify_token(token: str) -> int:
    """Return the user id encoded in ``token``.

    Raises:
        InvalidToken: If the token is malformed, tampered with, signed with a
            different algorithm, expired, or lacks an integer subject.
    """
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidToken() from err

    subject = payload.get("sub")
    if subject is None:
        raise InvalidToken()
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise InvalidToken() from err
