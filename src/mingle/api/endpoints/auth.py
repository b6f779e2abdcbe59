# src/mingle/api/endpoints/auth.py
"""Authentication endpoints for the Mingle API."""

from __future__ import annotations

from fastapi import APIRouter, Response, status

from mingle.api.dependencies import AUTH_HEADER, CurrentUserDep, UserRepoDep
from mingle.models import User
from mingle.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from mingle.services import user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
)
async def register_user(payload: RegisterRequest, users: UserRepoDep) -> User:
    """Create an account. The response never includes the password hash."""
    return user_service.register_user(
        users,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )


@router.post(
    "/login",
    summary="Exchange credentials for an auth token",
    response_model=LoginResponse,
)
async def login_user(payload: LoginRequest, users: UserRepoDep, response: Response) -> LoginResponse:
    """Return a token in the body and echo it in the ``auth-token`` header."""
    token = user_service.authenticate(users, email=payload.email, password=payload.password)
    response.headers[AUTH_HEADER] = token
    return LoginResponse(auth_token=token)


@router.get("/me", summary="Return the authenticated user", response_model=UserResponse)
async def read_me(current_user: CurrentUserDep) -> User:
    return current_user
