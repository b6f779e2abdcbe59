# src/mingle/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import MessageResponse
from .post import (
    CommentCreate,
    CommentResponse,
    CommentsResponse,
    DislikeResponse,
    LikeResponse,
    PostCreate,
    PostResponse,
)
from .user import LoginRequest, LoginResponse, RegisterRequest, UserResponse

__all__ = [
    "MessageResponse",
    "CommentCreate", "CommentResponse", "CommentsResponse",
    "DislikeResponse", "LikeResponse",
    "PostCreate", "PostResponse",
    "LoginRequest", "LoginResponse", "RegisterRequest", "UserResponse",
]
