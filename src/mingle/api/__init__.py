# src/mingle/api/__init__.py
"""HTTP API for the Mingle application."""

from .endpoints import auth_router, posts_router, users_router

__all__ = [
    "auth_router",
    "posts_router",
    "users_router",
]
