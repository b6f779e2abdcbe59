# src/mingle/main.py
"""Main entry point for the Mingle application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from mingle.api import auth_router, posts_router, users_router
from mingle.api.errors import register_exception_handlers
from mingle.core.log_config import configure_logging
from mingle.core.settings import settings
from mingle.db.session import create_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging()
    if settings.create_tables_on_startup:
        create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield


# Initialize FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Time-limited social posting API",
    version=settings.app_version,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
    expose_headers=["auth-token"],
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

register_exception_handlers(app)

# Include API routers
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(users_router, prefix=settings.api_prefix)
app.include_router(posts_router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "message": f"{settings.app_name} is running.",
        "version": settings.app_version,
        "docs": "/docs",
    }


@app.get(settings.api_prefix)
async def api_root() -> dict[str, str]:
    """Welcome message for the API namespace."""
    return {"message": f"Welcome to the {settings.app_name}"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("mingle.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
