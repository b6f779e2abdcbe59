"""Exception-to-HTTP-response mappings for the Mingle API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from mingle.core.exceptions import MingleError

logger = logging.getLogger(__name__)

_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def format_validation_error(error: Mapping[str, Any]) -> str:
    """Render one pydantic error as ``"field: message"``."""
    field = ".".join(str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES)
    message = str(error.get("msg", "Invalid input"))
    return f"{field}: {message}" if field else message


def register_exception_handlers(app: FastAPI) -> None:
    """Register handlers translating application errors to JSON responses.

    Domain errors keep their own status code, request validation failures
    become 400 with the first problem reported, and database failures become
    a generic 500 without internal detail.
    """

    @app.exception_handler(MingleError)
    async def mingle_error_handler(request: Request, exc: MingleError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        detail = format_validation_error(errors[0]) if errors else "Invalid input"
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Server error"},
        )
