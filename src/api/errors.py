"""Application-wide exception handlers."""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

VALIDATION_FAILED_MESSAGE = "The given data was invalid."


def format_validation_errors(errors: Sequence[Any]) -> dict[str, list[str]]:
    """Group validation errors into a field name -> messages mapping."""
    fields: dict[str, list[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        # Drop the "body"/"path"/"query" source unless it is all there is
        if len(loc) > 1 and loc[0] in ("body", "path", "query", "header"):
            loc = loc[1:]
        field = ".".join(loc) or "__root__"
        fields.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return fields


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Render request validation errors as a field map."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "message": VALIDATION_FAILED_MESSAGE,
            "errors": format_validation_errors(exc.errors()),
        },
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"message": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unexpected_error_handler(request: Request, exc: Exception):
    """Hide unexpected failures behind a generic 500."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Server Error."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to an application."""
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
