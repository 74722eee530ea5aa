"""Exception handlers for the FastAPI application.

Every error leaves the API as ``{"error": true, "message", "status_code"}``
so clients can tell a missing shipping method apart from an order that
has already shipped.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.domain.exceptions import (
    ConflictError,
    DomainException,
    ForbiddenError,
    InvalidTransitionError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[DomainException], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidTransitionError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    ConflictError: status.HTTP_409_CONFLICT,
    UnexpectedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error_response(status_code: int, message: object, **extra: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": True, "message": message, "status_code": status_code, **extra},
    )


def status_for(exc: DomainException) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map the domain error taxonomy onto HTTP status codes."""
    if not isinstance(exc, DomainException):
        return await global_exception_handler(request, exc)
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error(
            f"{type(exc).__name__} on {request.method} {request.url.path}: {exc!s}",
            exc_info=exc,
        )
        return _error_response(status_code, "Internal server error")

    logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc!s}")
    return _error_response(status_code, str(exc))


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with the same response format."""
    if not isinstance(exc, StarletteHTTPException):
        return await global_exception_handler(request, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": True, "message": exc.detail, "status_code": exc.status_code},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Malformed request bodies and query strings are plain 400s."""
    if not isinstance(exc, RequestValidationError):
        return _error_response(status.HTTP_400_BAD_REQUEST, str(exc))
    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Validation error on {request.url.path}: {errors}")
    return _error_response(status.HTTP_400_BAD_REQUEST, "Validation error", details=errors)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log anything unhandled with its traceback and return a safe 500."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=True,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
