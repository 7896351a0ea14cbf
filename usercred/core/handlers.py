"""
Global exception handlers for the FastAPI application.

This module translates credential errors into HTTP responses. Every error
body has the shape ``{"detail": <message>, "code": <code>}``; validation
errors add ``"errors": {field: reason}``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from structlog import get_logger

from usercred.core.exceptions import (
    AlreadyExistsError,
    AuthenticationError,
    CredentialError,
    InternalError,
    InvalidCredentialsError,
    InvalidPasswordError,
    NotFoundError,
    UnavailableError,
    ValidationError,
)

__all__ = [
    "validation_error_handler",
    "request_validation_error_handler",
    "unprocessable_error_handler",
    "not_found_error_handler",
    "authentication_error_handler",
    "unavailable_error_handler",
    "credential_error_handler",
    "unhandled_exception_handler",
    "register_exception_handlers",
]

logger = get_logger(__name__)

RETRY_AFTER_SECONDS = "1"


def _error_response(
    status_code: int,
    exc: CredentialError,
    errors: Optional[Dict[str, str]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"detail": exc.message, "code": exc.code}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handles `ValidationError`, returning a `422 Unprocessable Entity`
    that lists every failing field."""
    return _error_response(422, exc, errors=exc.fields)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handles FastAPI body and path validation failures.

    They are reported in the same shape as :class:`ValidationError`, keyed by
    the last element of each error location.
    """
    fields: Dict[str, str] = {}
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        fields.setdefault(location[-1] if location else "body", error.get("msg", "Invalid value"))
    return await validation_error_handler(request, ValidationError(fields))


async def unprocessable_error_handler(request: Request, exc: CredentialError) -> JSONResponse:
    """Handles `AlreadyExistsError`, `InvalidCredentialsError` and
    `InvalidPasswordError`, returning a `422 Unprocessable Entity`.

    Args:
        request: The incoming `Request` object.
        exc: The exception instance.

    Returns:
        A `JSONResponse` with a 422 status code, message and code.
    """
    return _error_response(422, exc)


async def not_found_error_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    """Handles `AuthenticationError`, returning a `401 Unauthorized`.

    This covers a missing bearer token as well as invalid and expired ones.

    Args:
        request: The incoming `Request` object.
        exc: The `AuthenticationError` instance.

    Returns:
        A `JSONResponse` with a 401 status code and a `WWW-Authenticate` header.
    """
    logger.warning(
        "Authentication failure",
        error=exc.code,
        client_ip=request.client.host if request.client else None,
        path=request.url.path,
    )
    return _error_response(
        status.HTTP_401_UNAUTHORIZED,
        exc,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def unavailable_error_handler(request: Request, exc: UnavailableError) -> JSONResponse:
    """Handles `UnavailableError`, returning a `503 Service Unavailable`.

    The client may retry the same request after the `Retry-After` delay.
    """
    logger.warning("Service unavailable", path=request.url.path)
    return _error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        exc,
        headers={"Retry-After": RETRY_AFTER_SECONDS},
    )


async def credential_error_handler(request: Request, exc: CredentialError) -> JSONResponse:
    """Fallback for any other `CredentialError`, returning a `500`.

    Only the generic internal message is sent; the original is logged.
    """
    logger.error("Unhandled credential error", error=exc.code, detail=exc.message, path=request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled exception",
        error_type=type(exc).__name__,
        path=request.url.path,
        exc_info=exc,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all custom exception handlers with the FastAPI application.

    Starlette resolves handlers along the exception's MRO, so the specific
    types below win over the ``CredentialError`` and ``Exception`` fallbacks.

    Args:
        app: The `FastAPI` application instance.
    """
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(AlreadyExistsError, unprocessable_error_handler)
    app.add_exception_handler(InvalidCredentialsError, unprocessable_error_handler)
    app.add_exception_handler(InvalidPasswordError, unprocessable_error_handler)
    app.add_exception_handler(NotFoundError, not_found_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(UnavailableError, unavailable_error_handler)
    app.add_exception_handler(CredentialError, credential_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
