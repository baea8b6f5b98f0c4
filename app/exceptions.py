# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized error taxonomy for the API. Services raise these; the handlers
# registered in app/main.py turn them into `{"message", "code"}` responses.
# Routes never catch them locally.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lib.supabase_client import StoreError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong!"


class ShowcaseException(Exception):
    """
    Base exception for the Creative Showcase API.

    All custom exceptions inherit from this class.
    Provides structured error responses.
    """

    def __init__(
        self,
        message: str,
        code: str = "SHOWCASE_ERROR",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "message": self.message,
            "code": self.code,
        }
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class ValidationError(ShowcaseException):
    """Raised when required fields are missing or malformed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details,
        )


class ConflictError(ShowcaseException):
    """Raised when a username, email or other unique value is already taken."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=400,
            details=details,
        )


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthError(ShowcaseException):
    """Raised when a bearer token is missing or invalid."""

    def __init__(self, message: str, code: str = "AUTH_ERROR", status_code: int = 401):
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            headers={"WWW-Authenticate": "Bearer"} if status_code == 401 else None,
        )


class InvalidCredentialsError(AuthError):
    """Raised when login email/password don't match a user."""

    def __init__(self):
        super().__init__(
            message="Invalid credentials",
            code="INVALID_CREDENTIALS",
            status_code=400,
        )


# =============================================================================
# Resource Exceptions
# =============================================================================

class NotFoundError(ShowcaseException):
    """Raised when a user or artwork doesn't exist."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404,
            details=details,
        )


class NotAuthorizedError(ShowcaseException):
    """
    Raised when the caller doesn't own the artwork.

    Surfaces as 404 so callers can't tell a foreign artwork from a
    missing one.
    """

    def __init__(self, message: str = "Not authorized"):
        super().__init__(
            message=message,
            code="NOT_AUTHORIZED",
            status_code=404,
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class InvalidFileTypeError(ShowcaseException):
    """Raised when the uploaded file's extension or content type is not allowed."""

    def __init__(self, filename: str, content_type: str | None, allowed: list[str]):
        super().__init__(
            message="Only image files allowed",
            code="INVALID_FILE_TYPE",
            status_code=400,
            details={
                "filename": filename,
                "content_type": content_type,
                "allowed_types": allowed,
            },
        )


class FileTooLargeError(ShowcaseException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, max_mb: int):
        super().__init__(
            message=f"File too large (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            details={"max_mb": max_mb},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def showcase_exception_handler(
    request: Request,
    exc: ShowcaseException
) -> JSONResponse:
    """Convert ShowcaseException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request schema validation errors.

    Malformed bodies, params and form fields are rejected uniformly with
    a 400 before they reach any service.
    """
    errors = exc.errors()
    message = _describe_validation_errors(errors)
    return JSONResponse(
        status_code=400,
        content={
            "message": message,
            "code": "VALIDATION_ERROR",
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Keep framework errors (unknown route, wrong method) in the same shape."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail), "code": "HTTP_ERROR"},
        headers=getattr(exc, "headers", None),
    )


async def store_exception_handler(
    request: Request,
    exc: StoreError
) -> JSONResponse:
    """Log data store failures; never echo their details to the client."""
    logger.error(f"Store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": GENERIC_ERROR_MESSAGE, "code": "STORE_ERROR"},
    )


async def unhandled_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"message": GENERIC_ERROR_MESSAGE, "code": "INTERNAL_ERROR"},
    )


def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    if not errors:
        return "Invalid request"

    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"

    # Drop the "body"/"query"/"path" prefix from the location
    location = [str(part) for part in first.get("loc", ())[1:]]
    field = ".".join(location)

    if first.get("type") == "missing":
        return f"{field} is required" if field else "Request body is required"
    if field:
        return f"{field}: {first.get('msg', 'invalid value')}"
    return first.get("msg", "Invalid request")
