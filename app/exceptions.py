# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the service as the same JSON envelope:
#   {"success": false, "message": ..., "code": ..., "suggestion"?, "details"?}
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

# Routes whose request body is a set of credentials
CREDENTIAL_PATHS = {"/api/register", "/api/login"}


class ReelsException(Exception):
    """
    Base exception for the Reels API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "REELS_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "success": False,
            "message": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Registration / Login Exceptions
# =============================================================================

class DuplicateUserError(ReelsException):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        super().__init__(
            message="User already exists",
            code="USER_EXISTS",
            status_code=409,
            suggestion="Log in with this email or register a different one",
            details={"email": email},
        )


class InvalidCredentialsError(ReelsException):
    """Raised on login with an unknown email or a wrong password."""

    def __init__(self):
        super().__init__(
            message="Invalid email or password",
            code="INVALID_CREDENTIALS",
            status_code=401,
        )


# =============================================================================
# Token Exceptions
# =============================================================================

class MissingAuthError(ReelsException):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self):
        super().__init__(
            message="Missing authorization token",
            code="MISSING_AUTH",
            status_code=401,
            suggestion="Send 'Authorization: Bearer <token>' using the token from /api/login",
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidTokenError(ReelsException):
    """Raised when a bearer token is malformed, forged or expired."""

    def __init__(self, reason: str = "Invalid token"):
        super().__init__(
            message=reason,
            code="INVALID_TOKEN",
            status_code=401,
            suggestion="Log in again to get a fresh token",
            headers={"WWW-Authenticate": "Bearer"},
        )


# =============================================================================
# Rate Limit Exceptions
# =============================================================================

class RateLimitError(ReelsException):
    """Raised when a client exceeds its attempts for the current window."""

    def __init__(self, retry_after: int):
        super().__init__(
            message="Too many requests, please try again later.",
            code="RATE_LIMITED",
            status_code=429,
            headers={"Retry-After": str(retry_after)},
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class UploadValidationError(ReelsException):
    """Raised when the upload form lacks the video file or the title."""

    def __init__(self, missing: list[str]):
        super().__init__(
            message="Missing file or title",
            code="VALIDATION_ERROR",
            status_code=400,
            suggestion="Send a multipart form with a 'video' file and a 'title' field",
            details={"missing": missing},
        )


class UnsupportedMediaError(ReelsException):
    """Raised when the uploaded file is not a video."""

    def __init__(self, content_type: str | None):
        super().__init__(
            message=f"Unsupported media type: {content_type or 'unknown'}",
            code="UNSUPPORTED_MEDIA_TYPE",
            status_code=415,
            suggestion="Only video files (content type video/*) can be uploaded",
            details={"content_type": content_type},
        )


class FileTooLargeError(ReelsException):
    """Raised when an upload exceeds the size limit."""

    def __init__(self, max_mb: int):
        super().__init__(
            message=f"File too large (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"max_mb": max_mb},
        )


class StorageWriteError(ReelsException):
    """Raised when the uploaded bytes cannot be written to disk."""

    def __init__(self, filename: str):
        super().__init__(
            message="Failed to store uploaded file",
            code="STORAGE_WRITE_ERROR",
            status_code=500,
            suggestion="Try again later or contact support if the issue persists",
            details={"filename": filename},
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def reels_exception_handler(
    request: Request,
    exc: ReelsException
) -> JSONResponse:
    """
    Convert ReelsException to JSON response.

    Returns structured error with:
    - success: always false
    - message: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
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
    Handle Pydantic validation errors on request bodies.

    Malformed or missing input is a client error (400), reported with the
    offending field locations.
    """
    fields = [".".join(str(part) for part in err.get("loc", ())[1:]) for err in exc.errors()]
    if request.url.path in CREDENTIAL_PATHS:
        message = "Missing or invalid credentials"
    else:
        message = "Invalid request"
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": message,
            "code": "VALIDATION_ERROR",
            "details": {"fields": [f for f in fields if f]},
        }
    )


async def internal_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle unexpected exceptions without leaking their text to the client."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Server error",
            "code": "INTERNAL_ERROR",
        }
    )
