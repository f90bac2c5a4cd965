# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data: request bodies for
# register/login, the decoded token, and the authenticated user.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from lib.passwords import MAX_PASSWORD_BYTES


class Credentials(BaseModel):
    """
    Email/password pair sent to /api/register and /api/login.

    Example:
        {"email": "a@x.com", "password": "secret1"}
    """

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_hash(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value


class RegisterRequest(Credentials):
    """Body of POST /api/register."""


class LoginRequest(Credentials):
    """Body of POST /api/login."""


class SuccessResponse(BaseModel):
    success: bool = True
    message: str


class LoginResponse(SuccessResponse):
    """Successful login; `token` goes in the Authorization header."""
    token: str


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a bearer token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    email: Optional[str] = None


class TokenPayload(BaseModel):
    """Decoded bearer token claims."""
    sub: str = Field(..., min_length=1)  # User ID
    email: Optional[str] = None
    iat: Optional[int] = None  # Issued at timestamp
    exp: int  # Expiration timestamp


class VerifyResponse(BaseModel):
    valid: bool = True
    user_id: str
    email: Optional[str] = None
