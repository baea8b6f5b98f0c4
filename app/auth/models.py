# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from an access token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID


class RegisterRequest(BaseModel):
    """Body of POST /auth/register."""

    username: str | None = Field(default=None, examples=["alex"])
    email: str | None = Field(default=None, examples=["a@x.com"])
    password: str | None = Field(default=None, examples=["secret1"])


class LoginRequest(BaseModel):
    """Body of POST /auth/login."""

    email: str | None = Field(default=None, examples=["a@x.com"])
    password: str | None = Field(default=None, examples=["secret1"])


class VerifyResponse(BaseModel):
    """Result of GET /auth/verify."""

    valid: bool
    user_id: str
