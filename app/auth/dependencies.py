# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# Two modes:
# - get_current_user: token required (401 when missing or invalid)
# - get_current_user_optional: anonymous when missing or invalid
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.exceptions import AuthError
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor. Missing headers are reported by us, not by
# HTTPBearer, so the message matches the rest of the API.
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from a bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the JWT signature and expiry
    3. Returns an AuthUser with the user's ID

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        AuthUser: The authenticated user

    Raises:
        AuthError: 401 if the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Access denied. No token provided.", code="TOKEN_MISSING")

    user_id = AuthService.identify(credentials.credentials)
    if user_id is None:
        raise AuthError("Invalid token.", code="TOKEN_INVALID")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_id)


async def get_current_user_optional(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[AuthUser]:
    """
    Optionally get the current user from a bearer token.

    Returns None if no token is provided, instead of raising an error.
    Useful for endpoints that work with or without authentication.

    Usage:
        @router.get("/public-or-private")
        async def flexible_route(user: AuthUser | None = Depends(get_current_user_optional)):
            if user:
                return {"user_id": user.id}
            return {"message": "anonymous access"}
    """
    if credentials is None:
        return None

    try:
        return await get_current_user(credentials)
    except AuthError:
        # If token is invalid, treat as no auth rather than error
        return None
