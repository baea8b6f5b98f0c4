# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Registration, login and "who am I" endpoints.
#
# Password hashing is CPU-bound, so register and login run the service in
# Starlette's thread pool instead of on the event loop.
# =============================================================================

import logging

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, LoginRequest, RegisterRequest, VerifyResponse
from app.dependencies import AuthServiceDep
from core.models.user import AuthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, auth: AuthServiceDep) -> AuthResponse:
    """
    Create an account.

    Returns:
        AuthResponse: A token plus the public user view

    Raises:
        400: Missing fields, short password or email/username already taken
    """
    return await run_in_threadpool(
        auth.register, request.username, request.email, request.password
    )


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, auth: AuthServiceDep) -> AuthResponse:
    """
    Sign in with email and password.

    Raises:
        400: Missing fields or invalid credentials
    """
    return await run_in_threadpool(auth.login, request.email, request.password)


@router.get("/me")
async def get_current_user_info(
    auth: AuthServiceDep,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """
    Get the current authenticated user's profile with stats.

    Raises:
        401: If not authenticated
        404: If the account no longer exists
    """
    return {"user": auth.current_user(user.id)}


@router.get("/verify", response_model=VerifyResponse)
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> VerifyResponse:
    """
    Verify that the current token is valid.

    Useful for checking if a stored token is still valid.
    """
    return VerifyResponse(valid=True, user_id=str(user.id))
