# =============================================================================
# app/routers/users.py - Profile and Follow Endpoints
# =============================================================================
# Public profiles, profile edits and the follow graph.
#
# Note: /followers, /following and /profile are declared before
# /{user_id}/follow so the literal paths always win.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, Field

from app.auth import AuthUser, get_current_user, get_current_user_optional
from app.dependencies import FollowsDep, UsersDep

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class ProfileUpdateRequest(BaseModel):
    """Editable profile fields. Omitted fields are left unchanged."""
    username: str | None = Field(default=None, examples=["alex_art"])
    bio: str | None = Field(default=None, examples=["Painter from Lisbon"])
    avatar_url: str | None = Field(default=None, examples=["https://example.com/me.png"])


class FollowResponse(BaseModel):
    """Result of a follow toggle."""
    following: bool


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/followers")
async def list_followers(
    follows: FollowsDep,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """Users who follow the caller."""
    return {"followers": follows.get_followers(user.id)}


@router.get("/following")
async def list_following(
    follows: FollowsDep,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """Users the caller follows."""
    return {"following": follows.get_following(user.id)}


@router.put("/profile")
async def update_profile(
    users: UsersDep,
    request: ProfileUpdateRequest | None = None,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """
    Edit the caller's profile.

    Raises:
        400: Username already taken
    """
    request = request or ProfileUpdateRequest()
    updated = users.update_profile(
        user.id,
        username=request.username,
        bio=request.bio,
        avatar_url=request.avatar_url,
    )
    return {"user": updated}


@router.get("/profile/{username}")
async def get_profile(
    users: UsersDep,
    username: Annotated[str, Path(description="Profile username")],
    user: AuthUser | None = Depends(get_current_user_optional),
) -> dict:
    """
    Public profile with stats.

    isFollowing tells whether the caller follows this user.

    Raises:
        404: User not found
    """
    return {"user": users.get_profile(username, user.id if user else None)}


@router.post("/{user_id}/follow", response_model=FollowResponse)
async def toggle_follow(
    follows: FollowsDep,
    user_id: Annotated[str, Path(description="User UUID to follow or unfollow")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Follow or unfollow a user.

    Raises:
        400: Malformed id or self-follow
        404: User not found
    """
    return FollowResponse(following=follows.toggle_follow(user.id, user_id))
