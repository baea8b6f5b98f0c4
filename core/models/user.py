# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user data:
# - UserPublic: The public view of a user (never includes the password hash)
# - UserStats: Derived counters (artworks, followers, following, likes)
# - UserWithStats / UserProfile: Views returned by /auth/me and /users/profile
# - AuthResponse: Token plus public user, returned by register and login
#
# Stats and flags use camelCase on the wire to match the frontend contract;
# Python code uses the snake_case field names.
# =============================================================================

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserPublic(BaseModel):
    """
    Public view of a user.

    Used for artist summaries, follower lists and auth responses.
    The password hash column is never read into this model.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "username": "alex",
            "email": "a@x.com",
            "avatar_url": "",
            "bio": ""
        }
    """

    id: UUID
    username: str
    email: str
    avatar_url: str = ""
    bio: str = ""

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "UserPublic":
        """Create from a users table row."""
        return cls(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            avatar_url=row.get("avatar_url") or "",
            bio=row.get("bio") or "",
        )


class UserStats(BaseModel):
    """Counters derived by query for a user."""

    model_config = ConfigDict(populate_by_name=True)

    artwork_count: int = Field(default=0, ge=0, alias="artworkCount")
    followers_count: int = Field(default=0, ge=0, alias="followersCount")
    following_count: int = Field(default=0, ge=0, alias="followingCount")
    # Likes received across all of the user's artworks
    total_likes: int = Field(default=0, ge=0, alias="totalLikes")


class UserWithStats(UserPublic, UserStats):
    """Public user view plus stats, returned by /auth/me and PUT /users/profile."""

    @classmethod
    def build(cls, user: UserPublic, stats: UserStats) -> "UserWithStats":
        return cls(**user.model_dump(), **stats.model_dump())


class UserProfile(UserWithStats):
    """Public profile, as seen by another (possibly anonymous) user."""

    created_at: datetime | None = Field(default=None, alias="createdAt")
    is_following: bool = Field(default=False, alias="isFollowing")


class AuthResponse(BaseModel):
    """Returned by register and login."""

    token: str
    user: UserPublic
