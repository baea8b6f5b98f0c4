# =============================================================================
# core/models/artwork.py - Artwork Schemas
# =============================================================================
# These models define the API contract for artworks:
# - ArtistView: The artwork owner as shown next to an artwork
# - ArtworkView: An artwork composed with like state and its artist
# - Pagination / ArtworkPage: Gallery listing envelope
# =============================================================================

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ArtistView(BaseModel):
    """
    Owner of an artwork.

    `isFollowing` tells whether the requesting user follows this artist
    (always false for anonymous requests).
    """

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    username: str
    email: str
    avatar_url: str = ""
    bio: str = ""
    is_following: bool = Field(default=False, alias="isFollowing")

    @classmethod
    def from_row(cls, row: dict[str, Any], is_following: bool = False) -> "ArtistView":
        """Create from a users table row."""
        return cls(
            id=row["id"],
            username=row["username"],
            email=row["email"],
            avatar_url=row.get("avatar_url") or "",
            bio=row.get("bio") or "",
            is_following=is_following,
        )


class ArtworkView(BaseModel):
    """
    An artwork as returned by every artwork endpoint.

    Example:
        {
            "id": "660e8400-e29b-41d4-a716-446655440001",
            "title": "Sunset",
            "description": "",
            "image_url": "/uploads/art-1705312200000-123456789.png",
            "tags": ["sea"],
            "createdAt": "2024-01-15T10:30:00Z",
            "updatedAt": "2024-01-15T10:30:00Z",
            "likes_count": 1,
            "is_liked": true,
            "artist": {"id": "...", "username": "alex", ..., "isFollowing": false}
        }
    """

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    description: str = ""
    image_url: str
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")

    # Computed per request, never stored
    likes_count: int = Field(default=0, ge=0)
    is_liked: bool = False

    artist: ArtistView


class Pagination(BaseModel):
    """Page window of a gallery listing."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=20, ge=1)
    total: int = Field(default=0, ge=0)


class ArtworkPage(BaseModel):
    """Gallery listing: one page of artworks plus pagination info."""

    artworks: list[ArtworkView] = Field(default_factory=list)
    pagination: Pagination
