# =============================================================================
# app/routers/artworks.py - Artwork Endpoints
# =============================================================================
# Gallery listing, single artwork, upload, edit, delete and like toggle.
# Reads accept an optional token (for is_liked / isFollowing); writes require
# one. Ownership checks live in ArtworkService.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, Query, UploadFile, status
from pydantic import BaseModel, Field

from app.auth import AuthUser, get_current_user, get_current_user_optional
from app.config import settings
from app.dependencies import ArtworksDep, LikesDep
from core.models.artwork import ArtworkPage

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class ArtworkUpdateRequest(BaseModel):
    """Editable artwork fields. Omitted fields are left unchanged."""
    title: str | None = Field(default=None, examples=["Sunset over the bay"])
    description: str | None = Field(default=None, examples=["Oil on canvas"])
    tags: str | list[str] | None = Field(
        default=None,
        examples=["sunset, sea"],
        description="Comma-separated string or list of tags"
    )


class LikeResponse(BaseModel):
    """Result of a like toggle."""
    liked: bool


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=ArtworkPage)
async def list_artworks(
    artworks: ArtworksDep,
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Artworks per page")] = settings.DEFAULT_PAGE_SIZE,
    user: AuthUser | None = Depends(get_current_user_optional),
):
    """
    List the gallery, newest first.

    Anonymous callers see is_liked=false and isFollowing=false everywhere.
    """
    return artworks.list_artworks(
        page=page,
        limit=limit,
        viewer_id=user.id if user else None,
        shuffle=settings.SHUFFLE_GALLERY,
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_artwork(
    artworks: ArtworksDep,
    image: Annotated[UploadFile | None, File(description="Image file (jpg, png, gif, webp)")] = None,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    tags: Annotated[str | None, Form(description="Comma-separated tags")] = None,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """
    Upload a new artwork.

    Raises:
        400: Missing title/image or a non-image file
        413: File larger than MAX_UPLOAD_SIZE_MB
    """
    filename = None
    content_type = None
    content = None

    if image is not None:
        filename = image.filename
        content_type = image.content_type
        # One byte past the limit is enough to know the file is too large
        content = await image.read(artworks.storage.max_bytes + 1)
        await image.close()
        logger.info(f"Received upload {filename} ({len(content)} bytes) from {user.id}")

    artwork = artworks.upload_artwork(
        artist_id=user.id,
        title=title,
        filename=filename,
        content_type=content_type,
        content=content,
        description=description,
        tags=tags,
    )
    return {"message": "Artwork uploaded", "artwork": artwork}


@router.get("/user/{user_id}")
async def list_user_artworks(
    artworks: ArtworksDep,
    user_id: Annotated[str, Path(description="Artist UUID")],
    user: AuthUser | None = Depends(get_current_user_optional),
) -> dict:
    """
    List one artist's artworks, newest first.

    Unknown or malformed ids return an empty list.
    """
    return {"artworks": artworks.list_user_artworks(user_id, user.id if user else None)}


@router.get("/{artwork_id}")
async def get_artwork(
    artworks: ArtworksDep,
    artwork_id: Annotated[str, Path(description="Artwork UUID")],
    user: AuthUser | None = Depends(get_current_user_optional),
) -> dict:
    """
    Get a single artwork.

    Raises:
        404: Artwork not found
    """
    return {"artwork": artworks.get_artwork(artwork_id, user.id if user else None)}


@router.put("/{artwork_id}")
async def update_artwork(
    artworks: ArtworksDep,
    artwork_id: Annotated[str, Path(description="Artwork UUID")],
    request: ArtworkUpdateRequest | None = None,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """
    Edit an artwork you own.

    Raises:
        404: Artwork missing or owned by someone else ("Not authorized")
    """
    request = request or ArtworkUpdateRequest()
    artwork = artworks.update_artwork(
        artwork_id,
        owner_id=user.id,
        title=request.title,
        description=request.description,
        tags=request.tags,
    )
    return {"message": "Artwork updated", "artwork": artwork}


@router.delete("/{artwork_id}")
async def delete_artwork(
    artworks: ArtworksDep,
    artwork_id: Annotated[str, Path(description="Artwork UUID")],
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """
    Delete an artwork you own, along with its likes and image file.

    Raises:
        404: Artwork missing or owned by someone else ("Not authorized")
    """
    artworks.delete_artwork(artwork_id, owner_id=user.id)
    return {"message": "Artwork deleted"}


@router.post("/{artwork_id}/like", response_model=LikeResponse)
async def toggle_like(
    likes: LikesDep,
    artwork_id: Annotated[str, Path(description="Artwork UUID")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Like or unlike an artwork.

    Raises:
        404: Artwork not found
    """
    return LikeResponse(liked=likes.toggle_like(user.id, artwork_id))
