# =============================================================================
# core/services/artwork_service.py - Artwork CRUD and Composition
# =============================================================================
# Artworks are stored as plain rows; every response view is composed per
# request with:
# - likes_count / is_liked (LikeService)
# - the artist's public view, including whether the viewer follows them
#
# Ownership: only the artist may edit or delete an artwork. A missing artwork
# and someone else's artwork are reported the same way (NotAuthorizedError).
# =============================================================================

import logging
import random
from typing import Any
from uuid import UUID

from app.exceptions import NotAuthorizedError, NotFoundError, ValidationError
from core.models.artwork import ArtistView, ArtworkPage, ArtworkView, Pagination
from core.services.follow_service import PUBLIC_USER_COLUMNS, FollowService
from core.services.like_service import LikeService
from core.services.storage_service import StorageService
from lib.supabase_client import SupabaseClient
from lib.utils import parse_tags, parse_uuid, utc_now_iso

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
MAX_PAGE_SIZE = 100


class ArtworkService:
    """
    Service for artwork operations.

    Reads compose rows into ArtworkView; writes check ownership first.
    """

    def __init__(
        self,
        store: SupabaseClient,
        likes: LikeService,
        follows: FollowService,
        storage: StorageService,
    ):
        self.store = store
        self.likes = likes
        self.follows = follows
        self.storage = storage

    # -------------------------------------------------------------------------
    # Composition
    # -------------------------------------------------------------------------

    def get_artwork_row(self, artwork_id: UUID | str) -> dict[str, Any] | None:
        """Fetch an artwork row. Malformed ids simply don't match."""
        artwork_uuid = parse_uuid(artwork_id)
        if artwork_uuid is None:
            return None
        return self.store.fetch_one("artworks", id=str(artwork_uuid))

    def to_view_with_likes(
        self,
        row: dict[str, Any],
        viewer_id: UUID | str | None = None,
        artist: dict[str, Any] | None = None,
        following: set[str] | None = None,
    ) -> ArtworkView:
        """
        Compose an artwork row into its response view.

        Args:
            row: artworks table row
            viewer_id: Requesting user, or None when anonymous
            artist: Pre-fetched artist row (fetched when omitted)
            following: Pre-computed set of artist ids the viewer follows

        Raises:
            NotFoundError: If the artist row is gone
        """
        artist_id = str(row["artist_id"])

        if artist is None:
            artist = self.store.fetch_one("users", PUBLIC_USER_COLUMNS, id=artist_id)
            if artist is None:
                raise NotFoundError("Artist not found", details={"artist_id": artist_id})

        if following is None:
            is_following = self.follows.is_following(viewer_id, artist_id)
        else:
            is_following = artist_id in following

        return ArtworkView(
            id=row["id"],
            title=row["title"],
            description=row.get("description") or "",
            image_url=row["image_url"],
            tags=row.get("tags") or [],
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
            likes_count=self.likes.likes_count(row["id"]),
            is_liked=self.likes.is_liked(row["id"], viewer_id),
            artist=ArtistView.from_row(artist, is_following=is_following),
        )

    def compose_many(
        self,
        rows: list[dict[str, Any]],
        viewer_id: UUID | str | None = None,
    ) -> list[ArtworkView]:
        """
        Compose several rows, resolving artists and follow state once.

        Artworks whose artist row is missing are left out.
        """
        artist_ids = list(dict.fromkeys(str(row["artist_id"]) for row in rows))
        artist_rows = self.store.fetch_in("users", "id", artist_ids, columns=PUBLIC_USER_COLUMNS)
        artists = {str(artist["id"]): artist for artist in artist_rows}
        following = self.follows.following_ids(viewer_id, artist_ids)

        views = []
        for row in rows:
            artist = artists.get(str(row["artist_id"]))
            if artist is None:
                logger.warning(f"Skipping artwork {row['id']}: artist {row['artist_id']} not found")
                continue
            views.append(self.to_view_with_likes(row, viewer_id, artist, following))
        return views

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_artworks(
        self,
        page: int = 1,
        limit: int = 20,
        viewer_id: UUID | str | None = None,
        shuffle: bool = False,
    ) -> ArtworkPage:
        """
        One gallery page, newest first.

        Args:
            page: 1-based page number
            limit: Page size (1-100)
            viewer_id: Requesting user, or None when anonymous
            shuffle: Shuffle artworks within the page

        Returns:
            ArtworkPage with artworks and {page, limit, total}
        """
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_SIZE)

        rows, total = self.store.fetch_page(
            "artworks",
            offset=(page - 1) * limit,
            limit=limit,
        )
        artworks = self.compose_many(rows, viewer_id)

        if shuffle:
            random.shuffle(artworks)

        return ArtworkPage(
            artworks=artworks,
            pagination=Pagination(page=page, limit=limit, total=total),
        )

    def get_artwork(self, artwork_id: UUID | str, viewer_id: UUID | str | None = None) -> ArtworkView:
        """
        Single artwork view.

        Raises:
            NotFoundError: If the artwork doesn't exist
        """
        row = self.get_artwork_row(artwork_id)
        if not row:
            raise NotFoundError("Artwork not found", details={"artwork_id": str(artwork_id)})
        return self.to_view_with_likes(row, viewer_id)

    def list_user_artworks(
        self,
        user_id: UUID | str,
        viewer_id: UUID | str | None = None,
    ) -> list[ArtworkView]:
        """A user's artworks, newest first. Unknown or malformed ids give []."""
        user_uuid = parse_uuid(user_id)
        if user_uuid is None:
            return []

        rows = self.store.fetch_all(
            "artworks",
            order_by="created_at",
            desc=True,
            artist_id=str(user_uuid),
        )
        return self.compose_many(rows, viewer_id)

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_artwork(
        self,
        artist_id: UUID | str,
        title: str | None,
        image_url: str,
        description: str | None = None,
        tags: str | list[str] | None = None,
    ) -> ArtworkView:
        """
        Insert an artwork for an already stored image.

        Raises:
            ValidationError: If the title is blank or a field is too long
        """
        title = (title or "").strip()
        description = (description or "").strip()

        if not title or not image_url:
            raise ValidationError("Title and image required")
        _check_lengths(title, description)

        row = self.store.insert(
            "artworks",
            {
                "title": title,
                "description": description,
                "image_url": image_url,
                "artist_id": str(artist_id),
                "tags": parse_tags(tags),
            },
        )
        logger.info(f"Created artwork {row['id']} for artist {artist_id}")

        return self.to_view_with_likes(row, artist_id)

    def upload_artwork(
        self,
        artist_id: UUID | str,
        title: str | None,
        filename: str | None,
        content_type: str | None,
        content: bytes | None,
        description: str | None = None,
        tags: str | list[str] | None = None,
    ) -> ArtworkView:
        """
        Store an uploaded image and create its artwork.

        The stored file is removed again if the artwork can't be created.

        Raises:
            ValidationError: If the image or title is missing
            InvalidFileTypeError: If the file isn't an allowed image
            FileTooLargeError: If the file exceeds the size limit
        """
        if not filename or content is None or not (title or "").strip():
            raise ValidationError("Title and image required")

        # Validate text fields before anything touches the disk
        _check_lengths((title or "").strip(), (description or "").strip())

        image_url = self.storage.save_image(filename, content_type, content)

        try:
            return self.create_artwork(artist_id, title, image_url, description, tags)
        except Exception:
            logger.warning(f"Artwork creation failed, removing stored image {image_url}")
            self.storage.delete_image(image_url)
            raise

    def update_artwork(
        self,
        artwork_id: UUID | str,
        owner_id: UUID | str,
        title: str | None = None,
        description: str | None = None,
        tags: str | list[str] | None = None,
    ) -> ArtworkView:
        """
        Edit an artwork's text fields.

        A blank title keeps the current one; description replaces when given;
        tags replace when the parsed list is non-empty.

        Raises:
            NotAuthorizedError: If the artwork is missing or not owned by the caller
            ValidationError: If a field is too long
        """
        row = self._owned(artwork_id, owner_id)

        updates: dict[str, Any] = {}

        new_title = (title or "").strip()
        if new_title:
            updates["title"] = new_title
        if description is not None:
            updates["description"] = description.strip()

        new_tags = parse_tags(tags)
        if new_tags:
            updates["tags"] = new_tags

        _check_lengths(updates.get("title", ""), updates.get("description", ""))

        if updates:
            updates["updated_at"] = utc_now_iso()
            updated = self.store.update("artworks", updates, id=str(row["id"]))
            if updated:
                row = updated[0]
            logger.info(f"Updated artwork {row['id']}: {sorted(updates)}")

        return self.to_view_with_likes(row, owner_id)

    def delete_artwork(self, artwork_id: UUID | str, owner_id: UUID | str) -> None:
        """
        Delete an artwork with its likes and image file.

        Raises:
            NotAuthorizedError: If the artwork is missing or not owned by the caller
        """
        row = self._owned(artwork_id, owner_id)
        artwork_id_str = str(row["id"])

        removed_likes = self.likes.delete_for_artwork(artwork_id_str)
        self.store.delete("artworks", id=artwork_id_str)
        self.storage.delete_image(row["image_url"])

        logger.info(f"Deleted artwork {artwork_id_str} ({removed_likes} likes removed)")

    def _owned(self, artwork_id: UUID | str, owner_id: UUID | str) -> dict[str, Any]:
        row = self.get_artwork_row(artwork_id)
        if not row or str(row["artist_id"]) != str(owner_id):
            raise NotAuthorizedError()
        return row


def _check_lengths(title: str, description: str) -> None:
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters")
