# =============================================================================
# core/services/like_service.py - Like Toggle and Like Queries
# =============================================================================
# Likes live in their own table with a UNIQUE (user_id, artwork_id)
# constraint. Counts and "is liked" flags are always computed by query;
# nothing is cached on the artwork row.
# =============================================================================

import logging
from uuid import UUID

from app.exceptions import NotFoundError
from lib.supabase_client import DuplicateRowError, SupabaseClient
from lib.utils import parse_uuid

logger = logging.getLogger(__name__)


class LikeService:
    """Like/unlike toggling and derived like values."""

    def __init__(self, store: SupabaseClient):
        self.store = store

    def toggle_like(self, user_id: UUID | str, artwork_id: UUID | str) -> bool:
        """
        Like an artwork, or remove the like if it already exists.

        Args:
            user_id: The user toggling the like
            artwork_id: The artwork being liked

        Returns:
            True if the artwork is now liked, False if the like was removed

        Raises:
            NotFoundError: If the artwork doesn't exist (or the id is malformed)
        """
        artwork_uuid = parse_uuid(artwork_id)
        if artwork_uuid is None or not self.store.fetch_one(
            "artworks", "id", id=str(artwork_uuid)
        ):
            raise NotFoundError("Artwork not found", details={"artwork_id": str(artwork_id)})

        user_id_str = str(user_id)
        artwork_id_str = str(artwork_uuid)

        existing = self.store.fetch_one(
            "likes", "id", user_id=user_id_str, artwork_id=artwork_id_str
        )

        if existing:
            self.store.delete("likes", id=existing["id"])
            logger.info(f"User {user_id_str} unliked artwork {artwork_id_str}")
            return False

        try:
            self.store.insert("likes", {"user_id": user_id_str, "artwork_id": artwork_id_str})
        except DuplicateRowError:
            # A concurrent request created the like first
            logger.warning(f"Duplicate like ignored: user {user_id_str}, artwork {artwork_id_str}")
            return True

        logger.info(f"User {user_id_str} liked artwork {artwork_id_str}")
        return True

    def likes_count(self, artwork_id: UUID | str) -> int:
        """Number of likes on an artwork."""
        return self.store.count("likes", artwork_id=str(artwork_id))

    def is_liked(self, artwork_id: UUID | str, user_id: UUID | str | None) -> bool:
        """Whether `user_id` likes the artwork. Anonymous users never do."""
        if user_id is None:
            return False
        like = self.store.fetch_one(
            "likes", "id", artwork_id=str(artwork_id), user_id=str(user_id)
        )
        return like is not None

    def total_likes(self, artwork_ids: list[str]) -> int:
        """Aggregate like count across several artworks."""
        return self.store.count_in("likes", "artwork_id", artwork_ids)

    def delete_for_artwork(self, artwork_id: UUID | str) -> int:
        """Remove every like on an artwork. Returns how many were removed."""
        deleted = self.store.delete("likes", artwork_id=str(artwork_id))
        return len(deleted)
