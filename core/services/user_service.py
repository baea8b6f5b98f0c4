# =============================================================================
# core/services/user_service.py - User Records, Stats and Profiles
# =============================================================================
# All user stats are derived by query:
# - artworkCount: rows in `artworks` with artist_id = user
# - followersCount / followingCount: rows in `follows`
# - totalLikes: rows in `likes` across the user's artworks
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import ConflictError, NotFoundError, ValidationError
from core.models.user import UserProfile, UserPublic, UserStats, UserWithStats
from core.services.follow_service import FollowService
from core.services.like_service import LikeService
from lib.supabase_client import DuplicateRowError, SupabaseClient
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
BIO_MAX_LENGTH = 500


class UserService:
    """
    Service for user lookups, stats and profile edits.
    """

    def __init__(self, store: SupabaseClient, follows: FollowService, likes: LikeService):
        self.store = store
        self.follows = follows
        self.likes = likes

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_user(self, user_id: UUID | str) -> dict[str, Any] | None:
        """Fetch a user row by id (includes password_hash)."""
        return self.store.fetch_one("users", id=str(user_id))

    def get_by_email(self, email: str) -> dict[str, Any] | None:
        return self.store.fetch_one("users", email=email)

    def get_by_username(self, username: str) -> dict[str, Any] | None:
        return self.store.fetch_one("users", username=username)

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    def get_stats(self, user_id: UUID | str) -> UserStats:
        """
        Compute a user's counters.

        Args:
            user_id: User UUID

        Returns:
            UserStats with artwork, follower, following and like totals
        """
        artwork_rows = self.store.fetch_all("artworks", "id", artist_id=str(user_id))
        artwork_ids = [str(row["id"]) for row in artwork_rows]

        return UserStats(
            artwork_count=len(artwork_ids),
            followers_count=self.follows.followers_count(user_id),
            following_count=self.follows.following_count(user_id),
            total_likes=self.likes.total_likes(artwork_ids),
        )

    def with_stats(self, row: dict[str, Any]) -> UserWithStats:
        """Public view of a user row plus its stats."""
        return UserWithStats.build(UserPublic.from_row(row), self.get_stats(row["id"]))

    # -------------------------------------------------------------------------
    # Profiles
    # -------------------------------------------------------------------------

    def get_profile(self, username: str, viewer_id: UUID | str | None = None) -> UserProfile:
        """
        Public profile for a username.

        Args:
            username: Profile owner's username
            viewer_id: Requesting user, or None when anonymous

        Raises:
            NotFoundError: If no user has that username
        """
        row = self.get_by_username(username)
        if not row:
            raise NotFoundError("User not found", details={"username": username})

        stats = self.get_stats(row["id"])
        return UserProfile(
            **UserPublic.from_row(row).model_dump(),
            **stats.model_dump(),
            created_at=row.get("created_at"),
            is_following=self.follows.is_following(viewer_id, row["id"]),
        )

    def update_profile(
        self,
        user_id: UUID | str,
        username: str | None = None,
        bio: str | None = None,
        avatar_url: str | None = None,
    ) -> UserWithStats:
        """
        Edit the caller's own profile.

        A blank username leaves the current one in place. `bio` and
        `avatar_url` replace the stored values whenever they are given.

        Raises:
            NotFoundError: If the user no longer exists
            ValidationError: If the new username or bio is out of bounds
            ConflictError: If the username belongs to someone else
        """
        row = self.get_user(user_id)
        if not row:
            raise NotFoundError("User not found")

        updates: dict[str, Any] = {}

        new_username = (username or "").strip()
        if new_username and new_username != row["username"]:
            if not USERNAME_MIN_LENGTH <= len(new_username) <= USERNAME_MAX_LENGTH:
                raise ValidationError(
                    f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
                )
            existing = self.get_by_username(new_username)
            if existing and str(existing["id"]) != str(row["id"]):
                raise ConflictError("Username already taken")
            updates["username"] = new_username

        if bio is not None:
            if len(bio) > BIO_MAX_LENGTH:
                raise ValidationError(f"Bio must be at most {BIO_MAX_LENGTH} characters")
            updates["bio"] = bio

        if avatar_url is not None:
            updates["avatar_url"] = avatar_url.strip()

        if updates:
            updates["updated_at"] = utc_now_iso()
            try:
                updated = self.store.update("users", updates, id=str(row["id"]))
            except DuplicateRowError:
                raise ConflictError("Username already taken")
            if updated:
                row = updated[0]
            logger.info(f"Updated profile for user {row['id']}: {sorted(updates)}")

        return self.with_stats(row)
