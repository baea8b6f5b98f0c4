# =============================================================================
# core/services/follow_service.py - Social Graph
# =============================================================================
# Each follow edge is a single row in `follows` (follower_id -> following_id).
# A user's "following" and "followers" lists are both read from that row, so
# the two sides can never disagree.
# =============================================================================

import logging
from uuid import UUID

from app.exceptions import NotFoundError, ValidationError
from core.models.user import UserPublic
from lib.supabase_client import DuplicateRowError, SupabaseClient
from lib.utils import parse_uuid

logger = logging.getLogger(__name__)

PUBLIC_USER_COLUMNS = "id, username, email, avatar_url, bio"


class FollowService:
    """
    Follow/unfollow toggling and membership queries.
    """

    def __init__(self, store: SupabaseClient):
        self.store = store

    def toggle_follow(self, actor_id: UUID | str, target_id: UUID | str) -> bool:
        """
        Follow a user, or unfollow if already following.

        Args:
            actor_id: The user doing the following
            target_id: The user to (un)follow, as supplied by the client

        Returns:
            True if the actor now follows the target, False otherwise

        Raises:
            ValidationError: If target_id is malformed or equals actor_id
            NotFoundError: If either user doesn't exist
        """
        target_uuid = parse_uuid(target_id)
        if target_uuid is None:
            raise ValidationError("Invalid user ID", details={"user_id": str(target_id)})

        actor = str(actor_id)
        target = str(target_uuid)

        if actor == target:
            raise ValidationError("You cannot follow yourself")

        target_row = self.store.fetch_one("users", "id", id=target)
        actor_row = self.store.fetch_one("users", "id", id=actor)
        if not target_row or not actor_row:
            raise NotFoundError("User not found")

        existing = self.store.fetch_one(
            "follows", "id", follower_id=actor, following_id=target
        )

        if existing:
            self.store.delete("follows", id=existing["id"])
            logger.info(f"User {actor} unfollowed {target}")
            return False

        try:
            self.store.insert("follows", {"follower_id": actor, "following_id": target})
        except DuplicateRowError:
            logger.warning(f"Duplicate follow ignored: {actor} -> {target}")
            return True

        logger.info(f"User {actor} followed {target}")
        return True

    def is_following(self, actor_id: UUID | str | None, target_id: UUID | str) -> bool:
        """Whether `actor_id` follows `target_id`. Anonymous users follow nobody."""
        if actor_id is None:
            return False
        edge = self.store.fetch_one(
            "follows", "id", follower_id=str(actor_id), following_id=str(target_id)
        )
        return edge is not None

    def following_ids(self, actor_id: UUID | str | None, candidates: list[str]) -> set[str]:
        """Subset of `candidates` that `actor_id` follows."""
        if actor_id is None or not candidates:
            return set()
        rows = self.store.fetch_in(
            "follows",
            "following_id",
            candidates,
            columns="following_id",
            follower_id=str(actor_id),
        )
        return {str(row["following_id"]) for row in rows}

    def get_followers(self, user_id: UUID | str) -> list[UserPublic]:
        """Users who follow `user_id`, oldest follow first."""
        edges = self.store.fetch_all(
            "follows",
            "follower_id, created_at",
            order_by="created_at",
            following_id=str(user_id),
        )
        return self._resolve([str(edge["follower_id"]) for edge in edges])

    def get_following(self, user_id: UUID | str) -> list[UserPublic]:
        """Users that `user_id` follows, oldest follow first."""
        edges = self.store.fetch_all(
            "follows",
            "following_id, created_at",
            order_by="created_at",
            follower_id=str(user_id),
        )
        return self._resolve([str(edge["following_id"]) for edge in edges])

    def followers_count(self, user_id: UUID | str) -> int:
        return self.store.count("follows", following_id=str(user_id))

    def following_count(self, user_id: UUID | str) -> int:
        return self.store.count("follows", follower_id=str(user_id))

    def _resolve(self, user_ids: list[str]) -> list[UserPublic]:
        rows = self.store.fetch_in("users", "id", user_ids, columns=PUBLIC_USER_COLUMNS)
        by_id = {str(row["id"]): row for row in rows}
        return [UserPublic.from_row(by_id[uid]) for uid in user_ids if uid in by_id]
