# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .artwork_service import ArtworkService
from .auth_service import AuthService
from .follow_service import FollowService
from .like_service import LikeService
from .storage_service import StorageService
from .user_service import UserService

__all__ = [
    "ArtworkService",
    "AuthService",
    "FollowService",
    "LikeService",
    "StorageService",
    "UserService",
]
