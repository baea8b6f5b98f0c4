# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Public user views, stats and auth responses
# - artwork.py: Artwork views, artist summaries and gallery pages
#
# These models define the "contract" between API and clients.
# =============================================================================

from .artwork import (
    ArtistView,
    ArtworkPage,
    ArtworkView,
    Pagination,
)
from .user import (
    AuthResponse,
    UserProfile,
    UserPublic,
    UserStats,
    UserWithStats,
)

__all__ = [
    # Artwork
    "ArtistView",
    "ArtworkPage",
    "ArtworkView",
    "Pagination",
    # User
    "AuthResponse",
    "UserProfile",
    "UserPublic",
    "UserStats",
    "UserWithStats",
]
