# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - artworks.py: Gallery, upload, edit, delete and likes
# - users.py: Profiles and the follow graph
#
# Authentication routes live in app/auth/routes.py.
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import artworks
from . import health
from . import users

__all__ = [
    "artworks",
    "health",
    "users",
]
