# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the domain logic of the showcase:
# - models/: Pydantic schemas for API responses
# - services/: Users, auth, artworks, likes, follows and image storage
#
# Services receive their store explicitly and raise app.exceptions errors.
# They never import FastAPI routing code, which keeps them testable with a
# fake store.
# =============================================================================
