# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase wrapper with row helpers and typed errors
# - security.py: bcrypt password hashing and JWT access tokens
# - utils.py: Shared utilities (UUID parsing, tag parsing, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import (
    DuplicateRowError,
    StoreError,
    SupabaseClient,
    is_unique_violation,
)
from lib.utils import normalize_uuid, parse_tags, parse_uuid, utc_now_iso

__all__ = [
    # Supabase
    "SupabaseClient",
    "StoreError",
    "DuplicateRowError",
    "is_unique_violation",
    # Utils
    "normalize_uuid",
    "parse_uuid",
    "parse_tags",
    "utc_now_iso",
]
