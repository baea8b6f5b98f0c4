# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common helpers used across the application.
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        user_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        user_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def parse_uuid(value: str | UUID | None) -> UUID | None:
    """
    Parse a client-supplied id.

    Returns:
        The UUID, or None when the value is missing or malformed
    """
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


# =============================================================================
# Tags
# =============================================================================

def parse_tags(value: str | list[str] | None) -> list[str]:
    """
    Turn a comma-separated string (or a list) into a clean tag list.

    Tags are trimmed, blanks are dropped and duplicates removed while
    keeping first-seen order.

    Example:
        parse_tags("sunset, sea ,, sunset")  # ["sunset", "sea"]
    """
    if not value:
        return []

    raw = value.split(",") if isinstance(value, str) else value

    tags: list[str] = []
    for tag in raw:
        tag = str(tag).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def utc_now_iso() -> str:
    """Current UTC time as an ISO 8601 string, as stored in timestamp columns."""
    return datetime.now(timezone.utc).isoformat()
