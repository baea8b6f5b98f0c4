# =============================================================================
# lib/security.py - Password Hashing and Access Tokens
# =============================================================================
# - Passwords are hashed with bcrypt using a fresh random salt per call.
# - Access tokens are HS256 JWTs (python-jose) carrying the user id in `sub`
#   and expiring after ACCESS_TOKEN_EXPIRE_DAYS.
#
# Usage:
#   from lib.security import hash_password, create_access_token
#   hashed = hash_password("secret1")
#   token = create_access_token(user_id)
# =============================================================================

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from app.config import settings

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


# =============================================================================
# Passwords
# =============================================================================

def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password with bcrypt.

    Args:
        password: Plain text password
        rounds: Cost factor (defaults to settings.BCRYPT_ROUNDS)

    Returns:
        The bcrypt hash as a string (salt included)
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash or over-long password
        return False


# =============================================================================
# Access Tokens
# =============================================================================

def create_access_token(
    user_id: UUID | str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token bound to a user id.

    Args:
        user_id: The user the token identifies
        expires_delta: Lifetime (defaults to ACCESS_TOKEN_EXPIRE_DAYS)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> UUID | None:
    """
    Verify a token's signature and expiry and return its user id.

    Returns:
        The user id from `sub`, or None if the token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError:
        logger.info("Access token has expired")
        return None
    except JWTError as e:
        logger.warning(f"Access token validation failed: {e}")
        return None

    subject = payload.get("sub")
    if not subject:
        logger.warning("Access token missing 'sub' claim")
        return None

    try:
        return UUID(str(subject))
    except ValueError:
        logger.warning(f"Invalid UUID in token: {subject}")
        return None
