# =============================================================================
# core/services/auth_service.py - Registration, Login and Identity
# =============================================================================
# Register and login are the only operations that hash passwords. Both are
# CPU-bound (bcrypt), so the routes call them from a worker thread.
#
# Tokens are issued and verified by lib/security.py.
# =============================================================================

import logging
from uuid import UUID

from app.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from core.models.user import AuthResponse, UserPublic, UserWithStats
from core.services.user_service import (
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
    UserService,
)
from lib.security import (
    BCRYPT_MAX_BYTES,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from lib.supabase_client import DuplicateRowError, SupabaseClient

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 6


class AuthService:
    """
    Service for account creation and credential checks.

    Example:
        auth = AuthService(store, users)
        result = auth.register("alex", "a@x.com", "secret1")
        user_id = AuthService.identify(result.token)
    """

    def __init__(self, store: SupabaseClient, users: UserService):
        self.store = store
        self.users = users

    def register(self, username: str | None, email: str | None, password: str | None) -> AuthResponse:
        """
        Create an account and sign the new user in.

        Args:
            username: Desired username (trimmed, 3-30 characters)
            email: Email address (trimmed and lower-cased)
            password: Plain password (at least 6 characters)

        Returns:
            AuthResponse with a fresh token and the public user view

        Raises:
            ValidationError: If a field is missing or out of bounds
            ConflictError: If the email or username is already registered
        """
        username = (username or "").strip()
        email = (email or "").strip().lower()
        password = password or ""

        if not username or not email or not password:
            raise ValidationError("All fields are required")

        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

        if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValidationError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")

        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            raise ValidationError(
                f"Username must be {USERNAME_MIN_LENGTH}-{USERNAME_MAX_LENGTH} characters"
            )

        if "@" not in email:
            raise ValidationError("Please enter a valid email")

        if self.users.get_by_email(email):
            raise ConflictError("Email already exists")
        if self.users.get_by_username(username):
            raise ConflictError("Username already exists")

        try:
            row = self.store.insert(
                "users",
                {
                    "username": username,
                    "email": email,
                    "password_hash": hash_password(password),
                },
            )
        except DuplicateRowError:
            # Lost a race with a concurrent registration
            raise ConflictError("Email or username already exists")

        logger.info(f"Registered user {row['id']} ({username})")

        return AuthResponse(
            token=create_access_token(row["id"]),
            user=UserPublic.from_row(row),
        )

    def login(self, email: str | None, password: str | None) -> AuthResponse:
        """
        Check credentials and issue a token.

        Raises:
            ValidationError: If email or password is blank
            InvalidCredentialsError: If no user matches or the password is wrong
        """
        email = (email or "").strip().lower()
        password = password or ""

        if not email or not password:
            raise ValidationError("Email and password are required")

        row = self.users.get_by_email(email)
        if not row or not verify_password(password, row.get("password_hash") or ""):
            logger.info(f"Failed login attempt for {email}")
            raise InvalidCredentialsError()

        return AuthResponse(
            token=create_access_token(row["id"]),
            user=UserPublic.from_row(row),
        )

    @staticmethod
    def identify(token: str | None) -> UUID | None:
        """Resolve a bearer token to a user id, or None if it isn't valid."""
        if not token:
            return None
        return decode_access_token(token)

    def current_user(self, user_id: UUID | str) -> UserWithStats:
        """
        Load the signed-in user's profile with stats.

        Raises:
            NotFoundError: If the account no longer exists
        """
        row = self.users.get_user(user_id)
        if not row:
            raise NotFoundError("User not found")
        return self.users.with_stats(row)
