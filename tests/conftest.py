# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Builds services on top of an in-memory Supabase fake (tests/fakes.py)
# - Provides an API client with the store dependency overridden
# =============================================================================

import os
import tempfile

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret-for-the-suite")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="showcase-uploads-"))
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_store
from app.main import app
from core.services import (
    ArtworkService,
    AuthService,
    FollowService,
    LikeService,
    StorageService,
    UserService,
)
from lib.supabase_client import SupabaseClient
from tests.fakes import FakeSupabase

# Smallest valid PNG header plus padding
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


# =============================================================================
# Store and Services
# =============================================================================

@pytest.fixture
def fake_db():
    """The in-memory database behind the store."""
    return FakeSupabase()


@pytest.fixture
def store(fake_db):
    """SupabaseClient wired to the fake database."""
    return SupabaseClient("https://test-project.supabase.co", "test-key", client=fake_db)


@pytest.fixture
def storage(tmp_path):
    """Image storage in a per-test directory."""
    return StorageService(
        upload_dir=tmp_path / "uploads",
        max_bytes=10 * 1024 * 1024,
        allowed_extensions=[".jpg", ".jpeg", ".png", ".gif", ".webp"],
        allowed_content_types=["image/jpeg", "image/png", "image/gif", "image/webp"],
    )


@pytest.fixture
def likes(store):
    return LikeService(store)


@pytest.fixture
def follows(store):
    return FollowService(store)


@pytest.fixture
def users(store, follows, likes):
    return UserService(store, follows, likes)


@pytest.fixture
def auth(store, users):
    return AuthService(store, users)


@pytest.fixture
def artworks(store, likes, follows, storage):
    return ArtworkService(store, likes, follows, storage)


@pytest.fixture
def alex(auth):
    """A registered user: alex / a@x.com / secret1."""
    return auth.register("alex", "a@x.com", "secret1")


@pytest.fixture
def bob(auth):
    """A second registered user: bob / b@x.com / secret2."""
    return auth.register("bob", "b@x.com", "secret2")


# =============================================================================
# API Client
# =============================================================================

@pytest.fixture
def client(store):
    """
    TestClient with the store overridden.

    Not used as a context manager, so the lifespan (which would build a real
    Supabase client) never runs.
    """
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def png_bytes():
    return PNG_BYTES
