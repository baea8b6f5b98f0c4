# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# The store is created once in the app lifespan (app.state.store); services
# are cheap wrappers around it and are built per request.
# =============================================================================

from typing import Annotated

from fastapi import Depends, Request

from core.services import (
    ArtworkService,
    AuthService,
    FollowService,
    LikeService,
    StorageService,
    UserService,
)
from lib.supabase_client import SupabaseClient


def get_store(request: Request) -> SupabaseClient:
    """
    Get the application's store.

    Returns the client wrapper built at startup.
    """
    return request.app.state.store


def get_storage_service() -> StorageService:
    return StorageService.from_settings()


# Type aliases for dependency injection
StoreDep = Annotated[SupabaseClient, Depends(get_store)]
StorageDep = Annotated[StorageService, Depends(get_storage_service)]


def get_like_service(store: StoreDep) -> LikeService:
    return LikeService(store)


def get_follow_service(store: StoreDep) -> FollowService:
    return FollowService(store)


LikesDep = Annotated[LikeService, Depends(get_like_service)]
FollowsDep = Annotated[FollowService, Depends(get_follow_service)]


def get_user_service(store: StoreDep, follows: FollowsDep, likes: LikesDep) -> UserService:
    return UserService(store, follows, likes)


UsersDep = Annotated[UserService, Depends(get_user_service)]


def get_auth_service(store: StoreDep, users: UsersDep) -> AuthService:
    return AuthService(store, users)


def get_artwork_service(
    store: StoreDep,
    likes: LikesDep,
    follows: FollowsDep,
    storage: StorageDep,
) -> ArtworkService:
    return ArtworkService(store, likes, follows, storage)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ArtworksDep = Annotated[ArtworkService, Depends(get_artwork_service)]
