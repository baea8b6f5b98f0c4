# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Creative Showcase API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 5000
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.auth import routes as auth_routes
from app.config import settings
from app.exceptions import (
    FileTooLargeError,
    ShowcaseException,
    http_exception_handler,
    showcase_exception_handler,
    store_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import artworks, health, users
from lib.supabase_client import StoreError, SupabaseClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Build the store, make sure the upload directory exists
    - Shutdown: Release the store
    """
    # Startup
    logger.info(f"Starting {settings.PROJECT_NAME} in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    app.state.store = SupabaseClient(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)

    settings.upload_path.mkdir(parents=True, exist_ok=True)
    logger.info(f"Serving uploads from {settings.upload_path}")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.PROJECT_NAME}")
    app.state.store.close()


# Create FastAPI application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
## Creative Showcase API

Artists share their work, like each other's pieces and follow each other.

### Quick Start

```bash
# 1. Register
curl -X POST http://localhost:5000/api/auth/register \\
  -H "Content-Type: application/json" \\
  -d '{"username": "alex", "email": "a@x.com", "password": "secret1"}'

# 2. Upload an artwork
curl -X POST http://localhost:5000/api/artworks \\
  -H "Authorization: Bearer <token>" \\
  -F "image=@sunset.png" -F "title=Sunset" -F "tags=sunset, sea"

# 3. Browse the gallery
curl http://localhost:5000/api/artworks?page=1&limit=20
```
""",
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Registration, login and the current user",
        },
        {
            "name": "Artworks",
            "description": "Gallery, uploads, edits and likes",
        },
        {
            "name": "Users",
            "description": "Public profiles and follows",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# Room for the multipart boundaries and the text fields next to the image
UPLOAD_FORM_OVERHEAD_BYTES = 1024 * 1024


def upload_too_large(content_length: str | None, max_bytes: int) -> bool:
    """True when a declared request size cannot hold an image within max_bytes."""
    if not content_length or not content_length.isdigit():
        return False
    return int(content_length) > max_bytes + UPLOAD_FORM_OVERHEAD_BYTES


@app.middleware("http")
async def reject_oversized_uploads(request: Request, call_next):
    """
    Refuse artwork uploads whose Content-Length is already over the limit.

    Form parsing spools the whole body to disk before the route runs, so this
    is the only point where a huge upload can be turned away unread. Bodies
    without a Content-Length still hit the size check in the route.
    """
    if request.method == "POST" and request.url.path.rstrip("/") == "/api/artworks":
        if upload_too_large(request.headers.get("content-length"), settings.max_upload_size_bytes):
            error = FileTooLargeError(settings.MAX_UPLOAD_SIZE_MB)
            logger.warning(f"Rejected upload of {request.headers['content-length']} bytes")
            return JSONResponse(status_code=error.status_code, content=error.to_dict())
    return await call_next(request)


# CORS middleware (added last, so it wraps the responses above) - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(ShowcaseException, showcase_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(StoreError, store_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api",
)

# Artwork endpoints
app.include_router(
    artworks.router,
    prefix="/api/artworks",
    tags=["Artworks"]
)

# User endpoints
app.include_router(
    users.router,
    prefix="/api/users",
    tags=["Users"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

# Uploaded images
app.mount(
    "/uploads",
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": settings.PROJECT_NAME,
        "version": settings.API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }
