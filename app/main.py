# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Reels API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from app.config import Settings, settings as default_settings
from app.dependencies import AppContext
from app.exceptions import (
    ReelsException,
    internal_exception_handler,
    reels_exception_handler,
    validation_exception_handler,
)
from app.middleware import UploadSizeLimitMiddleware
from app.routers import health, reels
from app.auth import routes as auth_routes
from core.models.reel import REELS_URL_PREFIX

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if default_settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Request bodies on these paths are capped at MAX_UPLOAD_SIZE_MB
SIZE_LIMITED_PATHS = {"/api/upload"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: create the upload directory
    - Shutdown: clear rate limiter state and drop the store client
    """
    context: AppContext = app.state.context

    # Startup
    logger.info(f"Starting Reels API in {context.settings.ENVIRONMENT} mode")
    context.startup()
    logger.info(f"Serving uploads from {context.storage.upload_dir}")

    yield

    # Shutdown
    logger.info("Shutting down Reels API")
    context.shutdown()


def create_app(
    context: AppContext | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        context: Prebuilt AppContext (tests pass one with fake stores)
        settings: Settings used to build the context when none is given

    Returns:
        The configured application
    """
    if context is None:
        context = AppContext.from_settings(settings or default_settings)
    app_settings = context.settings

    app = FastAPI(
        title="Reels API",
        description="Registration, login and short-video reel upload/listing.",
        version=health.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Auth",
                "description": "Register, log in and verify bearer tokens",
            },
            {
                "name": "Reels",
                "description": "Upload videos and list reels",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )
    app.state.context = context

    # =========================================================================
    # Middleware
    # =========================================================================

    # Upload body cap - checked before the form is parsed
    app.add_middleware(
        UploadSizeLimitMiddleware,
        paths=SIZE_LIMITED_PATHS,
        max_size_bytes=app_settings.max_upload_size_bytes,
    )

    # CORS middleware - allows cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list if app_settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(ReelsException, reels_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, internal_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    # Registration, login and token verification
    app.include_router(
        auth_routes.router,
        prefix="/api",
        tags=["Auth"]
    )

    # Upload and listing
    app.include_router(
        reels.router,
        prefix="/api",
        tags=["Reels"]
    )

    # Health check endpoints
    app.include_router(
        health.router,
        prefix="/api",
        tags=["Health"]
    )

    # =========================================================================
    # Static Files
    # =========================================================================

    # Uploaded videos, read-only. The directory is created on startup.
    app.mount(
        REELS_URL_PREFIX,
        StaticFiles(directory=str(context.storage.upload_dir), check_dir=False),
        name="reels",
    )

    @app.get("/", include_in_schema=False)
    async def root():
        """
        Serve the frontend index page, or API info when there is none.
        """
        index = app_settings.index_path
        if index.is_file():
            return FileResponse(index)
        return {
            "name": "Reels API",
            "version": health.VERSION,
            "docs": "/docs",
            "health": "/api/health",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        reload=default_settings.is_development,
    )
