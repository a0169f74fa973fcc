"""
FastAPI application for the PropGo listings API.

Production deployment configuration via environment variables.
"""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.listings import get_listing_repository
from utils.config import get_config
from web.listing_routes import router as listing_router
from web.lookup_routes import router as lookup_router

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_config()

    # Development fallback only
    allowed_origins = list(config.allowed_origins)
    if not allowed_origins and not config.production:
        allowed_origins = ["http://localhost:8081", "http://127.0.0.1:8081"]

    app = FastAPI(
        title="PropGo Listings",
        description="Property listings API: plots, land, houses, apartments and shops",
        version=VERSION,
        # Disable docs in production
        docs_url=None if config.production else "/docs",
        redoc_url=None if config.production else "/redoc",
        openapi_url=None if config.production else "/openapi.json",
        debug=config.debug,
    )

    # Healthcheck endpoints are registered first and perform no IO.
    @app.get("/", include_in_schema=False)
    def root():
        """Root healthcheck. No dependencies, no IO."""
        return {"status": "ok"}

    @app.get("/health", include_in_schema=False)
    def health():
        """Secondary health endpoint. No dependencies, no IO."""
        return {"status": "healthy"}

    if allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE"],
            allow_headers=["*"],
        )

    @app.on_event("startup")
    def on_startup():
        """Deferred startup tasks. Runs after healthcheck is ready."""
        Path(config.data_dir).mkdir(parents=True, exist_ok=True)
        repo = get_listing_repository(config.listings_path)
        logger.info("PropGo Listings started with %d listings", repo.count())

    app.include_router(listing_router)
    app.include_router(lookup_router)

    @app.get("/api/health")
    async def api_health():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": VERSION,
            "environment": "production" if config.production else "development",
        }

    return app


# Create app instance for uvicorn
app = create_app()
