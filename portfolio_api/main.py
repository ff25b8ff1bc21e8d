"""Main FastAPI application entry point"""

import logging
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from portfolio_api import __version__
from portfolio_api.api.admin import router as admin_router
from portfolio_api.api.catalog import router as catalog_router
from portfolio_api.api.errors import register_exception_handlers
from portfolio_api.api.health import router as health_router
from portfolio_api.api.images import router as images_router
from portfolio_api.api.locations import router as locations_router
from portfolio_api.api.projects import router as projects_router
from portfolio_api.config import Settings, get_settings
from portfolio_api.services import (
    CatalogImporter,
    MediaStorageService,
    OrderService,
    PortfolioService,
    RecordStore,
)
from portfolio_api.services.catalog_importer import EXCLUDED_FOLDERS

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    media_storage: Optional[MediaStorageService] = None,
) -> FastAPI:
    """
    Build the application and the services it owns.

    Args:
        settings: Application settings (read from the environment when omitted)
        media_storage: Media host client (an S3 client is created when omitted)
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title="Portfolio API",
        description="Locations, projects and images for the portfolio site",
        version=__version__,
    )

    media_storage = media_storage or MediaStorageService(settings)
    record_store = RecordStore(settings.data_file)
    order_folder = settings.order_object_key.strip("/").split("/")[0]

    app.state.settings = settings
    app.state.media_storage = media_storage
    app.state.record_store = record_store
    app.state.order_service = OrderService(media_storage, settings.order_object_key)
    app.state.catalog_importer = CatalogImporter(
        media_storage,
        excluded_folders=tuple(EXCLUDED_FOLDERS) + (order_folder,),
    )
    app.state.portfolio_service = PortfolioService(record_store, media_storage)

    # Configure CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "x-admin-password"],
        max_age=3600,
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(health_router)
    app.include_router(locations_router, prefix=settings.api_prefix)
    app.include_router(projects_router, prefix=settings.api_prefix)
    app.include_router(images_router, prefix=settings.api_prefix)
    app.include_router(admin_router, prefix=settings.api_prefix)
    app.include_router(catalog_router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": "Portfolio API",
            "version": __version__,
            "status": "running",
        }

    logger.info(
        f"Portfolio API configured: data_file={settings.data_file}, "
        f"media_configured={settings.media_configured}, "
        f"admin_open={not settings.admin_password}"
    )
    return app


app = create_app()


def run() -> None:
    """Console entry point"""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "portfolio_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
