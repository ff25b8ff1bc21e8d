"""API dependencies for services and the admin gate"""

import hmac
from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, status

from portfolio_api.api.errors import problem_content
from portfolio_api.config import Settings
from portfolio_api.services import (
    CatalogImporter,
    MediaStorageService,
    OrderService,
    PortfolioService,
    RecordStore,
)

ADMIN_HEADER = "x-admin-password"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_record_store(request: Request) -> RecordStore:
    return request.app.state.record_store


def get_media_storage(request: Request) -> MediaStorageService:
    return request.app.state.media_storage


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def get_catalog_importer(request: Request) -> CatalogImporter:
    return request.app.state.catalog_importer


def get_portfolio_service(request: Request) -> PortfolioService:
    return request.app.state.portfolio_service


async def require_admin(
    request: Request,
    x_admin_password: Optional[str] = Header(None, alias=ADMIN_HEADER),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Check the shared admin secret.

    An empty configured secret leaves admin routes open.

    Raises:
        HTTPException: 401 if the header is missing or does not match
    """
    if not settings.admin_password:
        return

    provided = x_admin_password or ""
    if not provided or not hmac.compare_digest(provided.encode(), settings.admin_password.encode()):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=problem_content(
                status_code=status.HTTP_401_UNAUTHORIZED,
                title="Unauthorized",
                detail="Invalid or missing admin password",
                instance=request.url.path,
            ),
        )
