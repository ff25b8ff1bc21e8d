"""Admin endpoints: secret check, display order and catalog import"""

import logging
from fastapi import APIRouter, Depends, Response

from portfolio_api.api.dependencies import (
    get_catalog_importer,
    get_order_service,
    get_portfolio_service,
    require_admin,
)
from portfolio_api.api.errors import ProblemDetail
from portfolio_api.schemas.order import (
    LocationOrderResponse,
    LocationOrderUpdate,
    OrderDocument,
    ProjectOrderResponse,
    ProjectOrderUpdate,
)
from portfolio_api.schemas.project import StoreDocument
from portfolio_api.services import CatalogImporter, OrderService, PortfolioService
from portfolio_api.services.portfolio_service import ImportSummary

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
    responses={401: {"model": ProblemDetail}},
)


@router.get("/verify")
async def verify_admin():
    """No-op used to check the admin password"""
    return {"status": "ok"}


@router.get("/order", response_model=OrderDocument)
async def get_order(response: Response, order_service: OrderService = Depends(get_order_service)):
    response.headers["Cache-Control"] = "no-store"
    return await order_service.get_order()


@router.put("/order/locations", response_model=LocationOrderResponse)
async def update_location_order(
    payload: LocationOrderUpdate,
    order_service: OrderService = Depends(get_order_service),
):
    """Replace the display order of locations"""
    locations = await order_service.save_location_order(payload.locations)
    return LocationOrderResponse(locations=locations)


@router.put("/order/projects", response_model=ProjectOrderResponse)
async def update_project_order(
    payload: ProjectOrderUpdate,
    order_service: OrderService = Depends(get_order_service),
):
    """Replace the display order of one location's projects"""
    projects = await order_service.save_project_order(payload.location_id, payload.projects)
    return ProjectOrderResponse(projects=projects)


@router.get("/catalog/preview", response_model=StoreDocument, responses={502: {"model": ProblemDetail}})
async def preview_catalog(importer: CatalogImporter = Depends(get_catalog_importer)):
    """Catalog as rebuilt from the media host, without storing it"""
    return await importer.build_catalog()


@router.post("/catalog/import", response_model=ImportSummary, responses={502: {"model": ProblemDetail}})
async def import_catalog(
    importer: CatalogImporter = Depends(get_catalog_importer),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """
    Rebuild the catalog from the media host and merge it into the record store

    Existing records are never overwritten; only new locations, missing
    coordinates and untracked projects are added.
    """
    catalog = await importer.build_catalog()
    summary = await service.import_catalog(catalog)
    logger.info(f"Catalog import finished: {summary.model_dump()}")
    return summary
