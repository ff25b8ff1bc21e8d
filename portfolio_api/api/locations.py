"""Location endpoints"""

from typing import List
from fastapi import APIRouter, Depends, Response, status

from portfolio_api.api.dependencies import get_order_service, get_portfolio_service, require_admin
from portfolio_api.api.errors import ProblemDetail
from portfolio_api.schemas.location import Location, LocationCreate, LocationUpdate
from portfolio_api.schemas.order import OrderDocument
from portfolio_api.schemas.project import LocationDetail, Project
from portfolio_api.services import OrderService, PortfolioService

router = APIRouter(prefix="/locations", tags=["Locations"])

NOT_FOUND = {404: {"model": ProblemDetail}}


@router.get("", response_model=List[Location], response_model_exclude_none=True)
async def list_locations(service: PortfolioService = Depends(get_portfolio_service)):
    """List all stored locations"""
    return await service.list_locations()


@router.get("/order", response_model=OrderDocument)
async def get_public_order(
    response: Response,
    order_service: OrderService = Depends(get_order_service),
):
    """Read-only display order for the presentation layer"""
    response.headers["Cache-Control"] = "no-store"
    return await order_service.get_order()


@router.post(
    "",
    response_model=Location,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
    responses={409: {"model": ProblemDetail}},
)
async def create_location(
    payload: LocationCreate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """
    Create a location

    The id is the slug of the explicit id or of the name and must be unique.
    """
    return await service.create_location(payload)


@router.get("/{location_id}", response_model=LocationDetail, responses=NOT_FOUND)
async def get_location(location_id: str, service: PortfolioService = Depends(get_portfolio_service)):
    """Location with all of its projects"""
    return await service.get_location(location_id)


@router.get("/{location_id}/projects", response_model=List[Project], responses=NOT_FOUND)
async def list_location_projects(
    location_id: str,
    service: PortfolioService = Depends(get_portfolio_service),
):
    return await service.list_location_projects(location_id)


@router.patch(
    "/{location_id}",
    response_model=Location,
    response_model_exclude_none=True,
    dependencies=[Depends(require_admin)],
    responses=NOT_FOUND,
)
async def update_location(
    location_id: str,
    payload: LocationUpdate,
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Update name, region label or coordinates; the id never changes"""
    return await service.update_location(location_id, payload)


@router.delete(
    "/{location_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
    responses=NOT_FOUND,
)
async def delete_location(location_id: str, service: PortfolioService = Depends(get_portfolio_service)):
    """Delete a location and every project in it"""
    await service.delete_location(location_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
