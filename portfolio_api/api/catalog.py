"""Public display catalog and search endpoints"""

from typing import List
from fastapi import APIRouter, Depends, Query

from portfolio_api.api.dependencies import get_order_service, get_portfolio_service
from portfolio_api.schemas.catalog import LocationView, SearchResult
from portfolio_api.services import OrderService, PortfolioService

router = APIRouter(tags=["Catalog"])


@router.get("/catalog", response_model=List[LocationView])
async def get_catalog(
    service: PortfolioService = Depends(get_portfolio_service),
    order_service: OrderService = Depends(get_order_service),
):
    """
    Ordered locations with their ordered project cards

    Combines the fallback locations, the stored records and the saved
    display order.
    """
    order = await order_service.get_order()
    return await service.build_display(order)


@router.get("/search", response_model=List[SearchResult])
async def search(
    q: str = Query("", description="Search term"),
    service: PortfolioService = Depends(get_portfolio_service),
):
    """Search location and project names"""
    return await service.search(q)
