"""Display order schemas"""

from pydantic import BaseModel, Field

from portfolio_api.schemas.base import CamelModel


class OrderDocument(BaseModel):
    """Persisted display-ordering preference"""
    locations: list[str] = Field(default_factory=list, description="Ordered location ids")
    projects: dict[str, list[str]] = Field(
        default_factory=dict, description="Ordered project ids per location id"
    )


class LocationOrderUpdate(BaseModel):
    """Request body for PUT /admin/order/locations"""
    locations: list[str]


class ProjectOrderUpdate(CamelModel):
    """Request body for PUT /admin/order/projects"""
    location_id: str = Field(..., min_length=1)
    projects: list[str]


class LocationOrderResponse(BaseModel):
    locations: list[str]


class ProjectOrderResponse(BaseModel):
    projects: list[str]
