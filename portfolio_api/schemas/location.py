"""Location schemas"""

from typing import Optional
from pydantic import Field

from portfolio_api.schemas.base import CamelModel


class Location(CamelModel):
    """Geographic grouping under which projects are organized"""
    id: str = Field(..., description="Stable slug")
    name: str = Field(..., description="Display name")
    state_or_country: str = Field(default="", description="Region label")
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class LocationCreate(CamelModel):
    """Location creation schema"""
    name: str = Field(..., min_length=1, max_length=255, description="Location name")
    state_or_country: Optional[str] = Field(None, description="Region label")
    id: Optional[str] = Field(None, description="Explicit slug override")
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class LocationUpdate(CamelModel):
    """Location update schema - the id itself never changes"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    state_or_country: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
