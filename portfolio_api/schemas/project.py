"""Project and project image schemas"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from pydantic import Field

from portfolio_api.schemas.base import CamelModel
from portfolio_api.schemas.location import Location


class ImageLabel(str, Enum):
    """Image label enumeration"""
    INTERIOR = "Interior"
    EXTERIOR = "Exterior"


def normalize_label(value: Any) -> ImageLabel:
    """Map "interior" (any case) to Interior and everything else to Exterior"""
    if isinstance(value, ImageLabel):
        return value
    if value is not None and str(value).lower() == "interior":
        return ImageLabel.INTERIOR
    return ImageLabel.EXTERIOR


class ProjectImage(CamelModel):
    """Single image attached to a project"""
    id: str
    url: str
    public_id: Optional[str] = Field(None, description="Media host object key")
    label: ImageLabel = ImageLabel.EXTERIOR
    created_at: Optional[datetime] = None


class Project(CamelModel):
    """Client engagement with an ordered set of images"""
    id: str
    name: str
    location_id: str
    client_number: Optional[str] = None
    cover_image_url: str = ""
    images: list[ProjectImage] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectCreate(CamelModel):
    """Project creation schema"""
    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    location_id: str = Field(..., min_length=1, description="Owning location id")
    client_number: Optional[str] = Field(None, description="Client reference")


class ProjectUpdate(CamelModel):
    """Project update schema - all fields optional"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location_id: Optional[str] = Field(None, min_length=1)
    client_number: Optional[str] = None
    cover_image_url: Optional[str] = None


class ImageLabelUpdate(CamelModel):
    """Request schema for relabelling an image"""
    label: Optional[str] = None


class LocationDetail(Location):
    """Location with its projects"""
    projects: list[Project] = Field(default_factory=list)


class StoreDocument(CamelModel):
    """Full set of locations and projects from one source"""
    locations: list[Location] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
