"""Schemas package"""

from portfolio_api.schemas.catalog import FallbackLocation, LocationView, ProjectCard, SearchResult
from portfolio_api.schemas.location import Location, LocationCreate, LocationUpdate
from portfolio_api.schemas.order import OrderDocument
from portfolio_api.schemas.project import (
    ImageLabel,
    LocationDetail,
    Project,
    ProjectCreate,
    ProjectImage,
    ProjectUpdate,
    StoreDocument,
    normalize_label,
)

__all__ = [
    "FallbackLocation",
    "ImageLabel",
    "Location",
    "LocationCreate",
    "LocationDetail",
    "LocationUpdate",
    "LocationView",
    "OrderDocument",
    "Project",
    "ProjectCard",
    "ProjectCreate",
    "ProjectImage",
    "ProjectUpdate",
    "SearchResult",
    "StoreDocument",
    "normalize_label",
]
