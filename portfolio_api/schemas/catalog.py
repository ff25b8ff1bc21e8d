"""Display catalog and search schemas"""

from typing import Literal, Optional
from pydantic import Field

from portfolio_api.schemas.base import CamelModel


class ProjectCard(CamelModel):
    """Project entry as shown on a location's page"""
    id: str
    image: str = ""
    title: str
    link: str


class FallbackLocation(CamelModel):
    """Static seed location that is always available"""
    id: str
    name: str
    state_or_country: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    clients: list[ProjectCard] = Field(default_factory=list)


class LocationView(CamelModel):
    """Location with its ordered project cards, ready for display"""
    id: str
    name: str
    state_or_country: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    projects: list[ProjectCard] = Field(default_factory=list)


class SearchResult(CamelModel):
    """Single search hit"""
    id: str
    title: str
    type: Literal["location", "client"]
    link: str
