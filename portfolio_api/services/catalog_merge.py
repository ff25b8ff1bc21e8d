"""Merge of the fallback catalog, stored records and display order"""

from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from portfolio_api.schemas.catalog import FallbackLocation, LocationView, ProjectCard
from portfolio_api.schemas.location import Location
from portfolio_api.schemas.order import OrderDocument
from portfolio_api.schemas.project import Project

T = TypeVar("T")


def sort_by_order(items: Sequence[T], order_ids: Sequence[str], key: Callable[[T], str]) -> List[T]:
    """
    Stable sort of items by their position in order_ids.

    Items whose key is not listed keep their relative order after all
    listed items. A repeated id ranks by its first position.
    """
    positions: Dict[str, int] = {}
    for index, item_id in enumerate(order_ids):
        positions.setdefault(item_id, index)
    unlisted = len(order_ids)
    return sorted(items, key=lambda item: positions.get(key(item), unlisted))


def project_card(project: Project) -> ProjectCard:
    """Display entry for a stored project"""
    image = project.cover_image_url or (project.images[0].url if project.images else "")
    return ProjectCard(
        id=project.id,
        image=image or "",
        title=project.name,
        link=f"/client/{project.id}",
    )


def build_location_views(
    fallback: Sequence[FallbackLocation],
    api_locations: Sequence[Location],
    api_projects: Sequence[Project],
    order: Optional[OrderDocument] = None,
) -> List[LocationView]:
    """
    Build the ordered list of locations with their ordered project cards.

    Fallback entries seed the result and stored locations overlay them.
    With a location order, locations follow it and unlisted ones come
    last; without one, stored locations keep their order and fallback-only
    locations follow. Each location shows its fallback cards before its
    stored project cards, then the per-location project order is applied.
    Ids in the order document that match nothing are ignored.
    """
    order = order or OrderDocument()
    views: Dict[str, LocationView] = {}
    fallback_cards: Dict[str, List[ProjectCard]] = {}

    for entry in fallback:
        views[entry.id] = LocationView(
            id=entry.id,
            name=entry.name,
            state_or_country=entry.state_or_country,
            latitude=entry.latitude,
            longitude=entry.longitude,
        )
        fallback_cards[entry.id] = list(entry.clients)

    for location in api_locations:
        view = views.get(location.id)
        if view is None:
            views[location.id] = LocationView(
                id=location.id,
                name=location.name,
                state_or_country=location.state_or_country or "",
                latitude=location.latitude,
                longitude=location.longitude,
            )
            continue
        if location.name:
            view.name = location.name
        if location.state_or_country:
            view.state_or_country = location.state_or_country
        if location.latitude is not None and location.longitude is not None:
            view.latitude = location.latitude
            view.longitude = location.longitude

    api_cards: Dict[str, List[ProjectCard]] = {}
    for project in api_projects:
        api_cards.setdefault(project.location_id, []).append(project_card(project))

    if order.locations:
        ordered = sort_by_order(list(views.values()), order.locations, key=lambda view: view.id)
    else:
        ordered = []
        seen = set()
        for location in api_locations:
            if location.id not in seen:
                seen.add(location.id)
                ordered.append(views[location.id])
        ordered.extend(view for view_id, view in views.items() if view_id not in seen)

    for view in ordered:
        cards = fallback_cards.get(view.id, []) + api_cards.get(view.id, [])
        project_order = order.projects.get(view.id)
        if project_order:
            cards = sort_by_order(cards, project_order, key=lambda card: card.id)
        view.projects = cards

    return ordered
