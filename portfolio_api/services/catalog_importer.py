"""Catalog rebuilt from the media host's folder structure"""

import asyncio
import logging
import math
from typing import Dict, Iterable, Optional, Sequence

from portfolio_api.schemas.location import Location
from portfolio_api.schemas.project import Project, ProjectImage, StoreDocument, normalize_label
from portfolio_api.services.media_storage import MediaAsset, MediaStorageService
from portfolio_api.services.naming import make_slug, title_case

logger = logging.getLogger(__name__)

EXCLUDED_FOLDERS = (
    "logo",
    "home page",
    "homepage",
    "home_page",
    "home-page",
    "projects",
    "samples",
    "portfolio_config",
)


def _coordinate(metadata: Dict[str, str], key: str) -> Optional[float]:
    try:
        value = float(metadata.get(key, ""))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _relative_parts(key: str, base_folder: str) -> list[str]:
    prefix = f"{base_folder}/" if base_folder else ""
    if prefix and key.startswith(prefix):
        key = key[len(prefix):]
    return key.split("/")


def group_assets(
    assets: Iterable[MediaAsset],
    base_folder: str = "",
    excluded_folders: Sequence[str] = EXCLUDED_FOLDERS,
) -> StoreDocument:
    """
    Group image assets into locations and projects by folder path.

    `<base>/<location folder>/<project folder>/<file>` becomes location
    `slug(location folder)` and project `<location id>__<slug(project folder)>`.
    Assets with fewer than two folders, or under an excluded first folder,
    are skipped.
    """
    excluded = {folder.lower() for folder in excluded_folders}
    locations: Dict[str, Location] = {}
    projects: Dict[str, Project] = {}

    for asset in assets:
        parts = _relative_parts(asset.key, base_folder)
        if len(parts) < 2:
            continue
        location_folder, project_folder = parts[0], parts[1]
        if not location_folder or not project_folder:
            continue
        if location_folder.lower() in excluded:
            continue

        location_id = make_slug(location_folder)
        project_id = f"{location_id}__{make_slug(project_folder)}"
        latitude = _coordinate(asset.metadata, "latitude")
        longitude = _coordinate(asset.metadata, "longitude")

        location = locations.get(location_id)
        if location is None:
            locations[location_id] = Location(
                id=location_id,
                name=title_case(location_folder),
                state_or_country=asset.metadata.get("state-or-country", ""),
                latitude=latitude,
                longitude=longitude,
            )
        elif (
            (location.latitude is None or location.longitude is None)
            and latitude is not None
            and longitude is not None
        ):
            location.latitude = latitude
            location.longitude = longitude

        project = projects.get(project_id)
        if project is None:
            project = Project(
                id=project_id,
                name=title_case(project_folder),
                location_id=location_id,
                created_at=asset.created_at,
                updated_at=asset.created_at,
            )
            projects[project_id] = project

        image = ProjectImage(
            id=asset.key,
            url=asset.url,
            public_id=asset.key,
            label=normalize_label(asset.metadata.get("label")),
            created_at=asset.created_at,
        )
        project.images.append(image)
        if not project.cover_image_url:
            project.cover_image_url = image.url
        if project.updated_at is None or asset.created_at > project.updated_at:
            project.updated_at = asset.created_at

    return StoreDocument(locations=list(locations.values()), projects=list(projects.values()))


class CatalogImporter:
    """Builds a full catalog by scanning the media host"""

    def __init__(
        self,
        media_storage: MediaStorageService,
        excluded_folders: Sequence[str] = EXCLUDED_FOLDERS,
    ):
        self.media_storage = media_storage
        self.excluded_folders = excluded_folders

    async def build_catalog(self) -> StoreDocument:
        """
        Scan every image under the base folder and group it.

        Returns an empty catalog when the media host is not configured.
        Listing errors propagate to the caller.
        """
        if not self.media_storage.is_configured:
            return StoreDocument()

        base_folder = self.media_storage.base_folder
        prefix = f"{base_folder}/" if base_folder else ""
        loop = asyncio.get_running_loop()
        assets = await loop.run_in_executor(None, self.media_storage.list_images, prefix)

        catalog = group_assets(assets, base_folder, self.excluded_folders)
        logger.info(
            f"Built catalog from {len(assets)} assets: "
            f"{len(catalog.locations)} locations, {len(catalog.projects)} projects"
        )
        return catalog
