"""Location, project and image record operations"""

import asyncio
import logging
from datetime import datetime, timezone
from functools import partial
from typing import List, Optional, Sequence
from uuid import uuid4

from pydantic import BaseModel

from portfolio_api.schemas.base import CamelModel
from portfolio_api.schemas.catalog import LocationView, SearchResult
from portfolio_api.schemas.location import Location, LocationCreate, LocationUpdate
from portfolio_api.schemas.order import OrderDocument
from portfolio_api.schemas.project import (
    LocationDetail,
    Project,
    ProjectCreate,
    ProjectImage,
    ProjectUpdate,
    StoreDocument,
    normalize_label,
)
from portfolio_api.services.catalog_merge import build_location_views
from portfolio_api.services.fallback_catalog import get_fallback_catalog
from portfolio_api.services.media_storage import MediaStorageError, MediaStorageService
from portfolio_api.services.naming import make_slug
from portfolio_api.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class PortfolioError(Exception):
    """Base exception for record operations"""
    pass


class ResourceNotFoundError(PortfolioError):
    """Referenced location, project or image does not exist"""
    pass


class ResourceConflictError(PortfolioError):
    """Resource with the same id already exists"""
    pass


class InvalidRequestError(PortfolioError):
    """Request is missing data or references unknown records"""
    pass


class ImageUpload(BaseModel):
    """Validated image bytes ready to send to the media host"""
    data: bytes
    content_type: str
    extension: str


class ImportSummary(CamelModel):
    """Counts of records changed by a catalog import"""
    locations_added: int = 0
    locations_updated: int = 0
    projects_added: int = 0


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _find_project(store: StoreDocument, project_id: str) -> Project:
    for project in store.projects:
        if project.id == project_id:
            return project
    raise ResourceNotFoundError("Project not found")


def _find_location(store: StoreDocument, location_id: str) -> Location:
    for location in store.locations:
        if location.id == location_id:
            return location
    raise ResourceNotFoundError("Location not found")


def _location_exists(store: StoreDocument, location_id: str) -> bool:
    return any(location.id == location_id for location in store.locations)


class PortfolioService:
    """
    Record-level operations over the record store and media host.

    Every mutation is a single read-modify-write of the whole store
    document.
    """

    def __init__(self, record_store: RecordStore, media_storage: MediaStorageService):
        self.record_store = record_store
        self.media_storage = media_storage

    # Locations

    async def list_locations(self) -> List[Location]:
        store = await self.record_store.read()
        return store.locations

    async def get_location(self, location_id: str) -> LocationDetail:
        store = await self.record_store.read()
        location = _find_location(store, location_id)
        projects = [p for p in store.projects if p.location_id == location_id]
        return LocationDetail(**location.model_dump(), projects=projects)

    async def list_location_projects(self, location_id: str) -> List[Project]:
        store = await self.record_store.read()
        _find_location(store, location_id)
        return [p for p in store.projects if p.location_id == location_id]

    async def create_location(self, payload: LocationCreate) -> Location:
        """
        Create a location whose id is the slug of the override or the name.

        Raises:
            InvalidRequestError: If the name produces an empty slug
            ResourceConflictError: If the id is already taken
        """
        location_id = make_slug(payload.id or payload.name)
        if not location_id:
            raise InvalidRequestError("Location name must contain letters or digits")

        store = await self.record_store.read()
        if _location_exists(store, location_id):
            raise ResourceConflictError(f"Location {location_id} already exists")

        location = Location(
            id=location_id,
            name=payload.name.strip(),
            state_or_country=(payload.state_or_country or "").strip(),
            latitude=payload.latitude,
            longitude=payload.longitude,
        )
        store.locations.append(location)
        await self.record_store.write(store)
        logger.info(f"Created location {location_id}")
        return location

    async def update_location(self, location_id: str, payload: LocationUpdate) -> Location:
        store = await self.record_store.read()
        location = _find_location(store, location_id)

        for field, value in payload.model_dump(exclude_unset=True).items():
            if field == "name":
                if value is None:
                    continue
                value = value.strip()
                if not value:
                    raise InvalidRequestError("Location name must not be blank")
            if field == "state_or_country":
                value = (value or "").strip()
            setattr(location, field, value)

        await self.record_store.write(store)
        logger.info(f"Updated location {location_id}")
        return location

    async def delete_location(self, location_id: str) -> None:
        """Delete a location together with every project that references it"""
        store = await self.record_store.read()
        _find_location(store, location_id)

        doomed = [p for p in store.projects if p.location_id == location_id]
        await self._delete_assets([image for p in doomed for image in p.images])

        store.locations = [loc for loc in store.locations if loc.id != location_id]
        store.projects = [p for p in store.projects if p.location_id != location_id]
        await self.record_store.write(store)
        logger.info(f"Deleted location {location_id} and {len(doomed)} projects")

    # Projects

    async def list_projects(self, location_id: Optional[str] = None) -> List[Project]:
        store = await self.record_store.read()
        if location_id:
            return [p for p in store.projects if p.location_id == location_id]
        return store.projects

    async def get_project(self, project_id: str) -> Project:
        store = await self.record_store.read()
        return _find_project(store, project_id)

    async def create_project(self, payload: ProjectCreate) -> Project:
        """
        Raises:
            InvalidRequestError: If the location does not exist
        """
        store = await self.record_store.read()
        if not _location_exists(store, payload.location_id):
            raise InvalidRequestError("Location does not exist")

        now = _now()
        project = Project(
            id=uuid4().hex,
            name=payload.name.strip(),
            location_id=payload.location_id,
            client_number=payload.client_number,
            created_at=now,
            updated_at=now,
        )
        store.projects.append(project)
        await self.record_store.write(store)
        logger.info(f"Created project {project.id} in {project.location_id}")
        return project

    async def update_project(self, project_id: str, payload: ProjectUpdate) -> Project:
        store = await self.record_store.read()
        project = _find_project(store, project_id)

        update_data = payload.model_dump(exclude_unset=True)
        if update_data.get("location_id") and not _location_exists(store, update_data["location_id"]):
            raise InvalidRequestError("Location does not exist")

        for field, value in update_data.items():
            if value is None and field in ("name", "location_id"):
                continue
            if field == "cover_image_url":
                value = value or ""
            setattr(project, field, value)

        project.updated_at = _now()
        await self.record_store.write(store)
        logger.info(f"Updated project {project_id}")
        return project

    async def delete_project(self, project_id: str) -> None:
        """
        Delete a project and its images on the media host.

        Image deletions run concurrently; the first failure is raised and
        the project record is kept.
        """
        store = await self.record_store.read()
        project = _find_project(store, project_id)

        await self._delete_assets(project.images)

        store.projects = [p for p in store.projects if p.id != project_id]
        await self.record_store.write(store)
        logger.info(f"Deleted project {project_id}")

    # Images

    async def add_images(
        self,
        project_id: str,
        uploads: Sequence[ImageUpload],
        labels: Sequence[str] = (),
    ) -> Project:
        """
        Upload images to the media host and append them to a project.

        labels[i] applies to uploads[i]; missing labels default to Exterior.
        Uploads run concurrently and the first failure is raised without
        removing images that already reached the media host.
        """
        store = await self.record_store.read()
        project = _find_project(store, project_id)
        if not uploads:
            raise InvalidRequestError("No images provided")
        if not self.media_storage.is_configured:
            raise MediaStorageError("Media host is not configured")

        loop = asyncio.get_running_loop()

        async def upload_one(index: int, upload: ImageUpload) -> ProjectImage:
            label = normalize_label(labels[index] if index < len(labels) else None)
            image_id = uuid4().hex
            key = self.media_storage.build_key(
                project.location_id, project.id, f"{image_id}.{upload.extension}"
            )
            asset = await loop.run_in_executor(
                None,
                partial(
                    self.media_storage.upload_image,
                    upload.data,
                    key,
                    content_type=upload.content_type,
                    metadata={"label": label.value, "project-id": project.id},
                ),
            )
            return ProjectImage(
                id=image_id,
                url=asset.url,
                public_id=asset.public_id,
                label=label,
                created_at=_now(),
            )

        new_images = await asyncio.gather(
            *(upload_one(index, upload) for index, upload in enumerate(uploads))
        )

        project.images.extend(new_images)
        if not project.cover_image_url and project.images:
            project.cover_image_url = project.images[0].url
        project.updated_at = _now()
        await self.record_store.write(store)
        logger.info(f"Added {len(new_images)} images to project {project_id}")
        return project

    async def update_image_label(self, project_id: str, image_id: str, label: Optional[str]) -> Project:
        store = await self.record_store.read()
        project = _find_project(store, project_id)
        image = next((item for item in project.images if item.id == image_id), None)
        if image is None:
            raise ResourceNotFoundError("Image not found")

        if label is not None:
            image.label = normalize_label(label)
        project.updated_at = _now()
        await self.record_store.write(store)
        return project

    async def delete_image(self, project_id: str, image_id: str, delete_remote: bool = False) -> None:
        """Remove an image, optionally deleting it from the media host too"""
        store = await self.record_store.read()
        project = _find_project(store, project_id)
        index = next((i for i, item in enumerate(project.images) if item.id == image_id), None)
        if index is None:
            raise ResourceNotFoundError("Image not found")

        removed = project.images.pop(index)
        if delete_remote and removed.public_id:
            if not self.media_storage.is_configured:
                raise MediaStorageError("Media host is not configured")
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(None, self.media_storage.delete_image, removed.public_id)

        if project.cover_image_url == removed.url:
            project.cover_image_url = project.images[0].url if project.images else ""
        project.updated_at = _now()
        await self.record_store.write(store)
        logger.info(f"Deleted image {image_id} from project {project_id}")

    async def _delete_assets(self, images: Sequence[ProjectImage]) -> None:
        keys = [image.public_id for image in images if image.public_id]
        if not keys:
            return
        if not self.media_storage.is_configured:
            logger.warning(f"Media host not configured, leaving {len(keys)} assets in place")
            return

        loop = asyncio.get_running_loop()
        await asyncio.gather(
            *(loop.run_in_executor(None, self.media_storage.delete_image, key) for key in keys)
        )

    # Catalog

    async def import_catalog(self, catalog: StoreDocument) -> ImportSummary:
        """
        Merge an imported catalog into the record store.

        Unknown locations are added and known ones get missing coordinates.
        Imported projects are added unless one of their assets is already
        attached to a stored project.
        """
        store = await self.record_store.read()
        summary = ImportSummary()
        known_locations = {location.id: location for location in store.locations}
        tracked_assets = {
            image.public_id
            for project in store.projects
            for image in project.images
            if image.public_id
        }
        project_ids = {project.id for project in store.projects}

        for location in catalog.locations:
            existing = known_locations.get(location.id)
            if existing is None:
                store.locations.append(location)
                known_locations[location.id] = location
                summary.locations_added += 1
            elif (
                (existing.latitude is None or existing.longitude is None)
                and location.latitude is not None
                and location.longitude is not None
            ):
                existing.latitude = location.latitude
                existing.longitude = location.longitude
                summary.locations_updated += 1

        for project in catalog.projects:
            if project.id in project_ids:
                continue
            if any(image.public_id in tracked_assets for image in project.images):
                continue
            store.projects.append(project)
            project_ids.add(project.id)
            summary.projects_added += 1

        await self.record_store.write(store)
        logger.info(f"Imported catalog: {summary.model_dump()}")
        return summary

    async def build_display(self, order: OrderDocument) -> List[LocationView]:
        store = await self.record_store.read()
        return build_location_views(get_fallback_catalog(), store.locations, store.projects, order)

    async def search(self, query: str) -> List[SearchResult]:
        """Case-insensitive substring search over location and project names"""
        term = (query or "").strip().lower()
        if not term:
            return []

        store = await self.record_store.read()
        results = [
            SearchResult(
                id=f"location-{location.id}",
                title=location.name,
                type="location",
                link=f"/#{location.id}",
            )
            for location in store.locations
            if term in location.name.lower()
        ]
        results.extend(
            SearchResult(
                id=f"client-{project.id}",
                title=project.name,
                type="client",
                link=f"/client/{project.id}",
            )
            for project in store.projects
            if term in project.name.lower()
        )
        return results
