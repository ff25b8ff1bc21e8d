"""Display order document stored on the media host"""

import asyncio
import logging
from functools import partial
from typing import List

from pydantic import ValidationError

from portfolio_api.schemas.order import OrderDocument
from portfolio_api.services.media_storage import (
    MediaNotFoundError,
    MediaStorageError,
    MediaStorageService,
)

logger = logging.getLogger(__name__)


class OrderService:
    """
    Reads and republishes the display order document.

    Reads never fail: a missing document or any upstream problem yields the
    default empty order. Saves re-read the document, replace one field and
    upload the whole document again, so concurrent saves of different
    fields can overwrite each other.
    """

    def __init__(self, media_storage: MediaStorageService, object_key: str):
        self.media_storage = media_storage
        self.object_key = object_key

    async def get_order(self) -> OrderDocument:
        """Current order document, or the default when unavailable"""
        if not self.media_storage.is_configured:
            return OrderDocument()

        loop = asyncio.get_running_loop()
        try:
            data = await loop.run_in_executor(
                None, self.media_storage.download_json, self.object_key
            )
            return OrderDocument.model_validate(data)
        except MediaNotFoundError:
            return OrderDocument()
        except (MediaStorageError, ValidationError) as e:
            logger.error(f"Error fetching display order, using default: {e}")
            return OrderDocument()

    async def save_location_order(self, location_ids: List[str]) -> List[str]:
        """Replace the location order"""
        current = await self.get_order()
        current.locations = list(location_ids)
        await self._publish(current)
        return current.locations

    async def save_project_order(self, location_id: str, project_ids: List[str]) -> List[str]:
        """Replace the project order of one location"""
        current = await self.get_order()
        current.projects[location_id] = list(project_ids)
        await self._publish(current)
        return current.projects[location_id]

    async def _publish(self, order: OrderDocument) -> None:
        if not self.media_storage.is_configured:
            raise MediaStorageError("Media host is not configured")

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            partial(self.media_storage.upload_json, self.object_key, order.model_dump()),
        )
        logger.info(
            f"Saved display order: {len(order.locations)} locations, "
            f"{len(order.projects)} project lists"
        )
