"""Health check endpoints"""

import asyncio
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, status

from portfolio_api import __version__
from portfolio_api.api.dependencies import get_media_storage, get_record_store
from portfolio_api.services import MediaStorageService, RecordStore
from portfolio_api.services.record_store import RecordStoreError

router = APIRouter(tags=["Health"])


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/health", status_code=status.HTTP_200_OK)
async def basic_health_check():
    """
    Basic health check endpoint (no authentication required)

    Returns simple health status and timestamp
    """
    return {
        "status": "healthy",
        "timestamp": _timestamp(),
    }


@router.get("/health/details", status_code=status.HTTP_200_OK)
async def detailed_health_check(
    record_store: RecordStore = Depends(get_record_store),
    media_storage: MediaStorageService = Depends(get_media_storage),
):
    """
    Detailed health check with dependency status (no authentication required)

    Checks:
    - Record store file is readable
    - Media host bucket is reachable
    """
    services = {}
    overall_status = "healthy"

    try:
        await record_store.read()
        services["record_store"] = "ok"
    except (RecordStoreError, OSError) as e:
        services["record_store"] = f"unavailable: {e}"
        overall_status = "degraded"

    loop = asyncio.get_running_loop()
    media_status = await loop.run_in_executor(None, media_storage.check_connection)
    services["media_host"] = media_status
    if media_status not in ("connected", "not_configured"):
        overall_status = "degraded"

    return {
        "status": overall_status,
        "version": __version__,
        "timestamp": _timestamp(),
        "services": services,
    }
