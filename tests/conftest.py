"""Pytest configuration and shared fixtures"""

from datetime import datetime, timezone
from io import BytesIO
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from PIL import Image

from portfolio_api.config import Settings
from portfolio_api.main import create_app
from portfolio_api.services.media_storage import (
    MediaAsset,
    MediaNotFoundError,
    MediaStorageError,
    UploadedAsset,
)
from portfolio_api.services.record_store import RecordStore

ADMIN_PASSWORD = "test-secret"


class FakeMediaStorage:
    """In-memory stand-in for MediaStorageService"""

    def __init__(self, base_folder: str = "base", configured: bool = True):
        self.base_folder = base_folder
        self.bucket = "test-bucket"
        self.configured = configured
        self.assets: Dict[str, MediaAsset] = {}
        self.documents: Dict[str, Dict[str, Any]] = {}
        self.deleted: List[str] = []
        self.fail_uploads = False
        self.fail_deletes = False
        self.fail_downloads = False
        self.fail_listing = False

    @property
    def is_configured(self) -> bool:
        return self.configured

    def public_url(self, key: str) -> str:
        return f"https://media.test/{key}"

    def build_key(self, *segments: str) -> str:
        parts = [self.base_folder] + [segment.strip("/") for segment in segments]
        return "/".join(part for part in parts if part)

    def add_asset(
        self,
        key: str,
        metadata: Optional[Dict[str, str]] = None,
        created_at: Optional[datetime] = None,
    ) -> MediaAsset:
        asset = MediaAsset(
            key=key,
            url=self.public_url(key),
            created_at=created_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
            metadata=metadata or {},
        )
        self.assets[key] = asset
        return asset

    def upload_image(self, file_bytes, key, content_type="application/octet-stream", metadata=None):
        if self.fail_uploads:
            raise MediaStorageError("Failed to upload image: AccessDenied")
        self.add_asset(key, metadata, datetime.now(timezone.utc))
        return UploadedAsset(public_id=key, url=self.public_url(key))

    def delete_image(self, key: str) -> None:
        if self.fail_deletes:
            raise MediaStorageError("Failed to delete object: AccessDenied")
        self.assets.pop(key, None)
        self.deleted.append(key)

    def list_images(self, prefix: str = "") -> List[MediaAsset]:
        if self.fail_listing:
            raise MediaStorageError("Failed to list images: AccessDenied")
        return [asset for key, asset in self.assets.items() if key.startswith(prefix)]

    def upload_json(self, key: str, data: Dict[str, Any]) -> None:
        if self.fail_uploads:
            raise MediaStorageError("Failed to upload JSON: AccessDenied")
        self.documents[key] = data

    def download_json(self, key: str) -> Dict[str, Any]:
        if self.fail_downloads:
            raise MediaStorageError("Failed to download JSON: InternalError")
        if key not in self.documents:
            raise MediaNotFoundError(f"Object {key} not found")
        return self.documents[key]

    def check_connection(self) -> str:
        return "connected" if self.configured else "not_configured"


def make_image_bytes(image_format: str = "PNG") -> bytes:
    """Small valid image file"""
    buffer = BytesIO()
    Image.new("RGB", (4, 4), color=(200, 120, 40)).save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a temporary record store"""
    return Settings(
        _env_file=None,
        data_file=str(tmp_path / "data" / "store.json"),
        admin_password=ADMIN_PASSWORD,
        s3_bucket="test-bucket",
        aws_access_key_id="test-key",
        aws_secret_access_key="test-secret-key",
        media_folder="base",
        order_object_key="portfolio_config/display_order.json",
    )


@pytest.fixture
def media_storage() -> FakeMediaStorage:
    return FakeMediaStorage()


@pytest.fixture
def record_store(settings) -> RecordStore:
    return RecordStore(settings.data_file)


@pytest.fixture
def app(settings, media_storage):
    """Application wired to the fake media host"""
    return create_app(settings, media_storage=media_storage)


@pytest_asyncio.fixture
async def async_client(app):
    """Async test client for the application"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    return {"x-admin-password": ADMIN_PASSWORD}


@pytest_asyncio.fixture
async def sample_location(async_client, admin_headers) -> Dict[str, Any]:
    """Stored location "Test City" """
    response = await async_client.post(
        "/api/locations",
        json={"name": "Test City", "stateOrCountry": "Telangana"},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest_asyncio.fixture
async def sample_project(async_client, admin_headers, sample_location) -> Dict[str, Any]:
    """Stored project "Villa" in Test City"""
    response = await async_client.post(
        "/api/projects",
        json={"name": "Villa", "locationId": sample_location["id"]},
        headers=admin_headers,
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def image_bytes() -> bytes:
    return make_image_bytes()
