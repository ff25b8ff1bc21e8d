"""Tests for health check endpoints"""

from pathlib import Path

import pytest
from fastapi import status

from portfolio_api import __version__


def write_store(path, content):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


@pytest.mark.asyncio
class TestHealthEndpoints:
    """Test health check endpoints"""

    async def test_basic_health_check(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["timestamp"].endswith("Z")

    async def test_detailed_health_check(self, async_client):
        response = await async_client.get("/health/details")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert data["services"] == {"record_store": "ok", "media_host": "connected"}

    async def test_degraded_record_store(self, async_client, settings):
        write_store(settings.data_file, "{not json")

        response = await async_client.get("/health/details")

        data = response.json()
        assert data["status"] == "degraded"
        assert data["services"]["record_store"].startswith("unavailable")

    async def test_corrupt_store_fails_requests(self, async_client, settings):
        write_store(settings.data_file, "[1, 2]")

        response = await async_client.get("/api/locations")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
