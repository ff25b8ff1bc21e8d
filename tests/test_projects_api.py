"""Tests for project API endpoints"""

import pytest
from fastapi import status


@pytest.mark.asyncio
class TestCreateProject:
    """Test POST /api/projects"""

    async def test_create_project(self, async_client, admin_headers, sample_location):
        response = await async_client.post(
            "/api/projects",
            json={"name": "Villa", "locationId": "test-city", "clientNumber": "C-17"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["name"] == "Villa"
        assert data["locationId"] == "test-city"
        assert data["clientNumber"] == "C-17"
        assert data["images"] == []
        assert data["coverImageUrl"] == ""
        assert data["id"]
        assert data["createdAt"] == data["updatedAt"]

    async def test_unknown_location_rejected(self, async_client, admin_headers):
        response = await async_client.post(
            "/api/projects",
            json={"name": "Villa", "locationId": "atlantis"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Location does not exist"

    async def test_missing_fields(self, async_client, admin_headers):
        response = await async_client.post(
            "/api/projects", json={"name": "Villa"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_requires_admin(self, async_client, sample_location):
        response = await async_client.post(
            "/api/projects", json={"name": "Villa", "locationId": "test-city"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_ids_are_unique(self, async_client, admin_headers, sample_location):
        payload = {"name": "Villa", "locationId": "test-city"}
        first = await async_client.post("/api/projects", json=payload, headers=admin_headers)
        second = await async_client.post("/api/projects", json=payload, headers=admin_headers)

        assert first.json()["id"] != second.json()["id"]


@pytest.mark.asyncio
class TestReadProjects:
    """Test GET project endpoints"""

    async def test_list_filtered_by_location(self, async_client, admin_headers, sample_project):
        await async_client.post("/api/locations", json={"name": "Elsewhere"}, headers=admin_headers)
        await async_client.post(
            "/api/projects", json={"name": "Other", "locationId": "elsewhere"}, headers=admin_headers
        )

        all_projects = (await async_client.get("/api/projects")).json()
        filtered = (await async_client.get("/api/projects?location=test-city")).json()

        assert len(all_projects) == 2
        assert [project["id"] for project in filtered] == [sample_project["id"]]

    async def test_get_project(self, async_client, sample_project):
        response = await async_client.get(f"/api/projects/{sample_project['id']}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Villa"

    async def test_get_unknown_project(self, async_client):
        response = await async_client.get("/api/projects/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Project not found"


@pytest.mark.asyncio
class TestUpdateProject:
    """Test PATCH /api/projects/{id}"""

    async def test_update_fields(self, async_client, admin_headers, sample_project):
        response = await async_client.patch(
            f"/api/projects/{sample_project['id']}",
            json={"name": "Villa Two", "clientNumber": "42"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["name"] == "Villa Two"
        assert data["clientNumber"] == "42"
        assert data["locationId"] == "test-city"
        assert data["updatedAt"] >= sample_project["updatedAt"]

    async def test_move_to_unknown_location(self, async_client, admin_headers, sample_project):
        response = await async_client.patch(
            f"/api/projects/{sample_project['id']}",
            json={"locationId": "atlantis"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Location does not exist"

    async def test_update_unknown(self, async_client, admin_headers):
        response = await async_client.patch(
            "/api/projects/missing", json={"name": "X"}, headers=admin_headers
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.asyncio
class TestDeleteProject:
    """Test DELETE /api/projects/{id}"""

    async def test_delete_removes_record_and_assets(
        self, async_client, admin_headers, sample_project, media_storage, image_bytes
    ):
        project_id = sample_project["id"]
        await async_client.post(
            f"/api/projects/{project_id}/images",
            files=[
                ("images", ("a.png", image_bytes, "image/png")),
                ("images", ("b.png", image_bytes, "image/png")),
            ],
            headers=admin_headers,
        )
        uploaded = set(media_storage.assets)

        response = await async_client.delete(f"/api/projects/{project_id}", headers=admin_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert set(media_storage.deleted) == uploaded
        missing = await async_client.get(f"/api/projects/{project_id}")
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    async def test_media_failure_keeps_record(
        self, async_client, admin_headers, sample_project, media_storage, image_bytes
    ):
        project_id = sample_project["id"]
        await async_client.post(
            f"/api/projects/{project_id}/images",
            files=[("images", ("a.png", image_bytes, "image/png"))],
            headers=admin_headers,
        )
        media_storage.fail_deletes = True

        response = await async_client.delete(f"/api/projects/{project_id}", headers=admin_headers)

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        still_there = await async_client.get(f"/api/projects/{project_id}")
        assert still_there.status_code == status.HTTP_200_OK

    async def test_delete_unknown(self, async_client, admin_headers):
        response = await async_client.delete("/api/projects/missing", headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
