"""Tests for the JSON record store"""

import json

import pytest

from portfolio_api.schemas import Location, Project, StoreDocument
from portfolio_api.services.record_store import RecordStore, RecordStoreError


@pytest.mark.asyncio
class TestRecordStore:
    """Test RecordStore read/write"""

    async def test_first_read_initializes_file(self, tmp_path):
        path = tmp_path / "nested" / "store.json"
        store = RecordStore(path)

        document = await store.read()

        assert document.locations == []
        assert document.projects == []
        assert json.loads(path.read_text()) == {"locations": [], "projects": []}

    async def test_write_then_read(self, tmp_path):
        store = RecordStore(tmp_path / "store.json")
        document = StoreDocument(
            locations=[Location(id="guntur", name="Guntur", state_or_country="Andhra Pradesh")],
            projects=[Project(id="p1", name="Villa", location_id="guntur")],
        )

        await store.write(document)
        loaded = await store.read()

        assert loaded.locations[0].state_or_country == "Andhra Pradesh"
        assert loaded.projects[0].location_id == "guntur"

    async def test_written_document_uses_camel_case(self, tmp_path):
        path = tmp_path / "store.json"
        store = RecordStore(path)
        await store.write(
            StoreDocument(projects=[Project(id="p1", name="Villa", location_id="guntur")])
        )

        raw = json.loads(path.read_text())
        assert raw["projects"][0]["locationId"] == "guntur"
        assert raw["projects"][0]["coverImageUrl"] == ""

    async def test_malformed_json_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")

        with pytest.raises(RecordStoreError):
            await RecordStore(path).read()

    async def test_wrong_shape_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text(json.dumps({"locations": [{"name": "missing id"}]}))

        with pytest.raises(RecordStoreError):
            await RecordStore(path).read()
