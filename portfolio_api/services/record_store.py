"""JSON file record store for locations and projects"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from portfolio_api.schemas.project import StoreDocument

logger = logging.getLogger(__name__)


class RecordStoreError(Exception):
    """Stored document could not be read or parsed"""
    pass


class RecordStore:
    """
    Reads and writes a single JSON document holding all locations and projects.

    Writes overwrite the whole document. There is no locking, so two
    concurrent writers can lose each other's changes; the last write wins.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def read(self) -> StoreDocument:
        """Read the document, creating an empty one on first use"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_sync)

    async def write(self, document: StoreDocument) -> None:
        """Overwrite the document"""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write_sync, document)

    def _ensure_file(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            logger.info(f"Initializing empty record store at {self.path}")
            self._write_sync(StoreDocument())

    def _read_sync(self) -> StoreDocument:
        self._ensure_file()
        raw = self.path.read_text(encoding="utf-8")
        try:
            return StoreDocument.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Record store {self.path} is malformed: {e}")
            raise RecordStoreError(f"Failed to parse record store: {e}")

    def _write_sync(self, document: StoreDocument) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = document.model_dump(mode="json", by_alias=True)
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
