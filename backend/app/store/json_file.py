"""Flat-file record store: one JSON array file per collection."""
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, List

from app.store.base import COLLECTIONS, DATETIME_FIELDS, Record
from app.store.memory import MemoryRecordStore

logger = logging.getLogger(__name__)


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _decode(record: Record) -> Record:
    for field in DATETIME_FIELDS:
        value = record.get(field)
        if isinstance(value, str):
            record[field] = datetime.fromisoformat(value)
    return record


class JSONFileRecordStore(MemoryRecordStore):
    """
    Persists each collection to ``<data_dir>/<collection>.json``.

    The files are the source of truth and are re-read on every operation.
    I/O failures are logged and degrade to an empty collection (reads) or a
    lost write; they never raise to the caller.
    """

    def __init__(self, data_dir: str | Path):
        super().__init__()
        self.data_dir = Path(data_dir)
        self.file_paths = {name: self.data_dir / f"{name}.json" for name in COLLECTIONS}

    async def initialize(self) -> None:
        for collection in COLLECTIONS:
            if not self.file_paths[collection].exists():
                self._save(collection, [])
        logger.info("JSON record store ready at %s", self.data_dir)

    def _load(self, collection: str) -> List[Record]:
        path = self.file_paths[collection]
        try:
            if not path.exists():
                return []
            with path.open("r", encoding="utf-8") as f:
                items = json.load(f)
            return [_decode(item) for item in items]
        except (OSError, ValueError) as e:
            logger.error("Error reading from file %s: %s", path, e)
            return []

    def _save(self, collection: str, items: List[Record]) -> None:
        path = self.file_paths[collection]
        tmp_path = path.with_suffix(".json.tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, default=_encode)
            os.replace(tmp_path, path)
        except (OSError, TypeError) as e:
            logger.error("Error writing to file %s: %s", path, e)
