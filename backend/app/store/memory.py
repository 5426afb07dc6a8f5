"""In-process record store."""
import threading
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from app.store.base import (
    COLLECTIONS,
    TIMESTAMPED_COLLECTIONS,
    DuplicateRecordError,
    Predicate,
    Record,
    RecordStore,
    matches,
)


class MemoryRecordStore(RecordStore):
    """
    Keeps every collection in a dict of lists owned by the instance.

    Each operation runs under one re-entrant lock so unique checks and the
    write that follows them cannot interleave. Subclasses change the medium
    by overriding ``_load`` and ``_save``.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._data: Dict[str, List[Record]] = {name: [] for name in COLLECTIONS}

    def _load(self, collection: str) -> List[Record]:
        return self._data[collection]

    def _save(self, collection: str, items: List[Record]) -> None:
        self._data[collection] = items

    async def add(self, collection: str, item: Record, unique: Iterable[str] = ()) -> Record:
        record = self._prepare(collection, item)
        with self._lock:
            items = self._load(collection)
            for field in unique:
                value = record.get(field)
                if any(existing.get(field) == value for existing in items):
                    raise DuplicateRecordError(collection, field, value)
            items.append(record)
            self._save(collection, items)
        return dict(record)

    async def find(self, collection: str, **criteria: Any) -> Optional[Record]:
        self._check_collection(collection)
        with self._lock:
            for record in self._load(collection):
                if matches(record, criteria):
                    return dict(record)
        return None

    async def filter(
        self,
        collection: str,
        predicate: Optional[Predicate] = None,
        **criteria: Any,
    ) -> List[Record]:
        self._check_collection(collection)
        with self._lock:
            return [dict(r) for r in self._load(collection) if matches(r, criteria, predicate)]

    async def update(self, collection: str, record_id: str, fields: Record) -> Optional[Record]:
        self._check_collection(collection)
        with self._lock:
            items = self._load(collection)
            for index, record in enumerate(items):
                if record.get("id") == record_id:
                    merged = {**record, **fields, "id": record_id}
                    if collection in TIMESTAMPED_COLLECTIONS:
                        merged["updated_at"] = datetime.utcnow()
                    items[index] = merged
                    self._save(collection, items)
                    return dict(merged)
        return None

    async def increment(self, collection: str, record_id: str, **deltas: float) -> Optional[Record]:
        self._check_collection(collection)
        with self._lock:
            items = self._load(collection)
            for index, record in enumerate(items):
                if record.get("id") == record_id:
                    merged = dict(record)
                    for field, delta in deltas.items():
                        merged[field] = (merged.get(field) or 0) + delta
                    items[index] = merged
                    self._save(collection, items)
                    return dict(merged)
        return None

    async def delete(self, collection: str, record_id: str) -> bool:
        self._check_collection(collection)
        with self._lock:
            items = self._load(collection)
            remaining = [r for r in items if r.get("id") != record_id]
            if len(remaining) == len(items):
                return False
            self._save(collection, remaining)
            return True

    async def upsert(self, collection: str, match: Record, defaults: Optional[Record] = None) -> Record:
        self._check_collection(collection)
        with self._lock:
            existing = await self.find(collection, **match)
            if existing is not None:
                return existing
            return await self.add(collection, {**(defaults or {}), **match})
