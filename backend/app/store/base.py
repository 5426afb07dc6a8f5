"""Record store contract shared by every storage backend.

Records are plain dicts with snake_case keys. Each backend stores the four
collections below and exposes the same async operations, so the services
never know which medium they are talking to.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional
from uuid import uuid4

CREATORS = "creators"
PAYMENTS = "payments"
LINKS = "links"
ANALYTICS = "analytics"

COLLECTIONS = (CREATORS, PAYMENTS, LINKS, ANALYTICS)

# Collections whose records carry created_at/updated_at
TIMESTAMPED_COLLECTIONS = frozenset({CREATORS, LINKS})

# Fields holding datetimes (serialized as ISO strings by the JSON backend)
DATETIME_FIELDS = frozenset({"created_at", "updated_at", "timestamp"})

Record = Dict[str, Any]
Predicate = Callable[[Record], bool]


class RecordStoreError(Exception):
    """Base exception for record store failures."""


class UnknownCollectionError(RecordStoreError):
    """Raised when an operation names a collection the store does not hold."""

    def __init__(self, collection: str):
        super().__init__(f"Unknown collection: {collection}")
        self.collection = collection


class DuplicateRecordError(RecordStoreError):
    """Raised when an insert would violate a unique field."""

    def __init__(self, collection: str, field: str, value: Any):
        super().__init__(f"Duplicate {field} in {collection}: {value!r}")
        self.collection = collection
        self.field = field
        self.value = value


def matches(record: Record, criteria: Dict[str, Any], predicate: Optional[Predicate] = None) -> bool:
    """Return True if the record equals every criterion and passes the predicate."""
    for key, value in criteria.items():
        if record.get(key) != value:
            return False
    return predicate is None or predicate(record)


class RecordStore(ABC):
    """Key-indexed CRUD over the creators, payments, links and analytics collections."""

    def _check_collection(self, collection: str) -> None:
        if collection not in COLLECTIONS:
            raise UnknownCollectionError(collection)

    def _prepare(self, collection: str, item: Record) -> Record:
        """Copy an item and fill in the generated id and timestamps."""
        self._check_collection(collection)
        record = dict(item)
        record.setdefault("id", str(uuid4()))
        if collection in TIMESTAMPED_COLLECTIONS:
            now = datetime.utcnow()
            record.setdefault("created_at", now)
            record.setdefault("updated_at", now)
        return record

    async def initialize(self) -> None:
        """Prepare the backing medium (create tables, directories, ...)."""

    async def close(self) -> None:
        """Release resources held by the store."""

    @abstractmethod
    async def add(self, collection: str, item: Record, unique: Iterable[str] = ()) -> Record:
        """
        Insert an item with a generated id and return the stored record.

        When ``unique`` names fields, the check and the insert happen
        atomically: an existing record with the same value for any of those
        fields raises DuplicateRecordError and nothing is written.
        """

    @abstractmethod
    async def find(self, collection: str, **criteria: Any) -> Optional[Record]:
        """Return the first record matching all criteria, or None."""

    @abstractmethod
    async def filter(
        self,
        collection: str,
        predicate: Optional[Predicate] = None,
        **criteria: Any,
    ) -> List[Record]:
        """Return every record matching the criteria and predicate (unordered)."""

    @abstractmethod
    async def update(self, collection: str, record_id: str, fields: Record) -> Optional[Record]:
        """Merge fields into a record; returns None if the id is unknown."""

    @abstractmethod
    async def increment(self, collection: str, record_id: str, **deltas: float) -> Optional[Record]:
        """Atomically add numeric deltas to fields; returns None if the id is unknown."""

    @abstractmethod
    async def delete(self, collection: str, record_id: str) -> bool:
        """Remove a record by id; returns whether anything was removed."""

    @abstractmethod
    async def upsert(self, collection: str, match: Record, defaults: Optional[Record] = None) -> Record:
        """Return the record matching ``match``, creating it from match + defaults if absent."""
