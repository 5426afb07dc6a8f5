"""Relational record store backed by async SQLAlchemy."""
import logging
from datetime import datetime
from typing import Any, Iterable, List, Optional

from sqlalchemy import select, update as sa_update, delete as sa_delete, inspect as sa_inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.database import create_tables
from app.models import Creator, Payment, ShareableLink, AnalyticsSnapshot
from app.store.base import (
    ANALYTICS,
    CREATORS,
    LINKS,
    PAYMENTS,
    TIMESTAMPED_COLLECTIONS,
    DuplicateRecordError,
    Predicate,
    Record,
    RecordStore,
    matches,
)

logger = logging.getLogger(__name__)

MODELS = {
    CREATORS: Creator,
    PAYMENTS: Payment,
    LINKS: ShareableLink,
    ANALYTICS: AnalyticsSnapshot,
}


def _to_dict(obj) -> Record:
    """Convert an ORM instance to a plain record dict."""
    return {attr.key: getattr(obj, attr.key) for attr in sa_inspect(obj).mapper.column_attrs}


class SQLRecordStore(RecordStore):
    """
    Stores each collection in its own table.

    Unique fields are backed by database constraints, so concurrent inserts
    of the same key cannot both succeed. One session is opened per operation.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        engine: Optional[AsyncEngine] = None,
        auto_create: bool = False,
    ):
        self._session_factory = session_factory
        self._engine = engine
        self._auto_create = auto_create

    def _model(self, collection: str):
        self._check_collection(collection)
        return MODELS[collection]

    async def initialize(self) -> None:
        if self._auto_create and self._engine is not None:
            await create_tables(self._engine)
            logger.info("Database tables created")

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()

    async def _find_conflict(self, session: AsyncSession, model, record: Record, unique: Iterable[str]) -> Optional[str]:
        for field in unique:
            result = await session.execute(
                select(model.id).where(getattr(model, field) == record.get(field)).limit(1)
            )
            if result.scalar_one_or_none() is not None:
                return field
        return None

    async def add(self, collection: str, item: Record, unique: Iterable[str] = ()) -> Record:
        model = self._model(collection)
        record = self._prepare(collection, item)
        unique = tuple(unique)

        async with self._session_factory() as session:
            conflict = await self._find_conflict(session, model, record, unique)
            if conflict:
                raise DuplicateRecordError(collection, conflict, record.get(conflict))

            obj = model(**record)
            session.add(obj)
            try:
                await session.commit()
            except IntegrityError:
                await session.rollback()
                # Lost a race with a concurrent insert; report which key collided
                conflict = await self._find_conflict(session, model, record, unique)
                if conflict:
                    raise DuplicateRecordError(collection, conflict, record.get(conflict))
                raise
            await session.refresh(obj)
            return _to_dict(obj)

    async def find(self, collection: str, **criteria: Any) -> Optional[Record]:
        model = self._model(collection)
        async with self._session_factory() as session:
            result = await session.execute(select(model).filter_by(**criteria).limit(1))
            obj = result.scalar_one_or_none()
            return _to_dict(obj) if obj is not None else None

    async def filter(
        self,
        collection: str,
        predicate: Optional[Predicate] = None,
        **criteria: Any,
    ) -> List[Record]:
        model = self._model(collection)
        async with self._session_factory() as session:
            result = await session.execute(select(model).filter_by(**criteria))
            records = [_to_dict(obj) for obj in result.scalars().all()]
        return [r for r in records if matches(r, {}, predicate)]

    async def update(self, collection: str, record_id: str, fields: Record) -> Optional[Record]:
        model = self._model(collection)
        async with self._session_factory() as session:
            result = await session.execute(select(model).where(model.id == record_id))
            obj = result.scalar_one_or_none()
            if obj is None:
                return None
            for key, value in fields.items():
                if key != "id":
                    setattr(obj, key, value)
            if collection in TIMESTAMPED_COLLECTIONS:
                obj.updated_at = datetime.utcnow()
            await session.commit()
            await session.refresh(obj)
            return _to_dict(obj)

    async def increment(self, collection: str, record_id: str, **deltas: float) -> Optional[Record]:
        model = self._model(collection)
        async with self._session_factory() as session:
            values = {field: getattr(model, field) + delta for field, delta in deltas.items()}
            result = await session.execute(
                sa_update(model).where(model.id == record_id).values(**values)
            )
            await session.commit()
            if result.rowcount == 0:
                return None
            fetched = await session.execute(select(model).where(model.id == record_id))
            return _to_dict(fetched.scalar_one())

    async def delete(self, collection: str, record_id: str) -> bool:
        model = self._model(collection)
        async with self._session_factory() as session:
            result = await session.execute(sa_delete(model).where(model.id == record_id))
            await session.commit()
            return result.rowcount > 0

    async def upsert(self, collection: str, match: Record, defaults: Optional[Record] = None) -> Record:
        existing = await self.find(collection, **match)
        if existing is not None:
            return existing
        try:
            return await self.add(collection, {**(defaults or {}), **match})
        except IntegrityError:
            # Created concurrently under the same composite key
            existing = await self.find(collection, **match)
            if existing is None:
                raise
            return existing
