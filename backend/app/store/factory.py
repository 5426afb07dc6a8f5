"""Select and build the record store configured for this process."""
import logging

from fastapi import Request

from app.config import Settings
from app.database import create_engine, create_session_factory
from app.store.base import RecordStore
from app.store.json_file import JSONFileRecordStore
from app.store.memory import MemoryRecordStore
from app.store.sql import SQLRecordStore

logger = logging.getLogger(__name__)


def create_store(settings: Settings) -> RecordStore:
    """Build the record store named by STORAGE_BACKEND."""
    backend = settings.STORAGE_BACKEND
    logger.info(f"Using {backend} record store")

    if backend == "memory":
        return MemoryRecordStore()
    if backend == "json":
        return JSONFileRecordStore(settings.DATA_DIR)

    engine = create_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    return SQLRecordStore(
        create_session_factory(engine),
        engine=engine,
        auto_create=settings.ENVIRONMENT == "development",
    )


def get_store(request: Request) -> RecordStore:
    """FastAPI dependency returning the record store created at startup."""
    return request.app.state.store
