"""Demo data router, mounted only when ENABLE_DEMO_DATA is set."""
from fastapi import APIRouter, Depends

from app.schemas.demo import DemoInitResponse, DemoStatusResponse
from app.services.demo import create_demo_data, get_demo_status
from app.store.base import RecordStore
from app.store.factory import get_store

router = APIRouter()


@router.post("/init", response_model=DemoInitResponse)
async def init_demo(store: RecordStore = Depends(get_store)):
    """Create the demo creator with sample payments and return a session for it."""
    return await create_demo_data(store)


@router.get("/init", response_model=DemoStatusResponse)
async def demo_status(store: RecordStore = Depends(get_store)):
    return await get_demo_status(store)
