"""Payment ingestion router."""
from fastapi import APIRouter, Depends, Request, status

from app.config import settings
from app.rate_limit import limiter
from app.schemas.payments import PaymentRecordRequest
from app.schemas.public import PaymentRecordResponse
from app.services.payments import record_payment
from app.services.sui import SuiClient, get_sui_client
from app.store.base import RecordStore
from app.store.factory import get_store

router = APIRouter()


@router.post("/record", response_model=PaymentRecordResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(lambda: settings.RATE_LIMIT_PAYMENTS)
async def record(
    request: Request,
    data: PaymentRecordRequest,
    store: RecordStore = Depends(get_store),
    sui: SuiClient = Depends(get_sui_client),
):
    """
    Record a tip after verifying its transaction on the Sui network.

    A transaction digest is recorded at most once; repeats get 409.
    """
    payment, snapshot = await record_payment(store, sui, data)
    return {
        "message": "Payment recorded successfully",
        "payment": payment,
        "analytics": snapshot,
    }
