"""Payment history queries and idempotent ingestion of on-chain tips."""
import logging
import math
from datetime import datetime, timezone
from typing import Optional

from fastapi import HTTPException, status

from app.schemas.payments import PaymentRecordRequest
from app.services.analytics import get_creator_payments, record_payment_snapshot
from app.services.sui import (
    SuiClient,
    SuiRPCError,
    SuiTransactionTimeout,
    find_incoming_sui,
    mist_to_sui,
)
from app.store.base import CREATORS, PAYMENTS, DuplicateRecordError, Record, RecordStore

logger = logging.getLogger(__name__)


async def paginate_payments(
    store: RecordStore,
    creator_id: str,
    page: int = 1,
    limit: int = 10,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> dict:
    """
    Offset pagination over a creator's payment history.

    The summary covers the whole filtered set, not just the returned page.
    """
    payments = await get_creator_payments(store, creator_id, start_date, end_date)
    total = len(payments)
    offset = (page - 1) * limit
    total_amount = sum(p["amount"] for p in payments)

    return {
        "payments": payments[offset:offset + limit],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": math.ceil(total / limit) if limit else 0,
        },
        "summary": {
            "total_amount": total_amount,
            "average_amount": total_amount / total if total else 0,
            "total_payments": total,
        },
    }


async def record_payment(
    store: RecordStore,
    sui: SuiClient,
    data: PaymentRecordRequest,
) -> tuple[Record, Optional[Record]]:
    """
    Verify a tip on chain and store it exactly once.

    - Rejects a transaction digest that is already recorded (409)
    - Verifies the creator exists (404)
    - Finds the SUI credited to the creator's wallet in the transaction
    - Drops donor name/email for anonymous tips
    - Updates the day's analytics snapshot (best effort)

    Returns the stored payment and the updated snapshot (None if the
    snapshot update failed).
    """
    existing = await store.find(PAYMENTS, tx_hash=data.tx_hash)
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Payment already recorded"
        )

    creator = await store.find(CREATORS, id=data.creator_id)
    if not creator:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Creator not found"
        )

    try:
        if data.wait_for_confirmation:
            tx = await sui.wait_for_transaction(data.tx_hash)
        else:
            tx = await sui.get_transaction_details(data.tx_hash)
    except SuiTransactionTimeout:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Transaction confirmation timed out"
        )
    except SuiRPCError as e:
        logger.error(f"Failed to fetch transaction {data.tx_hash}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch transaction from blockchain"
        )

    if not tx:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Transaction not found on blockchain"
        )

    amount_mist = find_incoming_sui(tx, creator["wallet_address"])
    if amount_mist is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid payment found in transaction"
        )

    sender = ((tx.get("transaction") or {}).get("data") or {}).get("sender") or ""
    timestamp_ms = tx.get("timestampMs")
    checkpoint = tx.get("checkpoint")

    payment_data = {
        "tx_hash": data.tx_hash,
        "amount": mist_to_sui(amount_mist),
        "currency": "SUI",
        "message": data.message or None,
        "donor_name": None if data.is_anonymous else (data.donor_name or None),
        "donor_email": None if data.is_anonymous else (data.donor_email or None),
        "is_anonymous": data.is_anonymous,
        "from_address": sender,
        "to_address": creator["wallet_address"],
        "block_height": int(checkpoint) if checkpoint is not None else None,
        "timestamp": (
            datetime.fromtimestamp(int(timestamp_ms) / 1000, tz=timezone.utc).replace(tzinfo=None)
            if timestamp_ms else datetime.utcnow()
        ),
        "creator_id": creator["id"],
    }

    try:
        payment = await store.add(PAYMENTS, payment_data, unique=("tx_hash",))
    except DuplicateRecordError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Payment already recorded"
        )

    logger.info(
        "Recorded payment %s: %.9f SUI to creator %s",
        payment["tx_hash"], payment["amount"], payment["creator_id"],
    )

    snapshot = await record_payment_snapshot(store, payment)
    return payment, snapshot
