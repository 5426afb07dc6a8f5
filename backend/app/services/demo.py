"""Seed a demo creator with a month of sample tips."""
import logging
import random
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException, status

from app.auth.security import create_session_token
from app.services.analytics import get_creator_analytics, get_creator_payments, record_payment_snapshot
from app.store.base import CREATORS, PAYMENTS, DuplicateRecordError, RecordStore

logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_PAYMENT_COUNT = 10

DEMO_CREATOR = {
    "email": "demo@suipay.com",
    "username": DEMO_USERNAME,
    "display_name": "Demo Creator",
    "bio": "This is a demo creator account showcasing SuiPay features!",
    "avatar": None,
    "wallet_address": "0x1234567890abcdef1234567890abcdef12345678",
    "sui_name_service": "@demo.suins",
    "is_verified": True,
    "twitter_handle": "@democreator",
    "website_url": "https://democreator.com",
    "min_donation_amount": 1.0,
    "custom_message": "Thanks for supporting my work!",
}


def _random_hex(rng: random.Random, length: int = 64) -> str:
    return "0x" + "".join(rng.choice("0123456789abcdef") for _ in range(length))


async def create_demo_data(
    store: RecordStore,
    now: Optional[datetime] = None,
    seed: Optional[int] = None,
) -> dict:
    """
    Create the demo creator and DEMO_PAYMENT_COUNT payments from the last 30 days.

    Every other payment is anonymous. Raises 409 if the demo creator exists.
    """
    now = now or datetime.utcnow()
    rng = random.Random(seed)

    try:
        creator = await store.add(CREATORS, DEMO_CREATOR, unique=("email", "username", "wallet_address"))
    except DuplicateRecordError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Demo data already exists"
        )

    total_amount = 0.0
    for i in range(DEMO_PAYMENT_COUNT):
        anonymous = i % 2 != 0
        payment = await store.add(PAYMENTS, {
            "tx_hash": _random_hex(rng),
            "amount": float(rng.randint(5, 55)),
            "currency": "SUI",
            "message": f"Great work! Payment {i + 1}" if i % 3 == 0 else None,
            "donor_name": None if anonymous else f"Donor{i + 1}",
            "donor_email": None,
            "is_anonymous": anonymous,
            "from_address": _random_hex(rng),
            "to_address": creator["wallet_address"],
            "block_height": rng.randint(0, 100000),
            "timestamp": now - timedelta(days=rng.randint(0, 29)),
            "creator_id": creator["id"],
        }, unique=("tx_hash",))
        await record_payment_snapshot(store, payment)
        total_amount += payment["amount"]

    logger.info(f"Created demo creator {creator['id']} with {DEMO_PAYMENT_COUNT} payments")

    return {
        "message": "Demo data created successfully",
        "creator": creator,
        "payments": DEMO_PAYMENT_COUNT,
        "token": create_session_token(creator["id"], creator["email"], creator["username"]),
        "total_amount": total_amount,
    }


async def get_demo_status(store: RecordStore) -> dict:
    """Report whether the demo creator exists and, if so, its 30-day overview."""
    creator = await store.find(CREATORS, username=DEMO_USERNAME)
    if not creator:
        return {"exists": False, "message": "No demo data found"}

    payments = await get_creator_payments(store, creator["id"])
    analytics = await get_creator_analytics(store, creator["id"])
    return {
        "exists": True,
        "creator": creator,
        "payments_count": len(payments),
        "total_amount": analytics["overview"]["total_amount"],
        "analytics": analytics["overview"],
    }
