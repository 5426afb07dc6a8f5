"""Rolling-window analytics over a creator's payments, plus daily snapshots.

The window for a period of N days covers exactly the N calendar days that
end today (UTC): from midnight N-1 days ago to the end of today. The daily
series therefore always has N entries and its amounts add up to the
overview total.
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Tuple

from app.store.base import ANALYTICS, PAYMENTS, Record, RecordStore

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_DAYS = 30
RECENT_PAYMENTS_LIMIT = 5
TOP_DONORS_LIMIT = 10

EMPTY_SNAPSHOT = {
    "total_payments": 0,
    "total_amount": 0.0,
    "unique_donors": 0,
    "average_amount": 0.0,
    "profile_views": 0,
    "link_clicks": 0,
}


def analytics_window(period: int, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """Return (start, end) covering the last ``period`` calendar days including today."""
    today = (now or datetime.utcnow()).date()
    start = datetime.combine(today - timedelta(days=period - 1), time.min)
    end = datetime.combine(today, time.max)
    return start, end


async def get_creator_payments(
    store: RecordStore,
    creator_id: str,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
) -> List[Record]:
    """Return a creator's payments within [start_date, end_date], newest first."""

    def in_range(payment: Record) -> bool:
        ts = payment["timestamp"]
        if start_date is not None and ts < start_date:
            return False
        if end_date is not None and ts > end_date:
            return False
        return True

    payments = await store.filter(PAYMENTS, predicate=in_range, creator_id=creator_id)
    payments.sort(key=lambda p: p["timestamp"], reverse=True)
    return payments


def build_chart_data(payments: List[Record], period: int, today: date) -> List[dict]:
    """Bucket payments per calendar day, oldest first, zero-filling empty days."""
    buckets: Dict[str, List[Record]] = {}
    for payment in payments:
        buckets.setdefault(payment["timestamp"].date().isoformat(), []).append(payment)

    chart_data = []
    for days_ago in range(period - 1, -1, -1):
        day = (today - timedelta(days=days_ago)).isoformat()
        day_payments = buckets.get(day, [])
        chart_data.append({
            "date": day,
            "amount": sum(p["amount"] for p in day_payments),
            "payments": len(day_payments),
            "donors": len({p["from_address"] for p in day_payments}),
        })
    return chart_data


async def get_creator_analytics(
    store: RecordStore,
    creator_id: str,
    period: int = DEFAULT_PERIOD_DAYS,
    now: Optional[datetime] = None,
) -> dict:
    """
    Summarize a creator's payments over the last ``period`` days.

    Returns:
        overview: totals, average (0 with no payments), distinct sender count
        recent_payments: the newest five payments of the window
        chart_data: one entry per day, oldest first
        daily_data: stored snapshots of the window, oldest first
    """
    now = now or datetime.utcnow()
    start, end = analytics_window(period, now)
    payments = await get_creator_payments(store, creator_id, start, end)

    total_amount = sum(p["amount"] for p in payments)
    total_payments = len(payments)

    first_day, last_day = start.date().isoformat(), end.date().isoformat()
    snapshots = await store.filter(
        ANALYTICS,
        predicate=lambda s: first_day <= s["date"] <= last_day,
        creator_id=creator_id,
    )
    snapshots.sort(key=lambda s: s["date"])

    return {
        "overview": {
            "total_amount": total_amount,
            "average_amount": total_amount / total_payments if total_payments else 0,
            "total_payments": total_payments,
            "unique_donors": len({p["from_address"] for p in payments}),
            "period": period,
        },
        "recent_payments": payments[:RECENT_PAYMENTS_LIMIT],
        "chart_data": build_chart_data(payments, period, now.date()),
        "daily_data": snapshots,
    }


async def get_payment_series(
    store: RecordStore,
    creator_id: str,
    period: int = DEFAULT_PERIOD_DAYS,
    now: Optional[datetime] = None,
) -> List[dict]:
    """Per-day count, total, average and distinct donors for the window."""
    analytics = await get_creator_analytics(store, creator_id, period, now)
    return [
        {
            "date": day["date"],
            "count": day["payments"],
            "total": day["amount"],
            "average": day["amount"] / day["payments"] if day["payments"] else 0,
            "unique_donors": day["donors"],
        }
        for day in analytics["chart_data"]
    ]


async def get_top_donors(
    store: RecordStore,
    creator_id: str,
    period: int = DEFAULT_PERIOD_DAYS,
    now: Optional[datetime] = None,
    limit: int = TOP_DONORS_LIMIT,
) -> List[dict]:
    """Largest non-anonymous donors of the window, grouped by sender address."""
    start, end = analytics_window(period, now)
    payments = await get_creator_payments(store, creator_id, start, end)

    donors: Dict[str, dict] = {}
    for payment in payments:
        if payment["is_anonymous"]:
            continue
        donor = donors.get(payment["from_address"])
        if donor is None:
            donors[payment["from_address"]] = {
                "from_address": payment["from_address"],
                "donor_name": payment.get("donor_name"),
                "payment_count": 1,
                "total_amount": payment["amount"],
                "last_payment": payment["timestamp"],
            }
            continue
        donor["payment_count"] += 1
        donor["total_amount"] += payment["amount"]
        if payment["timestamp"] > donor["last_payment"]:
            donor["last_payment"] = payment["timestamp"]
            donor["donor_name"] = payment.get("donor_name")

    ranked = sorted(donors.values(), key=lambda d: d["total_amount"], reverse=True)[:limit]
    for donor in ranked:
        donor["average_amount"] = donor["total_amount"] / donor["payment_count"]
    return ranked


async def record_payment_snapshot(store: RecordStore, payment: Record) -> Optional[Record]:
    """
    Refresh the (creator, day) snapshot for a newly stored payment.

    Totals and the unique-donor count are recomputed from the day's payments
    rather than incremented, so repeated calls converge on the same values.
    Failures are logged and swallowed: the payment itself is already stored.
    """
    day = payment["timestamp"].date()
    creator_id = payment["creator_id"]
    try:
        snapshot = await store.upsert(
            ANALYTICS,
            {"creator_id": creator_id, "date": day.isoformat()},
            defaults=EMPTY_SNAPSHOT,
        )
        day_payments = await get_creator_payments(
            store,
            creator_id,
            datetime.combine(day, time.min),
            datetime.combine(day, time.max),
        )
        total_amount = sum(p["amount"] for p in day_payments)
        total_payments = len(day_payments)
        return await store.update(ANALYTICS, snapshot["id"], {
            "total_payments": total_payments,
            "total_amount": total_amount,
            "unique_donors": len({p["from_address"] for p in day_payments}),
            "average_amount": total_amount / total_payments if total_payments else 0.0,
        })
    except Exception as e:
        logger.warning(f"Failed to update analytics snapshot for creator {creator_id}: {e}")
        return None


async def record_profile_view(
    store: RecordStore,
    creator_id: str,
    link_click: bool = False,
    now: Optional[datetime] = None,
) -> Optional[Record]:
    """Count a public profile view (and optionally a link click) on today's snapshot."""
    today = (now or datetime.utcnow()).date().isoformat()
    deltas = {"profile_views": 1}
    if link_click:
        deltas["link_clicks"] = 1
    try:
        snapshot = await store.upsert(
            ANALYTICS,
            {"creator_id": creator_id, "date": today},
            defaults=EMPTY_SNAPSHOT,
        )
        return await store.increment(ANALYTICS, snapshot["id"], **deltas)
    except Exception as e:
        logger.warning(f"Failed to record profile view for creator {creator_id}: {e}")
        return None
