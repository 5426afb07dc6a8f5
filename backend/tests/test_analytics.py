"""Tests for the rolling-window analytics aggregator."""
from datetime import datetime, timedelta

import pytest

from app.services.analytics import (
    analytics_window,
    get_creator_analytics,
    get_payment_series,
    get_top_donors,
    record_payment_snapshot,
    record_profile_view,
)
from app.store.base import ANALYTICS, CREATORS, PAYMENTS
from conftest import auth_headers, register_creator

NOW = datetime(2024, 3, 15, 12, 0, 0)


async def add_payment(store, creator_id, amount, sender, when, anonymous=False, donor_name=None, tx=None):
    return await store.add(PAYMENTS, {
        "tx_hash": tx or f"0x{sender}-{when.isoformat()}-{amount}",
        "amount": amount,
        "currency": "SUI",
        "is_anonymous": anonymous,
        "donor_name": donor_name,
        "from_address": sender,
        "to_address": "0xcreator",
        "timestamp": when,
        "creator_id": creator_id,
    })


@pytest.fixture
async def creator(store):
    return await store.add(CREATORS, {"username": "alice", "email": "alice@example.com"})


def test_analytics_window_covers_whole_days():
    start, end = analytics_window(7, NOW)

    assert start == datetime(2024, 3, 9)
    assert end.date() == NOW.date()
    assert end > NOW


async def test_overview_totals_and_series(store, creator):
    await add_payment(store, creator["id"], 10.0, "0xa", NOW - timedelta(days=1))
    await add_payment(store, creator["id"], 20.0, "0xa", NOW - timedelta(days=1, hours=2))
    await add_payment(store, creator["id"], 30.0, "0xb", NOW - timedelta(days=3))
    # Outside the 7-day window
    await add_payment(store, creator["id"], 999.0, "0xc", NOW - timedelta(days=7))

    analytics = await get_creator_analytics(store, creator["id"], period=7, now=NOW)

    overview = analytics["overview"]
    assert overview["total_amount"] == 60.0
    assert overview["total_payments"] == 3
    assert overview["average_amount"] == 20.0
    assert overview["unique_donors"] == 2
    assert overview["period"] == 7

    chart = analytics["chart_data"]
    assert len(chart) == 7
    assert chart[0]["date"] == "2024-03-09"
    assert chart[-1]["date"] == "2024-03-15"
    assert sum(day["amount"] for day in chart) == overview["total_amount"]
    assert chart[-2] == {"date": "2024-03-14", "amount": 30.0, "payments": 2, "donors": 1}


async def test_overview_without_payments(store, creator):
    analytics = await get_creator_analytics(store, creator["id"], period=30, now=NOW)

    assert analytics["overview"]["total_amount"] == 0
    assert analytics["overview"]["average_amount"] == 0
    assert analytics["recent_payments"] == []
    assert len(analytics["chart_data"]) == 30
    assert all(day["payments"] == 0 for day in analytics["chart_data"])


async def test_recent_payments_are_newest_five(store, creator):
    for i in range(8):
        await add_payment(store, creator["id"], float(i + 1), "0xa", NOW - timedelta(hours=i))

    analytics = await get_creator_analytics(store, creator["id"], period=30, now=NOW)

    assert [p["amount"] for p in analytics["recent_payments"]] == [1.0, 2.0, 3.0, 4.0, 5.0]


async def test_unique_donors_counted_by_address(store, creator):
    for i in range(6):
        await add_payment(store, creator["id"], 1.0, f"0x{i % 3}", NOW - timedelta(days=i))

    analytics = await get_creator_analytics(store, creator["id"], period=30, now=NOW)

    assert analytics["overview"]["unique_donors"] == 3


async def test_payment_series(store, creator):
    await add_payment(store, creator["id"], 4.0, "0xa", NOW)
    await add_payment(store, creator["id"], 6.0, "0xb", NOW - timedelta(hours=1))

    series = await get_payment_series(store, creator["id"], period=3, now=NOW)

    assert [day["date"] for day in series] == ["2024-03-13", "2024-03-14", "2024-03-15"]
    assert series[0] == {"date": "2024-03-13", "count": 0, "total": 0, "average": 0, "unique_donors": 0}
    assert series[-1] == {"date": "2024-03-15", "count": 2, "total": 10.0, "average": 5.0, "unique_donors": 2}


async def test_top_donors_excludes_anonymous_and_sorts(store, creator):
    await add_payment(store, creator["id"], 5.0, "0xa", NOW - timedelta(days=2), donor_name="Old Name")
    await add_payment(store, creator["id"], 5.0, "0xa", NOW - timedelta(days=1), donor_name="Ann")
    await add_payment(store, creator["id"], 20.0, "0xb", NOW - timedelta(days=1), donor_name="Ben")
    await add_payment(store, creator["id"], 100.0, "0xc", NOW, anonymous=True)

    donors = await get_top_donors(store, creator["id"], period=30, now=NOW)

    assert [d["from_address"] for d in donors] == ["0xb", "0xa"]
    ann = donors[1]
    assert ann["payment_count"] == 2
    assert ann["total_amount"] == 10.0
    assert ann["average_amount"] == 5.0
    assert ann["donor_name"] == "Ann"
    assert ann["last_payment"] == NOW - timedelta(days=1)


async def test_top_donors_limited_to_ten(store, creator):
    for i in range(12):
        await add_payment(store, creator["id"], float(i + 1), f"0x{i}", NOW)

    donors = await get_top_donors(store, creator["id"], period=30, now=NOW)

    assert len(donors) == 10
    assert donors[0]["total_amount"] == 12.0


async def test_snapshot_keyed_by_payment_day(store, creator):
    earlier = await add_payment(store, creator["id"], 2.0, "0xa", NOW - timedelta(days=2))
    today = await add_payment(store, creator["id"], 3.0, "0xa", NOW)

    await record_payment_snapshot(store, earlier)
    await record_payment_snapshot(store, today)
    await record_payment_snapshot(store, today)

    snapshots = {s["date"]: s for s in await store.filter(ANALYTICS, creator_id=creator["id"])}
    assert set(snapshots) == {"2024-03-13", "2024-03-15"}
    assert snapshots["2024-03-15"]["total_payments"] == 1
    assert snapshots["2024-03-15"]["total_amount"] == 3.0


async def test_profile_views_and_link_clicks(store, creator):
    await record_profile_view(store, creator["id"], now=NOW)
    snapshot = await record_profile_view(store, creator["id"], link_click=True, now=NOW)

    assert snapshot["profile_views"] == 2
    assert snapshot["link_clicks"] == 1
    assert snapshot["total_payments"] == 0

    analytics = await get_creator_analytics(store, creator["id"], period=1, now=NOW)
    assert [s["profile_views"] for s in analytics["daily_data"]] == [2]


async def test_analytics_endpoint_types(client, store):
    creator, token = register_creator(client)
    now = datetime.utcnow()
    await add_payment(store, creator["id"], 4.0, "0xa", now, donor_name="Ann")
    await add_payment(store, creator["id"], 6.0, "0xb", now, anonymous=True)

    overview = client.get("/api/creator/analytics", headers=auth_headers(token))
    series = client.get("/api/creator/analytics?type=payments&period=7", headers=auth_headers(token))
    donors = client.get("/api/creator/analytics?type=donors", headers=auth_headers(token))

    assert overview.status_code == 200
    assert overview.json()["overview"]["totalAmount"] == 10.0
    assert overview.json()["overview"]["uniqueDonors"] == 2
    assert len(overview.json()["chartData"]) == 30
    assert len(overview.json()["recentPayments"]) == 2

    assert series.status_code == 200
    assert len(series.json()["payments"]) == 7
    assert series.json()["payments"][-1]["uniqueDonors"] == 2

    assert donors.status_code == 200
    assert [d["fromAddress"] for d in donors.json()["topDonors"]] == ["0xa"]


def test_analytics_endpoint_rejects_unknown_type(client):
    _, token = register_creator(client)

    response = client.get("/api/creator/analytics?type=bogus", headers=auth_headers(token))

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid analytics type"}
