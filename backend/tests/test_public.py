"""Tests for public creator pages and the creator's own profile."""
from datetime import datetime, timedelta

from app.store.base import ANALYTICS, PAYMENTS
from conftest import CREATOR_WALLET, DONOR_WALLET, auth_headers, register_creator


async def add_payment(store, creator_id, amount, when, anonymous=False, donor_name="Fan", donor_email="fan@example.com"):
    await store.add(PAYMENTS, {
        "tx_hash": f"0x{when.timestamp()}",
        "amount": amount,
        "currency": "SUI",
        "is_anonymous": anonymous,
        "donor_name": None if anonymous else donor_name,
        "donor_email": None if anonymous else donor_email,
        "from_address": DONOR_WALLET,
        "to_address": CREATOR_WALLET,
        "timestamp": when,
        "creator_id": creator_id,
    })


async def test_public_creator_page(client, store):
    creator, _ = register_creator(client, "alice", bio="Artist")
    now = datetime.utcnow()
    for i in range(7):
        await add_payment(store, creator["id"], float(i + 1), now - timedelta(minutes=i), anonymous=(i == 0))

    response = client.get("/api/public/creator/ALICE")

    assert response.status_code == 200
    data = response.json()
    assert data["creator"]["username"] == "alice"
    assert data["creator"]["bio"] == "Artist"
    assert "email" not in data["creator"]
    # Anonymous tips are left out of the public feed but count towards the totals
    assert [p["amount"] for p in data["recentPayments"]] == [2.0, 3.0, 4.0, 5.0, 6.0]
    for payment in data["recentPayments"]:
        assert set(payment) == {"id", "amount", "message", "donorName", "timestamp"}
    assert data["stats"] == {"totalAmount": 28.0, "totalPayments": 7}


async def test_public_creator_page_counts_views(client, store):
    creator, _ = register_creator(client, "alice")

    client.get("/api/public/creator/alice")
    client.get("/api/public/creator/alice")

    snapshots = await store.filter(ANALYTICS, creator_id=creator["id"])
    assert snapshots[0]["profile_views"] == 2
    assert snapshots[0]["link_clicks"] == 0


def test_public_creator_not_found(client):
    response = client.get("/api/public/creator/nobody")

    assert response.status_code == 404
    assert response.json() == {"error": "Creator not found"}


async def test_profile_includes_counts(client, store):
    creator, token = register_creator(client, "alice")
    await add_payment(store, creator["id"], 1.0, datetime.utcnow())
    client.post("/api/creator/links", json={"title": "Tips"}, headers=auth_headers(token))

    response = client.get("/api/creator/profile", headers=auth_headers(token))

    assert response.status_code == 200
    profile = response.json()["creator"]
    assert profile["email"] == "alice@example.com"
    assert profile["counts"] == {"payments": 1, "links": 1}


def test_update_profile_is_partial(client):
    _, token = register_creator(client, "alice", bio="Old bio")

    response = client.put(
        "/api/creator/profile",
        json={"bio": "New bio", "twitterHandle": "@alice", "minDonationAmount": 2.5},
        headers=auth_headers(token),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Profile updated successfully"
    assert data["creator"]["bio"] == "New bio"
    assert data["creator"]["twitterHandle"] == "@alice"
    assert data["creator"]["minDonationAmount"] == 2.5
    assert data["creator"]["displayName"] == "Alice"


def test_update_profile_rejects_invalid_amount(client):
    _, token = register_creator(client, "alice")

    response = client.put("/api/creator/profile", json={"minDonationAmount": -1}, headers=auth_headers(token))

    assert response.status_code == 400


def test_health_and_security_headers(client):
    response = client.get("/health")

    assert response.json() == {"status": "ok"}
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"


def test_unknown_route_uses_error_body(client):
    response = client.get("/api/nope")

    assert response.status_code == 404
    assert "error" in response.json()
