"""Contract tests run against every record store backend."""
import asyncio
from datetime import datetime

import pytest
from sqlalchemy import BigInteger

from app.models.payment import Payment
from app.store.base import ANALYTICS, CREATORS, LINKS, PAYMENTS, DuplicateRecordError, UnknownCollectionError
from app.store.json_file import JSONFileRecordStore


def creator_data(username="alice", **overrides):
    data = {
        "email": f"{username}@example.com",
        "username": username,
        "display_name": username.title(),
        "wallet_address": f"0x{username:0>64}"[:66],
        "is_verified": False,
        "min_donation_amount": 1.0,
    }
    data.update(overrides)
    return data


async def test_add_generates_id_and_timestamps(any_store):
    creator = await any_store.add(CREATORS, creator_data())

    assert creator["id"]
    assert isinstance(creator["created_at"], datetime)
    assert isinstance(creator["updated_at"], datetime)
    assert creator["username"] == "alice"


async def test_find_returns_first_match_or_none(any_store):
    await any_store.add(CREATORS, creator_data("alice"))
    await any_store.add(CREATORS, creator_data("bob"))

    found = await any_store.find(CREATORS, username="bob")
    assert found["email"] == "bob@example.com"
    assert await any_store.find(CREATORS, username="carol") is None


async def test_filter_with_criteria_and_predicate(any_store):
    creator = await any_store.add(CREATORS, creator_data())
    for i, amount in enumerate([1.0, 5.0, 10.0]):
        await any_store.add(PAYMENTS, {
            "tx_hash": f"tx-{i}",
            "amount": amount,
            "currency": "SUI",
            "is_anonymous": False,
            "from_address": "0xdonor",
            "to_address": creator["wallet_address"],
            "timestamp": datetime(2024, 1, 1 + i),
            "creator_id": creator["id"],
        })

    large = await any_store.filter(PAYMENTS, predicate=lambda p: p["amount"] >= 5, creator_id=creator["id"])
    assert sorted(p["amount"] for p in large) == [5.0, 10.0]
    assert await any_store.filter(PAYMENTS, creator_id="someone-else") == []


async def test_add_with_unique_rejects_duplicates(any_store):
    await any_store.add(CREATORS, creator_data("alice"), unique=("email", "username"))

    with pytest.raises(DuplicateRecordError) as exc_info:
        await any_store.add(
            CREATORS,
            creator_data("alice2", email="alice@example.com"),
            unique=("email", "username"),
        )

    assert exc_info.value.field == "email"
    assert len(await any_store.filter(CREATORS)) == 1


async def test_concurrent_unique_inserts_store_one_record(any_store):
    results = await asyncio.gather(
        any_store.add(CREATORS, creator_data("alice"), unique=("email",)),
        any_store.add(CREATORS, creator_data("alice2", email="alice@example.com"), unique=("email",)),
        return_exceptions=True,
    )

    errors = [r for r in results if isinstance(r, DuplicateRecordError)]
    assert len(errors) == 1
    assert len(await any_store.filter(CREATORS, email="alice@example.com")) == 1


async def test_update_merges_and_bumps_updated_at(any_store):
    creator = await any_store.add(CREATORS, creator_data())

    updated = await any_store.update(CREATORS, creator["id"], {"bio": "hello"})

    assert updated["bio"] == "hello"
    assert updated["username"] == "alice"
    assert updated["id"] == creator["id"]
    assert updated["updated_at"] >= creator["updated_at"]
    assert await any_store.update(CREATORS, "missing", {"bio": "x"}) is None


async def test_increment_adds_deltas(any_store):
    creator = await any_store.add(CREATORS, creator_data())
    link = await any_store.add(LINKS, {
        "slug": "tip-me",
        "title": "Tip me",
        "button_text": "Support Me",
        "theme": "default",
        "is_active": True,
        "click_count": 0,
        "creator_id": creator["id"],
    })

    for _ in range(3):
        link = await any_store.increment(LINKS, link["id"], click_count=1)

    assert link["click_count"] == 3
    assert await any_store.increment(LINKS, "missing", click_count=1) is None


async def test_delete(any_store):
    creator = await any_store.add(CREATORS, creator_data())

    assert await any_store.delete(CREATORS, creator["id"]) is True
    assert await any_store.delete(CREATORS, creator["id"]) is False
    assert await any_store.find(CREATORS, id=creator["id"]) is None


async def test_upsert_creates_once(any_store):
    creator = await any_store.add(CREATORS, creator_data())
    match = {"creator_id": creator["id"], "date": "2024-01-01"}
    defaults = {
        "total_payments": 0,
        "total_amount": 0.0,
        "unique_donors": 0,
        "average_amount": 0.0,
        "profile_views": 0,
        "link_clicks": 0,
    }

    first = await any_store.upsert(ANALYTICS, match, defaults=defaults)
    second = await any_store.upsert(ANALYTICS, match, defaults=defaults)

    assert first["id"] == second["id"]
    assert len(await any_store.filter(ANALYTICS, creator_id=creator["id"])) == 1


async def test_unknown_collection(any_store):
    with pytest.raises(UnknownCollectionError):
        await any_store.find("users", id="x")


async def test_json_store_persists_between_instances(tmp_path):
    first = JSONFileRecordStore(tmp_path)
    await first.initialize()
    created = await first.add(CREATORS, creator_data())

    second = JSONFileRecordStore(tmp_path)
    found = await second.find(CREATORS, id=created["id"])

    assert found["email"] == "alice@example.com"
    assert found["created_at"] == created["created_at"]
    assert (tmp_path / "creators.json").exists()
    assert (tmp_path / "analytics.json").exists()


async def test_json_store_treats_corrupt_file_as_empty(tmp_path):
    store = JSONFileRecordStore(tmp_path)
    await store.initialize()
    (tmp_path / "creators.json").write_text("{not json")

    assert await store.filter(CREATORS) == []
    created = await store.add(CREATORS, creator_data())
    assert await store.find(CREATORS, id=created["id"]) is not None


async def test_json_store_write_failure_is_logged_not_raised(tmp_path, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    store = JSONFileRecordStore(blocker)

    created = await store.add(CREATORS, creator_data())

    assert created["username"] == "alice"
    assert await store.filter(CREATORS) == []
    assert "Error writing to file" in caplog.text


async def test_payment_block_height_beyond_32_bits(any_store):
    creator = await any_store.add(CREATORS, creator_data())
    checkpoint = 2**31 + 12345

    payment = await any_store.add(PAYMENTS, {
        "tx_hash": "tx-big",
        "amount": 1.0,
        "currency": "SUI",
        "is_anonymous": False,
        "from_address": "0xdonor",
        "to_address": creator["wallet_address"],
        "timestamp": datetime(2024, 1, 1),
        "block_height": checkpoint,
        "creator_id": creator["id"],
    })

    assert isinstance(Payment.__table__.c.block_height.type, BigInteger)
    found = await any_store.find(PAYMENTS, id=payment["id"])
    assert found["block_height"] == checkpoint
