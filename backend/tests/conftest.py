"""Pytest configuration and fixtures."""
import os

# Settings are read at import time; keep the app off the network and database
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("ENABLE_DEMO_DATA", "true")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient

from app.database import create_engine, create_session_factory, create_tables
from app.rate_limit import limiter
from app.services.sui import MIST_PER_SUI, SUI_COIN_TYPE, SuiClient, SuiRPCError, get_sui_client
from app.store.factory import get_store
from app.store.json_file import JSONFileRecordStore
from app.store.memory import MemoryRecordStore
from app.store.sql import SQLRecordStore
from main import app

CREATOR_WALLET = "0x" + "a1" * 32
DONOR_WALLET = "0x" + "b2" * 32


class FakeSuiClient(SuiClient):
    """Sui client answering JSON-RPC calls from in-memory tables."""

    def __init__(self):
        super().__init__("http://sui.test", confirmation_attempts=3, confirmation_interval=0)
        self.transactions = {}
        self.addresses_by_name = {}
        self.names_by_address = {}
        # Digest -> number of polls that still answer "not found"
        self.pending = {}
        self.offline = False
        self.calls = []

    async def _call(self, method, params):
        self.calls.append((method, params))
        if self.offline:
            raise SuiRPCError(f"{method} failed: connection refused")

        if method == "sui_getTransactionBlock":
            digest = params[0]
            if self.pending.get(digest, 0) > 0:
                self.pending[digest] -= 1
                raise SuiRPCError("Could not find the referenced transaction", code=-32602)
            if digest not in self.transactions:
                raise SuiRPCError("Could not find the referenced transaction", code=-32602)
            return self.transactions[digest]
        if method == "suix_resolveNameServiceAddress":
            return self.addresses_by_name.get(params[0])
        if method == "suix_resolveNameServiceNames":
            name = self.names_by_address.get(params[0])
            return {"data": [name] if name else [], "hasNextPage": False}
        raise SuiRPCError(f"Method not found: {method}", code=-32601)

    def add_transfer(
        self,
        digest,
        recipient,
        amount_mist,
        sender=DONOR_WALLET,
        timestamp_ms="1700000000000",
        checkpoint="1234",
        coin_type=SUI_COIN_TYPE,
    ):
        """Register a transaction that moves ``amount_mist`` from sender to recipient."""
        self.transactions[digest] = {
            "digest": digest,
            "transaction": {"data": {"sender": sender}},
            "balanceChanges": [
                {"owner": {"AddressOwner": sender}, "coinType": coin_type, "amount": str(-amount_mist)},
                {"owner": {"AddressOwner": recipient}, "coinType": coin_type, "amount": str(amount_mist)},
            ],
            "timestampMs": timestamp_ms,
            "checkpoint": checkpoint,
        }
        return self.transactions[digest]


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def store():
    return MemoryRecordStore()


@pytest.fixture
def sui():
    return FakeSuiClient()


@pytest.fixture
def client(store, sui):
    """Create test client bound to the in-memory store and fake Sui node."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_sui_client] = lambda: sui
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture(params=["memory", "json", "sql"])
async def any_store(request, tmp_path):
    """Each record store backend, freshly initialized."""
    if request.param == "memory":
        store = MemoryRecordStore()
    elif request.param == "json":
        store = JSONFileRecordStore(tmp_path / "data")
    else:
        engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
        await create_tables(engine)
        store = SQLRecordStore(create_session_factory(engine), engine=engine)

    await store.initialize()
    yield store
    await store.close()


def register_creator(client, username="alice", wallet=CREATOR_WALLET, email=None, **extra):
    """Register a creator through the API and return (creator, token)."""
    body = {
        "email": email or f"{username}@example.com",
        "username": username,
        "displayName": username.title(),
        "walletAddress": wallet,
        **extra,
    }
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    data = response.json()
    return data["creator"], data["token"]


def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


def sui_amount(mist):
    return mist / MIST_PER_SUI
