"""Sui full-node client for transaction inspection and SuiNS name resolution.

Talks JSON-RPC over httpx. Only the calls the API needs are wrapped:
transaction lookup (with optional confirmation polling) and the two SuiNS
resolution methods.
"""
import asyncio
import logging
import re
from typing import Any, Optional

import httpx
from fastapi import Request

logger = logging.getLogger(__name__)

MIST_PER_SUI = 1_000_000_000
SUI_COIN_TYPE = "0x2::sui::SUI"

SUI_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40,64}$")
SUINS_NAME_RE = re.compile(r"^[a-zA-Z0-9_-]{1,63}$")


class SuiRPCError(Exception):
    """Raised when the full node cannot be reached or returns a malformed reply."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class SuiTransactionTimeout(SuiRPCError):
    """Raised when a transaction is still unknown after all confirmation polls."""


def mist_to_sui(amount: int | str) -> float:
    """Convert MIST (base unit) to SUI."""
    return int(amount) / MIST_PER_SUI


def sui_to_mist(amount: float) -> int:
    """Convert SUI to MIST, rounding down."""
    return int(amount * MIST_PER_SUI)


def _balance_change_owner(change: dict) -> Optional[str]:
    owner = change.get("owner")
    if isinstance(owner, dict):
        return owner.get("AddressOwner")
    return owner


def find_incoming_sui(tx: dict, recipient: str) -> Optional[int]:
    """
    Return the positive SUI amount (in MIST) credited to ``recipient`` by a
    transaction, or None if the transaction paid it nothing.
    """
    recipient = SuiNameService.normalize_sui_address(recipient)
    for change in tx.get("balanceChanges") or []:
        owner = _balance_change_owner(change)
        if not owner or SuiNameService.normalize_sui_address(owner) != recipient:
            continue
        if change.get("coinType") != SUI_COIN_TYPE:
            continue
        try:
            amount = int(change.get("amount", 0))
        except (TypeError, ValueError):
            continue
        if amount > 0:
            return amount
    return None


class SuiClient:
    """Minimal async JSON-RPC client for a Sui full node."""

    def __init__(
        self,
        rpc_url: str,
        timeout: float = 10.0,
        confirmation_attempts: int = 30,
        confirmation_interval: float = 2.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.rpc_url = rpc_url
        self.confirmation_attempts = confirmation_attempts
        self.confirmation_interval = confirmation_interval
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self.names = SuiNameService(self)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _call(self, method: str, params: list) -> Any:
        """Send one JSON-RPC request and return its ``result``."""
        payload = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
        try:
            response = await self._http.post(self.rpc_url, json=payload)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise SuiRPCError(f"{method} failed: {e}") from e

        if body.get("error"):
            error = body["error"]
            raise SuiRPCError(error.get("message", "RPC error"), code=error.get("code"))
        return body.get("result")

    async def get_transaction_details(self, digest: str) -> Optional[dict]:
        """
        Fetch a transaction block with its balance changes.

        Returns None when the node does not know the digest. Transport
        failures raise SuiRPCError.
        """
        options = {
            "showInput": True,
            "showEffects": True,
            "showEvents": True,
            "showBalanceChanges": True,
        }
        try:
            return await self._call("sui_getTransactionBlock", [digest, options])
        except SuiRPCError as e:
            if e.code is None:
                raise
            logger.info("Transaction %s not available: %s", digest, e)
            return None

    async def wait_for_transaction(self, digest: str, max_attempts: Optional[int] = None) -> dict:
        """Poll until the transaction is visible on chain or attempts run out."""
        attempts = max_attempts or self.confirmation_attempts
        for attempt in range(attempts):
            try:
                result = await self.get_transaction_details(digest)
                if result:
                    return result
            except SuiRPCError as e:
                logger.warning("Confirmation poll %d for %s failed: %s", attempt + 1, digest, e)
            if attempt < attempts - 1:
                await asyncio.sleep(self.confirmation_interval)

        raise SuiTransactionTimeout(f"Transaction confirmation timeout: {digest}")


class SuiNameService:
    """SuiNS lookups plus address validation and formatting helpers."""

    def __init__(self, client: SuiClient):
        self.client = client

    @staticmethod
    def normalize_name(name: str) -> str:
        """Strip '@' and '.sui'/'.suins' decorations and lowercase."""
        name = name.strip().lstrip("@")
        for suffix in (".suins", ".sui"):
            if name.lower().endswith(suffix):
                name = name[: -len(suffix)]
                break
        return name.lower()

    async def resolve_name(self, name: str) -> Optional[str]:
        """Resolve a SuiNS name to an address; None if unknown or on error."""
        normalized = self.normalize_name(name)
        if not normalized:
            return None
        try:
            address = await self.client._call("suix_resolveNameServiceAddress", [f"{normalized}.sui"])
        except SuiRPCError as e:
            logger.error("Error resolving SuiNS name %s: %s", normalized, e)
            return None
        logger.debug("Resolved SuiNS name %s -> %s", normalized, address)
        return address

    async def get_name_by_address(self, address: str) -> Optional[str]:
        """Reverse lookup; returns the first name as '@name.suins' or None."""
        try:
            result = await self.client._call("suix_resolveNameServiceNames", [address])
        except SuiRPCError as e:
            logger.error("Error looking up SuiNS name for %s: %s", address, e)
            return None
        names = (result or {}).get("data") or []
        if not names:
            return None
        return f"@{self.normalize_name(names[0])}.suins"

    @staticmethod
    def validate_sui_address(address: Optional[str]) -> bool:
        return bool(address) and SUI_ADDRESS_RE.match(address) is not None

    @staticmethod
    def normalize_sui_address(address: str) -> str:
        if not address:
            return ""
        if not address.startswith("0x"):
            address = "0x" + address
        return address.lower()

    @staticmethod
    def format_sui_address(address: str) -> str:
        """Shorten an address for display: 0x1234...abcd."""
        if not address:
            return ""
        if len(address) <= 10:
            return address
        return f"{address[:6]}...{address[-4:]}"

    async def validate_and_resolve_name(self, name_or_address: str) -> dict:
        """Classify input as an address or a SuiNS name and resolve it."""
        if not name_or_address:
            return {"isValid": False, "type": "invalid"}

        if self.validate_sui_address(name_or_address):
            suins_name = await self.get_name_by_address(name_or_address)
            return {
                "isValid": True,
                "resolvedAddress": self.normalize_sui_address(name_or_address),
                "displayName": suins_name or self.format_sui_address(name_or_address),
                "type": "address",
            }

        normalized = self.normalize_name(name_or_address)
        if normalized and SUINS_NAME_RE.match(normalized):
            resolved = await self.resolve_name(normalized)
            if resolved:
                return {
                    "isValid": True,
                    "resolvedAddress": resolved,
                    "displayName": f"@{normalized}.suins",
                    "type": "suins",
                }

        return {"isValid": False, "type": "invalid"}


def get_sui_client(request: Request) -> SuiClient:
    """FastAPI dependency returning the process-wide Sui client."""
    return request.app.state.sui_client
