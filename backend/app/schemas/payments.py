"""Schemas for payment endpoints."""
from datetime import datetime
from typing import List, Optional
from pydantic import Field

from app.schemas.common import CamelModel


class PaymentRecordRequest(CamelModel):
    """Report a confirmed on-chain tip so it can be recorded."""

    tx_hash: str = Field(..., min_length=1, max_length=128, description="Sui transaction digest")
    creator_id: str = Field(..., min_length=1, description="Recipient creator id")
    message: Optional[str] = Field(None, max_length=1000)
    donor_name: Optional[str] = Field(None, max_length=255)
    donor_email: Optional[str] = Field(None, max_length=255)
    is_anonymous: bool = False
    wait_for_confirmation: bool = Field(False, description="Poll the chain until the transaction is visible")


class PaymentResponse(CamelModel):
    """Full payment record, visible to the receiving creator."""

    id: str
    tx_hash: str
    amount: float
    currency: str
    message: Optional[str] = None
    donor_name: Optional[str] = None
    donor_email: Optional[str] = None
    is_anonymous: bool
    from_address: str
    to_address: str
    block_height: Optional[int] = None
    timestamp: datetime
    creator_id: str


class PublicPayment(CamelModel):
    """Public projection of a payment: no donor contact, no addresses."""

    id: str
    amount: float
    message: Optional[str] = None
    donor_name: Optional[str] = None
    timestamp: datetime


class PaginationInfo(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class PaymentSummary(CamelModel):
    total_amount: float
    average_amount: float
    total_payments: int


class PaymentListResponse(CamelModel):
    """Paginated payment history."""

    payments: List[PaymentResponse]
    pagination: PaginationInfo
    summary: PaymentSummary
