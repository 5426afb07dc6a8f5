"""Schemas for public (unauthenticated) endpoints."""
from typing import List, Optional

from app.schemas.analytics import AnalyticsSnapshotResponse
from app.schemas.common import CamelModel
from app.schemas.creators import PublicCreator
from app.schemas.payments import PaymentResponse, PublicPayment


class PublicCreatorStats(CamelModel):
    total_amount: float
    total_payments: int


class PublicCreatorResponse(CamelModel):
    """Public profile page: creator, recent non-anonymous tips, totals."""

    creator: PublicCreator
    recent_payments: List[PublicPayment]
    stats: PublicCreatorStats


class PaymentRecordResponse(CamelModel):
    message: str
    payment: PaymentResponse
    analytics: Optional[AnalyticsSnapshotResponse] = None
