"""Schemas for analytics endpoints."""
from datetime import datetime
from typing import List, Optional

from app.schemas.common import CamelModel
from app.schemas.payments import PaymentResponse


class AnalyticsOverview(CamelModel):
    total_amount: float
    average_amount: float
    total_payments: int
    unique_donors: int
    period: int


class ChartPoint(CamelModel):
    """One calendar day of the rolling window."""

    date: str
    amount: float
    payments: int
    donors: int


class AnalyticsSnapshotResponse(CamelModel):
    """Stored per-day rollup."""

    id: str
    creator_id: str
    date: str
    total_payments: int
    total_amount: float
    unique_donors: int
    average_amount: float
    profile_views: int
    link_clicks: int


class AnalyticsOverviewResponse(CamelModel):
    overview: AnalyticsOverview
    recent_payments: List[PaymentResponse]
    chart_data: List[ChartPoint]
    daily_data: List[AnalyticsSnapshotResponse]


class PaymentSeriesPoint(CamelModel):
    date: str
    count: int
    total: float
    average: float
    unique_donors: int


class PaymentSeriesResponse(CamelModel):
    payments: List[PaymentSeriesPoint]


class TopDonor(CamelModel):
    from_address: str
    donor_name: Optional[str] = None
    payment_count: int
    total_amount: float
    average_amount: float
    last_payment: datetime


class TopDonorsResponse(CamelModel):
    top_donors: List[TopDonor]
