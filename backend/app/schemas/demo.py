"""Schemas for the demo data endpoints."""
from typing import Optional

from app.schemas.analytics import AnalyticsOverview
from app.schemas.common import CamelModel
from app.schemas.creators import CreatorResponse


class DemoInitResponse(CamelModel):
    message: str
    creator: CreatorResponse
    payments: int
    token: str
    total_amount: float


class DemoStatusResponse(CamelModel):
    exists: bool
    message: Optional[str] = None
    creator: Optional[CreatorResponse] = None
    payments_count: Optional[int] = None
    total_amount: Optional[float] = None
    analytics: Optional[AnalyticsOverview] = None
