"""Database models for SuiPay API."""
from app.models.creator import Creator
from app.models.payment import Payment
from app.models.link import ShareableLink
from app.models.analytics import AnalyticsSnapshot

__all__ = [
    "Creator",
    "Payment",
    "ShareableLink",
    "AnalyticsSnapshot",
]
