"""Daily analytics snapshot model."""
from uuid import uuid4
from sqlalchemy import String, Integer, Float, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base


class AnalyticsSnapshot(Base):
    """Per-creator, per-day rollup of payments and page traffic.

    ``date`` is stored as an ISO ``YYYY-MM-DD`` string so the record looks the
    same in every storage backend.
    """

    __tablename__ = "analytics"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    creator_id: Mapped[str] = mapped_column(String(36), ForeignKey("creators.id"), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    total_payments: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_amount: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    unique_donors: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    average_amount: Mapped[float] = mapped_column(Float, default=0.0, nullable=False)
    profile_views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    link_clicks: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint("creator_id", "date", name="uq_analytics_creator_date"),
    )

    def __repr__(self) -> str:
        return f"<AnalyticsSnapshot(creator_id={self.creator_id}, date={self.date})>"
