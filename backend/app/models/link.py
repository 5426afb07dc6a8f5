"""Shareable link model."""
from datetime import datetime
from uuid import uuid4
from sqlalchemy import String, Integer, Boolean, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from app.database import Base


class ShareableLink(Base):
    """Public vanity entry point to a creator's payment page."""

    __tablename__ = "links"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    button_text: Mapped[str] = mapped_column(String(100), default="Support Me", nullable=False)
    theme: Mapped[str] = mapped_column(String(50), default="default", nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    click_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    creator_id: Mapped[str] = mapped_column(String(36), ForeignKey("creators.id"), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    creator = relationship("Creator", foreign_keys=[creator_id])

    __table_args__ = (
        Index("idx_link_creator_id", "creator_id"),
    )

    def __repr__(self) -> str:
        return f"<ShareableLink(id={self.id}, slug={self.slug}, clicks={self.click_count})>"
