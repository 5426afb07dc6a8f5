"""Creator model for SuiPay API."""
from datetime import datetime
from uuid import uuid4
from sqlalchemy import String, Float, Boolean, DateTime, Text, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.database import Base


class Creator(Base):
    """A registered payee who receives tips and owns links and payments."""

    __tablename__ = "creators"

    # Primary key
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))

    # Identity
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    wallet_address: Mapped[str] = mapped_column(String(66), unique=True, nullable=False)
    sui_name_service: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Profile
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    twitter_handle: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    custom_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    min_donation_amount: Mapped[float] = mapped_column(Float, default=1.0, nullable=False)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        Index("idx_creator_wallet_address", "wallet_address"),
    )

    def __repr__(self) -> str:
        return f"<Creator(id={self.id}, username={self.username}, email={self.email})>"
