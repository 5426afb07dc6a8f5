"""Payment model for recording on-chain tips."""
from datetime import datetime
from uuid import uuid4

from sqlalchemy import String, Float, Boolean, BigInteger, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Payment(Base):
    """Records each confirmed tip sent to a creator.

    Written once when the transfer is reported and never mutated.
    Amounts are stored in SUI (MIST / 10^9).
    """
    __tablename__ = "payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    tx_hash: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    currency: Mapped[str] = mapped_column(String(16), default="SUI", nullable=False)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)
    donor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    donor_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    from_address: Mapped[str] = mapped_column(String(66), nullable=False)
    to_address: Mapped[str] = mapped_column(String(66), nullable=False)
    block_height: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    creator_id: Mapped[str] = mapped_column(String(36), ForeignKey("creators.id"), nullable=False)

    # Relationships
    creator = relationship("Creator", foreign_keys=[creator_id])

    __table_args__ = (
        Index("idx_payment_creator_id", "creator_id"),
        Index("idx_payment_timestamp", "timestamp"),
    )

    def __repr__(self) -> str:
        return f"<Payment(id={self.id}, tx_hash={self.tx_hash}, amount={self.amount})>"
