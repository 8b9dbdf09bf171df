"""
Match model - recorded interest (or outcome) linking a buyer to a listing.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from partmatch.db.base import Base

if TYPE_CHECKING:
    from partmatch.db.models.listing import Listing


class Match(Base):
    """Status is free-form (interested, approved, rejected, ...)."""

    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("buyer_id", "listing_id", name="uq_matches_buyer_listing"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    buyer_id: Mapped[str] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    listing_id: Mapped[int] = mapped_column(ForeignKey("listings.id"), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    listing: Mapped["Listing"] = relationship("Listing")

    def __repr__(self) -> str:
        return f"<Match(id={self.id}, listing_id={self.listing_id}, status={self.status})>"
