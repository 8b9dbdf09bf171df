"""
User model - the stored side of an authenticated identity.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import String, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from partmatch.db.base import Base

if TYPE_CHECKING:
    from partmatch.db.models.listing import Listing


class User(Base):
    """Identity row. The id is an opaque UUID string issued at registration."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, index=True, nullable=True)
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    # Null for identities synced from an external provider
    hashed_password: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    listings: Mapped[list["Listing"]] = relationship("Listing", back_populates="seller")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
