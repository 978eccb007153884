"""
ReferringParty model.

An account that earns commission for bringing in paying subscribers.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from incentives.models.base import Base
from incentives.models.types import PercentType


if TYPE_CHECKING:
    from incentives.models.referral_event import ReferralEvent


class ReferringParty(Base):
    """
    ReferringParty entity.

    Attributes:
        id: Primary key
        name: Display name
        is_active: False disables new commission computation
        base_commission_percentage: Percentage used below the lowest tier
        tiered_commissions: Raw tier table as stored
            (``[{"user_count": int, "percentage": number}, ...]``, any order)
        created_at: Onboarding time
        updated_at: Last admin change
    """

    __tablename__ = "referring_parties"
    __table_args__ = (
        CheckConstraint(
            "base_commission_percentage >= 0 "
            "AND base_commission_percentage <= 100",
            name="check_party_base_commission_range",
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False, index=True
    )

    base_commission_percentage: Mapped[Decimal] = mapped_column(
        PercentType, nullable=False
    )
    tiered_commissions: Mapped[list[dict[str, Any]] | None] = mapped_column(
        JSON, nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    referral_events: Mapped[list["ReferralEvent"]] = relationship(
        "ReferralEvent", back_populates="referring_party"
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<ReferringParty(id={self.id}, name={self.name}, "
            f"is_active={self.is_active}, "
            f"base_commission_percentage={self.base_commission_percentage})>"
        )
