"""
ReferralEvent model.

Links one referred end-user to the party who brought them in.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from incentives.models.base import Base
from incentives.models.enums import ReferralStatus
from incentives.models.types import PercentType


if TYPE_CHECKING:
    from incentives.models.referring_party import ReferringParty


class ReferralEvent(Base):
    """
    ReferralEvent entity.

    Commission fields stay NULL until the commission calculator runs for a
    paid subscription. ``commission_paid`` belongs to the payout process.

    Attributes:
        id: Primary key
        referring_party_id: Party credited with the referral (NULL for plain
            user-to-user referrals)
        referred_user_id: External ID of the referred user
        status: PENDING, APPROVED or REJECTED
        commission_percentage: Percentage applied to the subscription
        commission_amount_cents: Commission in minor currency units
        commission_paid: Set by the payout process
        created_at: Attribution time
        updated_at: Last change
    """

    __tablename__ = "referral_events"
    __table_args__ = (
        CheckConstraint(
            "commission_amount_cents IS NULL OR commission_amount_cents >= 0",
            name="check_referral_commission_non_negative",
        ),
        Index(
            "ix_referral_events_party_status",
            "referring_party_id",
            "status",
        ),
        Index(
            "ix_referral_events_user_status",
            "referred_user_id",
            "status",
        ),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    referring_party_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("referring_parties.id", ondelete="SET NULL"),
        nullable=True,
    )
    referred_user_id: Mapped[str] = mapped_column(
        String(64), nullable=False
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default=ReferralStatus.PENDING.value,
        nullable=False,
    )

    commission_percentage: Mapped[Decimal | None] = mapped_column(
        PercentType, nullable=True
    )
    commission_amount_cents: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )
    commission_paid: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
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

    referring_party: Mapped[Optional["ReferringParty"]] = relationship(
        "ReferringParty", back_populates="referral_events"
    )

    @property
    def is_approved(self) -> bool:
        return self.status == ReferralStatus.APPROVED.value

    @property
    def has_commission(self) -> bool:
        return self.commission_amount_cents is not None

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<ReferralEvent(id={self.id}, "
            f"referring_party_id={self.referring_party_id}, "
            f"referred_user_id={self.referred_user_id}, "
            f"status={self.status}, "
            f"commission_amount_cents={self.commission_amount_cents})>"
        )
