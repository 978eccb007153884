"""
Referral event repository.

Data access layer for ReferralEvent model. This is the referral
attribution store the commission calculator and the reward dashboard read
from.
"""

from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload

from incentives.models.enums import ReferralStatus
from incentives.models.referral_event import ReferralEvent
from incentives.repositories.base import BaseRepository


class ReferralEventRepository(BaseRepository[ReferralEvent]):
    """Referral event repository with attribution queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize referral event repository."""
        super().__init__(ReferralEvent, session)

    async def find_approved_by_referred_user(
        self, referred_user_id: str
    ) -> ReferralEvent | None:
        """
        Get the approved referral event of a referred user.

        The referring party is loaded in the same query. If a user somehow
        has several approved events, the earliest attribution wins.

        Args:
            referred_user_id: External ID of the referred user

        Returns:
            ReferralEvent with ``referring_party`` loaded, or None
        """
        stmt = (
            select(ReferralEvent)
            .options(joinedload(ReferralEvent.referring_party))
            .where(
                ReferralEvent.referred_user_id == referred_user_id,
                ReferralEvent.status == ReferralStatus.APPROVED.value,
            )
            .order_by(ReferralEvent.created_at, ReferralEvent.id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count_approved_by_party(self, referring_party_id: int) -> int:
        """
        Count approved referral events of a referring party.

        Always read from storage; this is the qualifying count for tiers.

        Args:
            referring_party_id: Referring party ID

        Returns:
            Number of approved events
        """
        stmt = select(func.count(ReferralEvent.id)).where(
            ReferralEvent.referring_party_id == referring_party_id,
            ReferralEvent.status == ReferralStatus.APPROVED.value,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def update_commission(
        self,
        event_id: int,
        percentage: Decimal,
        amount_cents: int,
    ) -> bool:
        """
        Write commission fields of one referral event.

        Both fields go out in a single UPDATE for that row. The paid flag
        is not part of the statement.

        Args:
            event_id: Referral event ID
            percentage: Applied commission percentage
            amount_cents: Commission in minor units

        Returns:
            True if the row was updated, False if it does not exist
        """
        stmt = (
            update(ReferralEvent)
            .where(ReferralEvent.id == event_id)
            .values(
                commission_percentage=percentage,
                commission_amount_cents=amount_cents,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def get_by_party(
        self,
        referring_party_id: int,
        status: ReferralStatus | None = None,
    ) -> list[ReferralEvent]:
        """
        Get referral events of a referring party.

        Args:
            referring_party_id: Referring party ID
            status: Optional status filter

        Returns:
            List of referral events
        """
        filters: dict[str, object] = {"referring_party_id": referring_party_id}
        if status:
            filters["status"] = status.value

        return await self.find_by(**filters)
