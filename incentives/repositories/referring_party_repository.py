"""
Referring party repository.

Data access layer for ReferringParty model. Commission configuration
leaves this layer already validated.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from incentives.models.referring_party import ReferringParty
from incentives.repositories.base import BaseRepository
from incentives.utils.exceptions import ReferringPartyNotFoundError
from incentives.validators.tiers import build_commission_schedule
from tiering.core.models import CommissionSchedule


class ReferringPartyRepository(BaseRepository[ReferringParty]):
    """Referring party repository (party directory)."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize referring party repository."""
        super().__init__(ReferringParty, session)

    @staticmethod
    def commission_schedule_for(party: ReferringParty) -> CommissionSchedule:
        """
        Build the validated commission schedule of a loaded party.

        Args:
            party: Referring party

        Returns:
            CommissionSchedule

        Raises:
            TierConfigurationError: If the stored configuration is malformed
        """
        return build_commission_schedule(
            party.base_commission_percentage,
            party.tiered_commissions,
        )

    async def load_commission_schedule(
        self, referring_party_id: int
    ) -> CommissionSchedule:
        """
        Load and validate the commission schedule of a party.

        Args:
            referring_party_id: Referring party ID

        Returns:
            CommissionSchedule

        Raises:
            ReferringPartyNotFoundError: If the party does not exist
            TierConfigurationError: If the stored configuration is malformed
        """
        party = await self.get_by_id(referring_party_id)
        if not party:
            raise ReferringPartyNotFoundError(referring_party_id)
        return self.commission_schedule_for(party)

    async def get_active(self) -> list[ReferringParty]:
        """
        Get all active referring parties.

        Returns:
            List of active parties
        """
        return await self.find_by(is_active=True)
