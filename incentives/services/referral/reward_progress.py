"""
Reward ladder service.

Loads a referring party's current approved-referral count and evaluates the
reward ladder against it. Nothing is written: the result is computed on
every dashboard request.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from sqlalchemy.ext.asyncio import AsyncSession

from incentives.config.business_constants import REWARD_CATALOG
from incentives.repositories.referral_event_repository import (
    ReferralEventRepository,
)
from incentives.repositories.referring_party_repository import (
    ReferringPartyRepository,
)
from incentives.services.base_service import BaseService
from incentives.utils.exceptions import ReferringPartyNotFoundError
from tiering.constants import get_reward_by_id
from tiering.core.models import RewardProgress, RewardTier
from tiering.core.progress import compute_reward_progress
from tiering.core.validation import validate_reward_catalog


ClaimReason = Literal["ok", "unknown_reward", "not_unlocked"]


@dataclass(frozen=True)
class RewardClaimCheck:
    """Whether a reward can be claimed at the current referral count."""

    eligible: bool
    reason: ClaimReason
    count: int
    reward: RewardTier | None = None
    remaining: int = 0


class RewardProgressService(BaseService):
    """Reward ladder evaluation for referring parties."""

    def __init__(
        self,
        session: AsyncSession,
        catalog: Sequence[RewardTier] | None = None,
    ) -> None:
        """
        Initialize reward progress service.

        Args:
            session: Async database session
            catalog: Reward ladder (defaults to REWARD_CATALOG)
        """
        super().__init__(session)
        self.catalog = validate_reward_catalog(
            catalog if catalog is not None else REWARD_CATALOG
        )
        self.event_repo = ReferralEventRepository(session)
        self.party_repo = ReferringPartyRepository(session)

    async def get_progress(self, referring_party_id: int) -> RewardProgress:
        """
        Get reward ladder progress of a referring party.

        Args:
            referring_party_id: Referring party ID

        Returns:
            RewardProgress for the party's current approved count

        Raises:
            ReferringPartyNotFoundError: If the party does not exist
        """
        if await self.party_repo.get_by_id(referring_party_id) is None:
            raise ReferringPartyNotFoundError(referring_party_id)

        count = await self.event_repo.count_approved_by_party(
            referring_party_id
        )
        return compute_reward_progress(count, self.catalog)

    async def check_claim(
        self, referring_party_id: int, reward_id: int
    ) -> RewardClaimCheck:
        """
        Check whether a party has unlocked a reward.

        Claims themselves are recorded by the caller; this only answers
        whether the reward exists and is unlocked right now.

        Args:
            referring_party_id: Referring party ID
            reward_id: Reward ID from the catalog

        Returns:
            RewardClaimCheck
        """
        count = await self.event_repo.count_approved_by_party(
            referring_party_id
        )
        reward = get_reward_by_id(reward_id, self.catalog)

        if reward is None:
            self.logger.warning(
                "Claim for unknown reward",
                extra={
                    "referring_party_id": referring_party_id,
                    "reward_id": reward_id,
                },
            )
            return RewardClaimCheck(
                eligible=False, reason="unknown_reward", count=count
            )

        if count < reward.threshold_count:
            return RewardClaimCheck(
                eligible=False,
                reason="not_unlocked",
                count=count,
                reward=reward,
                remaining=reward.threshold_count - count,
            )

        return RewardClaimCheck(
            eligible=True, reason="ok", count=count, reward=reward
        )
