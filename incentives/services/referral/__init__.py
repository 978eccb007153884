"""
Referral services package.

Contains services for referral incentives:
- commission_calculator: Commission for paid subscriptions of referred users
- reward_progress: Reward ladder progress for the referral dashboard
"""

from incentives.services.referral.commission_calculator import (
    CommissionCalculator,
    CommissionResult,
    SubscriptionEvent,
)
from incentives.services.referral.reward_progress import (
    RewardClaimCheck,
    RewardProgressService,
)


__all__ = [
    # Commission
    "CommissionCalculator",
    "CommissionResult",
    "SubscriptionEvent",
    # Rewards
    "RewardProgressService",
    "RewardClaimCheck",
]
