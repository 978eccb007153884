"""
Business services.

Services run inside a caller-owned AsyncSession.
"""

from incentives.services.base_service import BaseService
from incentives.services.referral import (
    CommissionCalculator,
    CommissionResult,
    RewardClaimCheck,
    RewardProgressService,
    SubscriptionEvent,
)

__all__ = [
    "BaseService",
    "CommissionCalculator",
    "CommissionResult",
    "RewardClaimCheck",
    "RewardProgressService",
    "SubscriptionEvent",
]
