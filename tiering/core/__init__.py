"""
Core tiering functionality.

Threshold resolution, reward progress and commission arithmetic.
"""

from tiering.core.models import (
    CommissionSchedule,
    CommissionTier,
    RewardProgress,
    RewardProgressEntry,
    RewardTier,
)
from tiering.core.money import (
    calculate_commission_amount,
    calculate_progress_percent,
    round_half_up,
)
from tiering.core.progress import compute_reward_progress
from tiering.core.resolver import (
    resolve_commission_percentage,
    resolve_reward,
    resolve_tier,
)
from tiering.core.validation import ensure_unique_thresholds, validate_reward_catalog

__all__ = [
    "CommissionSchedule",
    "CommissionTier",
    "RewardProgress",
    "RewardProgressEntry",
    "RewardTier",
    "calculate_commission_amount",
    "calculate_progress_percent",
    "round_half_up",
    "compute_reward_progress",
    "resolve_tier",
    "resolve_commission_percentage",
    "resolve_reward",
    "ensure_unique_thresholds",
    "validate_reward_catalog",
]
