"""
Referral tiering.

Standalone package for threshold-based tier resolution, reward ladder
progress and commission arithmetic. No database or ORM dependencies.

Example:
    >>> from tiering import resolve_tier, compute_reward_progress, DEFAULT_REWARD_CATALOG
    >>>
    >>> resolve_tier([(10, 15), (25, 20), (50, 25)], 30, 10)
    20
    >>> view = compute_reward_progress(5, DEFAULT_REWARD_CATALOG)
    >>> view.next.description
    '$15 gift card (Amazon / App Store / Google Play)'
"""

from tiering.constants import DEFAULT_REWARD_CATALOG, get_reward_by_id
from tiering.core import (
    CommissionSchedule,
    CommissionTier,
    RewardProgress,
    RewardProgressEntry,
    RewardTier,
    calculate_commission_amount,
    calculate_progress_percent,
    compute_reward_progress,
    ensure_unique_thresholds,
    resolve_commission_percentage,
    resolve_reward,
    resolve_tier,
    round_half_up,
    validate_reward_catalog,
)
from tiering.exceptions import TierConfigurationError, TieringError
from tiering.utils import format_cents, format_percentage


__version__ = "1.0.0"
__all__ = [
    # Core
    "resolve_tier",
    "resolve_commission_percentage",
    "resolve_reward",
    "compute_reward_progress",
    "calculate_commission_amount",
    "calculate_progress_percent",
    "round_half_up",
    # Models
    "CommissionSchedule",
    "CommissionTier",
    "RewardProgress",
    "RewardProgressEntry",
    "RewardTier",
    # Validation
    "ensure_unique_thresholds",
    "validate_reward_catalog",
    "TierConfigurationError",
    "TieringError",
    # Constants
    "DEFAULT_REWARD_CATALOG",
    "get_reward_by_id",
    # Formatters
    "format_cents",
    "format_percentage",
]
