"""
Default reward ladder.

Single source of truth for the rewards shown on the referral dashboard.
Thresholds are counts of approved referrals.
"""

from tiering.core.models import RewardTier
from tiering.core.validation import validate_reward_catalog


DEFAULT_REWARD_CATALOG: list[RewardTier] = validate_reward_catalog([
    RewardTier(id=1, threshold_count=3, description="5% discount on next subscription", icon="💰"),
    RewardTier(id=2, threshold_count=5, description="1 month free plan (Pro Plan)", icon="📅"),
    RewardTier(id=3, threshold_count=8, description="$15 gift card (Amazon / App Store / Google Play)", icon="🎁"),
    RewardTier(id=4, threshold_count=12, description="Wireless charging pad", icon="🔋"),
    RewardTier(id=5, threshold_count=18, description="Small Bluetooth headphones", icon="🎧"),
    RewardTier(id=6, threshold_count=25, description="Mini Drone", icon="🚁"),
    RewardTier(id=7, threshold_count=35, description="Mechanical keyboard or gaming mouse", icon="⌨️"),
    RewardTier(id=8, threshold_count=50, description="AirPods", icon="🎵"),
    RewardTier(id=9, threshold_count=75, description="Apple Watch", icon="⌚"),
    RewardTier(id=10, threshold_count=100, description="The new iPhone", icon="📱"),
])


def get_reward_by_id(
    reward_id: int, catalog: list[RewardTier] | None = None
) -> RewardTier | None:
    """
    Get reward by ID.

    Args:
        reward_id: Reward ID
        catalog: Reward ladder (defaults to DEFAULT_REWARD_CATALOG)

    Returns:
        RewardTier or None if not found
    """
    for reward in catalog if catalog is not None else DEFAULT_REWARD_CATALOG:
        if reward.id == reward_id:
            return reward
    return None
