"""
Reward ladder progress.

Computes which rewards a referral count has unlocked, which one is next,
and how far along each reward the count is. No side effects: the same
inputs always give the same view.
"""

from collections.abc import Iterable, Mapping

from tiering.core.models import RewardProgress, RewardProgressEntry, RewardTier
from tiering.core.money import calculate_progress_percent
from tiering.core.resolver import resolve_reward
from tiering.core.validation import validate_reward_catalog


def compute_reward_progress(
    count: int,
    catalog: Iterable[RewardTier | Mapping],
) -> RewardProgress:
    """
    Build the reward progress view for a referral count.

    Args:
        count: Approved referral count (negative is treated as 0)
        catalog: Reward ladder, ascending by threshold

    Returns:
        RewardProgress

    Raises:
        TierConfigurationError: If the catalog is malformed

    Example:
        >>> view = compute_reward_progress(5, [
        ...     {"id": 1, "requirement": 3, "description": "a"},
        ...     {"id": 2, "requirement": 8, "description": "b"},
        ... ])
        >>> view.next.threshold_count, view.per_reward[1].progress_percent
        (8, 63)
    """
    rewards = validate_reward_catalog(catalog)
    effective_count = max(0, count)

    unlocked = [r for r in rewards if r.threshold_count <= effective_count]
    next_reward = next(
        (r for r in rewards if r.threshold_count > effective_count), None
    )

    per_reward = [
        RewardProgressEntry(
            id=reward.id,
            threshold_count=reward.threshold_count,
            progress_percent=calculate_progress_percent(
                effective_count, reward.threshold_count
            ),
            unlocked=reward.threshold_count <= effective_count,
            is_next=next_reward is not None and reward.id == next_reward.id,
        )
        for reward in rewards
    ]

    if next_reward is not None:
        remaining = next_reward.threshold_count - effective_count
        next_goal = next_reward.threshold_count
    else:
        remaining = None
        next_goal = rewards[-1].threshold_count if rewards else None

    return RewardProgress(
        count=effective_count,
        unlocked=unlocked,
        current=resolve_reward(rewards, effective_count),
        next=next_reward,
        per_reward=per_reward,
        remaining_to_next=remaining,
        next_goal=next_goal,
    )
