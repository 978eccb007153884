"""
Structural checks for threshold tables.

Duplicate thresholds make tier resolution ambiguous, so they are rejected
when a table is loaded instead of being settled at lookup time.
"""

from collections.abc import Iterable, Mapping

from pydantic import ValidationError

from tiering.core.models import RewardTier
from tiering.exceptions import TierConfigurationError


def ensure_unique_thresholds(thresholds: Iterable[int]) -> None:
    """
    Reject repeated thresholds.

    Raises:
        TierConfigurationError: If a threshold appears twice
    """
    seen: set[int] = set()
    for index, threshold in enumerate(thresholds):
        if threshold in seen:
            raise TierConfigurationError(
                f"duplicate threshold {threshold}", index=index
            )
        seen.add(threshold)


def validate_reward_catalog(
    catalog: Iterable[RewardTier | Mapping],
) -> list[RewardTier]:
    """
    Validate a reward ladder.

    Entries may be RewardTier instances or mappings (``requirement`` is
    accepted for ``threshold_count``). The ladder must be strictly ascending
    by threshold.

    Args:
        catalog: Reward entries in display order

    Returns:
        List of RewardTier

    Raises:
        TierConfigurationError: On malformed, unsorted or duplicate entries
    """
    rewards: list[RewardTier] = []
    for index, entry in enumerate(catalog):
        if isinstance(entry, RewardTier):
            rewards.append(entry)
            continue
        try:
            rewards.append(RewardTier.model_validate(entry))
        except ValidationError as e:
            raise TierConfigurationError(
                f"invalid reward entry ({e.error_count()} errors)", index=index
            ) from e

    thresholds = [reward.threshold_count for reward in rewards]
    ensure_unique_thresholds(thresholds)

    for index in range(1, len(thresholds)):
        if thresholds[index] < thresholds[index - 1]:
            raise TierConfigurationError(
                "reward catalog must be ascending by threshold", index=index
            )

    reward_ids = [reward.id for reward in rewards]
    if len(set(reward_ids)) != len(reward_ids):
        raise TierConfigurationError("reward ids must be unique")

    return rewards
