"""
Threshold table resolution.

Pure lookup shared by commission tiers and the reward ladder: given
``(threshold, value)`` pairs and a count, pick the value of the highest
threshold the count has reached.
"""

from collections.abc import Callable, Iterable
from decimal import Decimal
from operator import itemgetter
from typing import TYPE_CHECKING, Any, TypeVar


if TYPE_CHECKING:
    from tiering.core.models import CommissionTier, RewardTier


V = TypeVar("V")


def resolve_tier(
    table: Iterable[tuple[int, V]],
    count: int,
    base_value: V,
    tie_break_key: Callable[[V], Any] | None = None,
) -> V:
    """
    Resolve the value of the highest threshold not above ``count``.

    Entries are scanned by threshold descending and the first one with
    ``threshold <= count`` wins. Entries sharing that threshold are settled
    by the largest value (or the largest ``tie_break_key(value)``), so the
    result does not depend on input order.

    Args:
        table: ``(threshold, value)`` pairs, in any order, possibly empty
        count: Qualifying count; negative values are treated as 0
        base_value: Returned when no threshold is reached
        tie_break_key: Optional key used to rank values on equal thresholds

    Returns:
        Resolved value or ``base_value``

    Example:
        >>> resolve_tier([(10, 15), (25, 20), (50, 25)], 30, 10)
        20
        >>> resolve_tier([], 30, 10)
        10
    """
    effective_count = max(0, count)
    ordered = sorted(table, key=itemgetter(0), reverse=True)

    for index, (threshold, value) in enumerate(ordered):
        if threshold > effective_count:
            continue

        ties = [
            tied_value
            for tied_threshold, tied_value in ordered[index:]
            if tied_threshold == threshold
        ]
        if len(ties) == 1:
            return value
        return max(ties, key=tie_break_key) if tie_break_key else max(ties)

    return base_value


def resolve_commission_percentage(
    tiers: Iterable["CommissionTier"],
    qualifying_count: int,
    base_percentage: Decimal,
) -> Decimal:
    """
    Resolve the commission percentage for a qualifying count.

    Args:
        tiers: Commission tiers of the referring party
        qualifying_count: Number of approved referrals
        base_percentage: Percentage used below the lowest tier

    Returns:
        Applicable percentage
    """
    return resolve_tier(
        ((tier.threshold_count, tier.percentage) for tier in tiers),
        qualifying_count,
        base_percentage,
    )


def resolve_reward(
    catalog: Iterable["RewardTier"], count: int
) -> "RewardTier | None":
    """Return the highest unlocked reward, or None if nothing is unlocked."""
    return resolve_tier(
        ((reward.threshold_count, reward) for reward in catalog),
        count,
        None,
        tie_break_key=lambda reward: reward.id,
    )
