"""
Validators for stored commission configuration.

The tier table is kept as a loosely typed JSON blob. It is converted into a
typed, checked list here, when the configuration is loaded, so malformed
tables fail fast instead of silently resolving to the base percentage.
"""

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import ValidationError

from incentives.config.business_constants import (
    MAX_COMMISSION_PERCENTAGE,
    MIN_COMMISSION_PERCENTAGE,
)
from tiering.core.models import CommissionSchedule, CommissionTier
from tiering.core.validation import ensure_unique_thresholds
from tiering.exceptions import TierConfigurationError


THRESHOLD_KEYS = ("user_count", "threshold_count")

# Matches the DECIMAL(5, 2) percentage columns
PERCENTAGE_STEP = Decimal("0.01")


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid threshold or percentage
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, Decimal))


def _has_cent_precision(value: Decimal) -> bool:
    return value == value.quantize(PERCENTAGE_STEP)


def validate_base_percentage(value: Any) -> Decimal:
    """
    Validate a base commission percentage.

    Args:
        value: Stored percentage

    Returns:
        Percentage as Decimal

    Raises:
        TierConfigurationError: If not a number within 0-100 with at most
            2 decimal places

    Examples:
        >>> validate_base_percentage(10)
        Decimal('10')
    """
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            raise TierConfigurationError(
                "base percentage must be a number"
            ) from None
    if not _is_number(value):
        raise TierConfigurationError("base percentage must be a number")

    percentage = Decimal(str(value))
    if not percentage.is_finite():
        raise TierConfigurationError("base percentage must be a number")
    if not MIN_COMMISSION_PERCENTAGE <= percentage <= MAX_COMMISSION_PERCENTAGE:
        raise TierConfigurationError(
            f"base percentage must be within 0-100, got {percentage}"
        )
    if not _has_cent_precision(percentage):
        raise TierConfigurationError(
            f"base percentage allows at most 2 decimal places, got {percentage}"
        )
    return percentage


def _parse_tier(entry: Any, index: int) -> CommissionTier:
    if isinstance(entry, CommissionTier):
        return entry

    if not isinstance(entry, Mapping):
        raise TierConfigurationError("tier must be an object", index=index)

    threshold_key = next((key for key in THRESHOLD_KEYS if key in entry), None)
    if threshold_key is None or "percentage" not in entry:
        raise TierConfigurationError(
            "tier must have user_count and percentage", index=index
        )

    threshold = entry[threshold_key]
    percentage = entry["percentage"]

    if not _is_number(threshold):
        raise TierConfigurationError(
            f"threshold must be a number, got {threshold!r}", index=index
        )
    threshold_value = Decimal(str(threshold))
    if not threshold_value.is_finite() or threshold_value != threshold_value.to_integral_value():
        raise TierConfigurationError(
            f"threshold must be a whole number, got {threshold}", index=index
        )
    if threshold_value < 0:
        raise TierConfigurationError(
            f"threshold must be non-negative, got {threshold}", index=index
        )

    if not _is_number(percentage):
        raise TierConfigurationError(
            f"percentage must be a number, got {percentage!r}", index=index
        )
    percentage_value = Decimal(str(percentage))
    if not percentage_value.is_finite():
        raise TierConfigurationError(
            f"percentage must be a number, got {percentage!r}", index=index
        )

    try:
        tier = CommissionTier(
            threshold_count=int(threshold_value),
            percentage=percentage_value,
        )
    except ValidationError as e:
        raise TierConfigurationError(
            f"percentage must be within 0-100, got {percentage}", index=index
        ) from e

    if not _has_cent_precision(tier.percentage):
        raise TierConfigurationError(
            f"percentage allows at most 2 decimal places, got {percentage}",
            index=index,
        )
    return tier


def parse_commission_tiers(raw: Any) -> list[CommissionTier]:
    """
    Parse a stored tier table.

    Args:
        raw: JSON value from storage; None or an empty list means "no tiers"

    Returns:
        Tiers sorted ascending by threshold

    Raises:
        TierConfigurationError: If the table is not a list, an entry is
            malformed, a threshold is negative or non-numeric, a percentage
            is out of range or finer than 0.01, or two entries share a
            threshold

    Examples:
        >>> [t.threshold_count for t in parse_commission_tiers(
        ...     [{"user_count": 25, "percentage": 20}, {"user_count": 10, "percentage": 15}]
        ... )]
        [10, 25]
    """
    if raw is None:
        return []

    if not isinstance(raw, (list, tuple)):
        raise TierConfigurationError("tiered commissions must be a list")

    tiers = [_parse_tier(entry, index) for index, entry in enumerate(raw)]
    ensure_unique_thresholds(tier.threshold_count for tier in tiers)

    return sorted(tiers, key=lambda tier: tier.threshold_count)


def build_commission_schedule(
    base_percentage: Any, raw_tiers: Any
) -> CommissionSchedule:
    """
    Build a validated commission schedule from stored values.

    Args:
        base_percentage: Stored base percentage
        raw_tiers: Stored tier table

    Returns:
        CommissionSchedule

    Raises:
        TierConfigurationError: On any invalid value
    """
    return CommissionSchedule(
        base_percentage=validate_base_percentage(base_percentage),
        tiers=tuple(parse_commission_tiers(raw_tiers)),
    )
