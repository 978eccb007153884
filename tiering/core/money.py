"""
Money and percentage arithmetic.

Amounts are integer minor currency units (cents). All intermediate math is
done in Decimal and rounded once, half-up, to a whole number of units.
"""

from decimal import ROUND_HALF_UP, Decimal


WHOLE_UNIT = Decimal("1")
HUNDRED = Decimal("100")


def to_decimal(value: int | float | str | Decimal) -> Decimal:
    """
    Convert a number to Decimal without binary float artifacts.

    Example:
        >>> to_decimal(0.1)
        Decimal('0.1')
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Decimal) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Example:
        >>> round_half_up(Decimal("329.67"))
        330
        >>> round_half_up(Decimal("62.5"))
        63
    """
    return int(value.quantize(WHOLE_UNIT, rounding=ROUND_HALF_UP))


def calculate_commission_amount(
    amount_cents: int, percentage: int | float | str | Decimal
) -> int:
    """
    Calculate commission in cents.

    Formula: round_half_up(amount_cents * percentage / 100)

    Args:
        amount_cents: Subscription amount in minor units
        percentage: Commission percentage (e.g. 15 = 15%)

    Returns:
        Commission in minor units (0 for non-positive inputs)

    Example:
        >>> calculate_commission_amount(2900, 15)
        435
        >>> calculate_commission_amount(999, 33)
        330
    """
    if amount_cents <= 0:
        return 0

    rate = to_decimal(percentage)
    if rate <= 0:
        return 0

    return round_half_up(Decimal(amount_cents) * rate / HUNDRED)


def calculate_progress_percent(count: int, threshold: int) -> int:
    """
    Percentage of ``threshold`` reached by ``count``, capped at 100.

    A zero threshold is always complete.

    Example:
        >>> calculate_progress_percent(5, 8)
        63
        >>> calculate_progress_percent(0, 0)
        100
    """
    if threshold <= 0:
        return 100

    if count <= 0:
        return 0

    percent = round_half_up(Decimal(count) * HUNDRED / Decimal(threshold))
    return min(100, percent)
