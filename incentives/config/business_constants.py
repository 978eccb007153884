"""
Business constants for the incentive engine.

Central location for subscription pricing and commission limits.
"""

from decimal import Decimal
from enum import Enum

from tiering.constants import DEFAULT_REWARD_CATALOG


class SubscriptionPlan(str, Enum):
    """Subscription plans sold to referred users."""

    BASIC = "BASIC"
    STANDARD = "STANDARD"
    PREMIUM = "PREMIUM"


# Monthly list price per plan in cents
PLAN_PRICES_CENTS: dict[SubscriptionPlan, int] = {
    SubscriptionPlan.BASIC: 0,  # Free tier
    SubscriptionPlan.STANDARD: 2900,  # $29/month
    SubscriptionPlan.PREMIUM: 7900,  # $79/month
}

MIN_COMMISSION_PERCENTAGE = Decimal("0")
MAX_COMMISSION_PERCENTAGE = Decimal("100")

# Reward ladder shown on the referral dashboard
REWARD_CATALOG = DEFAULT_REWARD_CATALOG


def get_plan_price_cents(plan: SubscriptionPlan | str) -> int:
    """
    Get list price of a plan.

    Args:
        plan: Plan enum or its label (case-insensitive)

    Returns:
        Price in cents, 0 for unknown labels
    """
    try:
        plan = SubscriptionPlan(plan.upper() if isinstance(plan, str) else plan)
    except ValueError:
        return 0
    return PLAN_PRICES_CENTS[plan]
