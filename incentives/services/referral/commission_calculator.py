"""
Referral commission calculator.

Computes the commission a referring party earns when a referred user
confirms a paid subscription, and stores it on the referral event.

"No commission due" (no approved attribution, inactive party, free plan)
is a normal outcome and returns None. Storage and configuration errors
propagate to the caller.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from incentives.config.business_constants import (
    SubscriptionPlan,
    get_plan_price_cents,
)
from incentives.repositories.referral_event_repository import (
    ReferralEventRepository,
)
from incentives.repositories.referring_party_repository import (
    ReferringPartyRepository,
)
from incentives.services.base_service import BaseService, log_operation
from tiering.core.money import calculate_commission_amount
from tiering.utils.formatters import format_cents, format_percentage


@dataclass(frozen=True)
class SubscriptionEvent:
    """Confirmed subscription reported by the billing system."""

    referred_user_id: str
    amount_cents: int | None
    plan: SubscriptionPlan | str | None = None
    referring_party_id: int | None = None


@dataclass(frozen=True)
class CommissionResult:
    """Commission computed for one referral event."""

    referring_party_id: int
    referring_party_name: str
    referral_event_id: int
    percentage: Decimal
    commission_amount_cents: int
    qualifying_count: int


class CommissionCalculator(BaseService):
    """
    Commission calculator for referring parties.

    The qualifying count is read from storage on every call, so each
    commission reflects the number of approved referrals at the moment it
    was computed. Calling again for the same user after more approvals
    recomputes the percentage and overwrites the stored amount.
    """

    def __init__(self, session: AsyncSession, currency: str = "USD") -> None:
        """
        Initialize commission calculator.

        Args:
            session: Async database session
            currency: ISO code used in log lines
        """
        super().__init__(session)
        self.currency = currency
        self.event_repo = ReferralEventRepository(session)
        self.party_repo = ReferringPartyRepository(session)

    @log_operation
    async def compute_commission(
        self,
        referred_user_id: str,
        subscription_amount_cents: int | None,
        *,
        referring_party_id: int | None = None,
        plan: SubscriptionPlan | str | None = None,
        commit: bool = False,
    ) -> CommissionResult | None:
        """
        Compute and store the commission for a referred user's subscription.

        The referring party is found through the user's approved referral,
        so ``referring_party_id`` is optional. When the caller already knows
        the party it passes the id, and a user attributed to a different
        party earns nothing.

        Args:
            referred_user_id: External ID of the subscribing user
            subscription_amount_cents: Charged amount in minor units; None
                means "use the list price of ``plan``"
            referring_party_id: Only compute if the user is attributed to
                this party
            plan: Subscription plan label, used when no amount is given
            commit: Commit the session after writing (default: leave the
                transaction to the caller)

        Returns:
            CommissionResult, or None when no commission is due

        Raises:
            TierConfigurationError: If the party's tier table is malformed
            SQLAlchemyError: On lookup or update failure
        """
        event = await self.event_repo.find_approved_by_referred_user(
            referred_user_id
        )
        if event is None or event.referring_party is None:
            self.logger.debug(
                "No commission: user has no approved party referral",
                extra={"referred_user_id": referred_user_id},
            )
            return None

        party = event.referring_party

        if referring_party_id is not None and party.id != referring_party_id:
            self.logger.debug(
                "No commission: user is attributed to another party",
                extra={
                    "referred_user_id": referred_user_id,
                    "expected_party_id": referring_party_id,
                    "actual_party_id": party.id,
                },
            )
            return None

        if not party.is_active:
            self.logger.debug(
                "No commission: referring party is inactive",
                extra={"referring_party_id": party.id},
            )
            return None

        amount_cents = self._effective_amount(subscription_amount_cents, plan)
        if amount_cents <= 0:
            self.logger.debug(
                "No commission: free subscription",
                extra={
                    "referred_user_id": referred_user_id,
                    "plan": getattr(plan, "value", plan),
                },
            )
            return None

        # Validate before counting so bad configuration fails fast
        schedule = self.party_repo.commission_schedule_for(party)

        qualifying_count = await self.event_repo.count_approved_by_party(
            party.id
        )
        percentage = schedule.resolve(qualifying_count)
        commission_cents = calculate_commission_amount(amount_cents, percentage)

        await self.event_repo.update_commission(
            event.id,
            percentage=percentage,
            amount_cents=commission_cents,
        )

        if commit:
            await self.commit()

        self.logger.info(
            f"Commission computed: {format_cents(commission_cents, self.currency)} "
            f"({format_percentage(percentage)} of "
            f"{format_cents(amount_cents, self.currency)})",
            extra={
                "referring_party_id": party.id,
                "referral_event_id": event.id,
                "qualifying_count": qualifying_count,
            },
        )

        return CommissionResult(
            referring_party_id=party.id,
            referring_party_name=party.name,
            referral_event_id=event.id,
            percentage=percentage,
            commission_amount_cents=commission_cents,
            qualifying_count=qualifying_count,
        )

    async def process_subscription(
        self,
        subscription: SubscriptionEvent,
        commit: bool = False,
    ) -> CommissionResult | None:
        """
        Compute the commission for a confirmed subscription event.

        Args:
            subscription: Event from the billing system
            commit: Commit the session after writing

        Returns:
            CommissionResult, or None when no commission is due
        """
        return await self.compute_commission(
            subscription.referred_user_id,
            subscription.amount_cents,
            plan=subscription.plan,
            referring_party_id=subscription.referring_party_id,
            commit=commit,
        )

    @staticmethod
    def _effective_amount(
        amount_cents: int | None,
        plan: SubscriptionPlan | str | None,
    ) -> int:
        if amount_cents is not None:
            return amount_cents
        if plan is None:
            return 0
        return get_plan_price_cents(plan)
