"""
Integration tests for CommissionCalculator.

Runs against an in-memory SQLite database.

Tests cover:
- No-commission outcomes (no attribution, inactive party, free plan)
- Base and tiered percentages
- Recomputation after more approvals
- Plan price fallback
- Configuration and storage errors propagating
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest
from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from incentives.models import ReferralEvent, ReferralStatus
from incentives.repositories import ReferralEventRepository
from incentives.services.referral import (
    CommissionCalculator,
    CommissionResult,
    SubscriptionEvent,
)
from tiering.exceptions import TierConfigurationError


TIERS = [
    {"user_count": 10, "percentage": 15},
    {"user_count": 25, "percentage": 20},
    {"user_count": 50, "percentage": 25},
]


class TestNoCommissionDue:
    """Cases where no commission is computed."""

    @pytest.mark.asyncio
    async def test_user_without_referral(self, db_session):
        """Unknown user gets no commission."""
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission("nobody", 2900)

        assert result is None

    @pytest.mark.asyncio
    async def test_pending_referral(self, db_session, make_party, make_event):
        """Only approved referrals earn commission."""
        party = await make_party()
        event = await make_event(party, "user-1", status=ReferralStatus.PENDING)
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission("user-1", 2900)

        assert result is None
        await db_session.refresh(event)
        assert event.commission_amount_cents is None

    @pytest.mark.asyncio
    async def test_referral_without_party(self, db_session, make_event):
        """Plain user-to-user referral earns no party commission."""
        await make_event(None, "user-1")
        calculator = CommissionCalculator(db_session)

        assert await calculator.compute_commission("user-1", 2900) is None

    @pytest.mark.asyncio
    async def test_inactive_party(self, db_session, make_party, make_event):
        """Deactivated party earns nothing."""
        party = await make_party(is_active=False)
        event = await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission("user-1", 2900)

        assert result is None
        await db_session.refresh(event)
        assert event.commission_percentage is None

    @pytest.mark.asyncio
    async def test_zero_amount(self, db_session, make_party, make_event):
        """Free subscription earns nothing."""
        party = await make_party()
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        assert await calculator.compute_commission("user-1", 0) is None

    @pytest.mark.asyncio
    async def test_basic_plan_fallback(self, db_session, make_party, make_event):
        """BASIC list price is zero, so nothing is due."""
        party = await make_party()
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission(
            "user-1", None, plan="BASIC"
        )

        assert result is None

    @pytest.mark.asyncio
    async def test_other_party_expected(
        self, db_session, make_party, make_event
    ):
        """Caller-supplied party must match the attribution."""
        party = await make_party()
        other = await make_party(name="Other")
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission(
            "user-1", 2900, referring_party_id=other.id
        )

        assert result is None


class TestCommissionComputation:
    """Cases where a commission is computed and stored."""

    @pytest.mark.asyncio
    async def test_base_percentage(self, db_session, make_party, make_event):
        """Below every tier the base percentage applies."""
        party = await make_party(base=10, tiers=TIERS)
        event = await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission(
            "user-1", 2900, referring_party_id=party.id
        )

        assert isinstance(result, CommissionResult)
        assert result.referring_party_id == party.id
        assert result.referring_party_name == "Acme Partners"
        assert result.referral_event_id == event.id
        assert result.qualifying_count == 1
        assert result.percentage == Decimal("10")
        assert result.commission_amount_cents == 290

        await db_session.refresh(event)
        assert event.commission_percentage == Decimal("10")
        assert event.commission_amount_cents == 290
        assert event.has_commission

    @pytest.mark.asyncio
    async def test_tier_override(
        self, db_session, make_party, make_event, make_approved_referrals
    ):
        """Thirty approved referrals resolve to the 25-referral tier."""
        party = await make_party(base=10, tiers=TIERS)
        await make_approved_referrals(party, 29)
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission("user-1", 2900)

        assert result.qualifying_count == 30
        assert result.percentage == Decimal("20")
        assert result.commission_amount_cents == 580

    @pytest.mark.asyncio
    async def test_unordered_stored_tiers(
        self, db_session, make_party, make_event, make_approved_referrals
    ):
        """Stored tier order does not matter."""
        party = await make_party(base=10, tiers=list(reversed(TIERS)))
        await make_approved_referrals(party, 11)
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission("user-1", 2900)

        assert result.percentage == Decimal("15")
        assert result.commission_amount_cents == 435

    @pytest.mark.asyncio
    async def test_half_up_rounding(self, db_session, make_party, make_event):
        """Fractional cents round half up."""
        party = await make_party(base=33)
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission("user-1", 999)

        assert result.commission_amount_cents == 330

    @pytest.mark.asyncio
    async def test_pending_and_rejected_not_counted(
        self, db_session, make_party, make_event, make_approved_referrals
    ):
        """Only approved referrals count toward tiers."""
        party = await make_party(base=10, tiers=TIERS)
        await make_approved_referrals(party, 8)
        await make_event(party, "p-1", status=ReferralStatus.PENDING)
        await make_event(party, "r-1", status=ReferralStatus.REJECTED)
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission("user-1", 2900)

        assert result.qualifying_count == 9
        assert result.percentage == Decimal("10")

    @pytest.mark.asyncio
    async def test_recompute_after_more_approvals(
        self, db_session, make_party, make_event, make_approved_referrals
    ):
        """Second call sees the new count and overwrites the stored amount."""
        party = await make_party(base=10, tiers=TIERS)
        await make_approved_referrals(party, 8)
        event = await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        first = await calculator.compute_commission("user-1", 2900)
        await make_approved_referrals(party, 1, prefix="late")
        second = await calculator.compute_commission("user-1", 2900)

        assert first.percentage == Decimal("10")
        assert first.commission_amount_cents == 290
        assert second.qualifying_count == 10
        assert second.percentage == Decimal("15")
        assert second.commission_amount_cents == 435

        await db_session.refresh(event)
        assert event.commission_amount_cents == 435

    @pytest.mark.asyncio
    async def test_same_inputs_same_result(
        self, db_session, make_party, make_event
    ):
        """Repeating the call without changes is stable."""
        party = await make_party(base=10)
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        first = await calculator.compute_commission("user-1", 2900)
        second = await calculator.compute_commission("user-1", 2900)

        assert first == second

    @pytest.mark.asyncio
    async def test_paid_flag_untouched(
        self, db_session, make_party, make_event
    ):
        """Payout state belongs to the payout process."""
        party = await make_party(base=10)
        paid = await make_event(party, "user-1", commission_paid=True)
        calculator = CommissionCalculator(db_session)

        await calculator.compute_commission("user-1", 2900)

        await db_session.refresh(paid)
        assert paid.commission_paid is True
        assert paid.commission_amount_cents == 290

    @pytest.mark.asyncio
    async def test_unpaid_flag_stays_false(
        self, db_session, make_party, make_event
    ):
        """New commissions are not marked paid."""
        party = await make_party(base=10)
        event = await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        await calculator.compute_commission("user-1", 2900)

        await db_session.refresh(event)
        assert event.commission_paid is False

    @pytest.mark.asyncio
    async def test_plan_price_fallback(
        self, db_session, make_party, make_event
    ):
        """Missing amount falls back to the plan list price."""
        party = await make_party(base=10)
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission(
            "user-1", None, plan="premium"
        )

        assert result.commission_amount_cents == 790

    @pytest.mark.asyncio
    async def test_earliest_attribution_wins(
        self, db_session, make_party, make_event
    ):
        """User with two approved referrals credits the earliest party."""
        first_party = await make_party(name="First", base=10)
        second_party = await make_party(name="Second", base=20)
        now = datetime.now(UTC)
        await make_event(
            second_party, "user-1", created_at=now - timedelta(days=1)
        )
        await make_event(
            first_party, "user-1", created_at=now - timedelta(days=3)
        )
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission("user-1", 2900)

        assert result.referring_party_id == first_party.id

    @pytest.mark.asyncio
    async def test_process_subscription(
        self, db_session, make_party, make_event
    ):
        """Billing events are processed like direct calls."""
        party = await make_party(base=15)
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.process_subscription(
            SubscriptionEvent(referred_user_id="user-1", amount_cents=2900)
        )

        assert result.commission_amount_cents == 435

    @pytest.mark.asyncio
    async def test_process_subscription_with_party(
        self, db_session, make_party, make_event
    ):
        """Billing events naming a party are checked against attribution."""
        party = await make_party(base=15)
        other = await make_party(name="Other")
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        mismatched = await calculator.process_subscription(
            SubscriptionEvent(
                referred_user_id="user-1",
                amount_cents=2900,
                referring_party_id=other.id,
            )
        )
        matched = await calculator.process_subscription(
            SubscriptionEvent(
                referred_user_id="user-1",
                amount_cents=2900,
                referring_party_id=party.id,
            )
        )

        assert mismatched is None
        assert matched.referring_party_id == party.id

    @pytest.mark.asyncio
    async def test_commit_persists(
        self, db_engine, db_session, make_party, make_event
    ):
        """With commit=True the result is visible to other sessions."""
        party = await make_party(base=10)
        event = await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        await calculator.compute_commission("user-1", 2900, commit=True)

        session_maker = async_sessionmaker(db_engine, class_=AsyncSession)
        async with session_maker() as other:
            stored = await other.scalar(
                select(ReferralEvent.commission_amount_cents).where(
                    ReferralEvent.id == event.id
                )
            )

        assert stored == 290


class TestConfigurationErrors:
    """Malformed configuration fails instead of defaulting."""

    @pytest.mark.asyncio
    async def test_out_of_range_tier(
        self, db_session, make_party, make_event
    ):
        """Tier percentage above 100 raises."""
        party = await make_party(
            base=10, tiers=[{"user_count": 1, "percentage": 150}]
        )
        event = await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        with pytest.raises(TierConfigurationError):
            await calculator.compute_commission("user-1", 2900)

        await db_session.refresh(event)
        assert event.commission_amount_cents is None

    @pytest.mark.asyncio
    async def test_duplicate_tier_threshold(
        self, db_session, make_party, make_event
    ):
        """Ambiguous tier tables raise."""
        party = await make_party(
            base=10,
            tiers=[
                {"user_count": 1, "percentage": 15},
                {"user_count": 1, "percentage": 20},
            ],
        )
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        with pytest.raises(TierConfigurationError, match="duplicate"):
            await calculator.compute_commission("user-1", 2900)

    @pytest.mark.asyncio
    async def test_malformed_tier_entry(
        self, db_session, make_party, make_event
    ):
        """Tier without a threshold raises."""
        party = await make_party(base=10, tiers=[{"percentage": 15}])
        await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        with pytest.raises(TierConfigurationError):
            await calculator.compute_commission("user-1", 2900)

    @pytest.mark.asyncio
    async def test_sub_cent_tier_percentage(
        self, db_session, make_party, make_event
    ):
        """Percentages the DECIMAL(5, 2) column cannot hold are rejected."""
        party = await make_party(
            base=10, tiers=[{"user_count": 1, "percentage": 12.345}]
        )
        event = await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        with pytest.raises(TierConfigurationError, match="decimal places"):
            await calculator.compute_commission("user-1", 100000)

        await db_session.refresh(event)
        assert event.commission_percentage is None


class TestStoredPercentageMatchesAmount:
    """Stored percentage reproduces the stored amount."""

    @pytest.mark.asyncio
    async def test_two_decimal_percentage_round_trips(
        self, db_session, make_party, make_event
    ):
        """A 12.35% tier is stored exactly and explains the amount."""
        party = await make_party(
            base=10, tiers=[{"user_count": 1, "percentage": 12.35}]
        )
        event = await make_event(party, "user-1")
        calculator = CommissionCalculator(db_session)

        result = await calculator.compute_commission("user-1", 100000)

        await db_session.refresh(event)
        assert result.percentage == Decimal("12.35")
        assert event.commission_percentage == result.percentage
        assert event.commission_amount_cents == 12350


class TestStorageErrors:
    """Storage failures propagate instead of reading as "no commission"."""

    @pytest.fixture
    def error_log(self):
        """Collect ERROR records emitted while the test runs."""
        records = []
        handler_id = logger.add(
            lambda message: records.append(message.record), level="ERROR"
        )
        yield records
        logger.remove(handler_id)

    @pytest.mark.asyncio
    async def test_update_failure_raises(
        self, db_session, make_party, make_event, monkeypatch, error_log
    ):
        """Failed commission write re-raises the original error."""
        party = await make_party(base=10)
        await make_event(party, "user-1")
        failure = SQLAlchemyError("update failed")

        async def failing_update(self, event_id, percentage, amount_cents):
            raise failure

        monkeypatch.setattr(
            ReferralEventRepository, "update_commission", failing_update
        )
        calculator = CommissionCalculator(db_session)

        with pytest.raises(SQLAlchemyError) as exc_info:
            await calculator.compute_commission("user-1", 2900)

        assert exc_info.value is failure
        assert [r["message"] for r in error_log] == [
            "Failed compute_commission"
        ]
        assert error_log[0]["extra"]["service"] == "CommissionCalculator"
        assert error_log[0]["extra"]["extra"]["error_type"] == "SQLAlchemyError"

    @pytest.mark.asyncio
    async def test_count_failure_raises(
        self, db_session, make_party, make_event, monkeypatch, error_log
    ):
        """Failed qualifying count is not turned into a None result."""
        party = await make_party(base=10)
        event = await make_event(party, "user-1")

        async def failing_count(self, referring_party_id):
            raise OperationalError("SELECT count", {}, Exception("db down"))

        monkeypatch.setattr(
            ReferralEventRepository, "count_approved_by_party", failing_count
        )
        calculator = CommissionCalculator(db_session)

        with pytest.raises(OperationalError):
            await calculator.compute_commission("user-1", 2900)

        await db_session.refresh(event)
        assert event.commission_amount_cents is None
        assert len(error_log) == 1
