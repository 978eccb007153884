"""Pytest configuration and shared fixtures for all tests."""

import os
import sys
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path

# Minimal environment for Settings() at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

# Add project root to PYTHONPATH
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from incentives.models import Base, ReferralEvent, ReferralStatus, ReferringParty


# In-memory SQLite for tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_engine():
    """Create test database engine with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    """Create test database session."""
    session_maker = async_sessionmaker(
        db_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def make_party(db_session):
    """
    Factory for referring parties.

    Returns:
        Async callable creating a flushed ReferringParty
    """
    async def _make(
        name: str = "Acme Partners",
        base: Decimal | int | str = Decimal("10"),
        tiers: list | None = None,
        is_active: bool = True,
    ) -> ReferringParty:
        party = ReferringParty(
            name=name,
            base_commission_percentage=Decimal(str(base)),
            tiered_commissions=tiers,
            is_active=is_active,
        )
        db_session.add(party)
        await db_session.flush()
        return party

    return _make


@pytest.fixture
def make_event(db_session):
    """
    Factory for referral events.

    Returns:
        Async callable creating a flushed ReferralEvent
    """
    async def _make(
        party: ReferringParty | None,
        referred_user_id: str,
        status: ReferralStatus = ReferralStatus.APPROVED,
        created_at: datetime | None = None,
        commission_paid: bool = False,
    ) -> ReferralEvent:
        event = ReferralEvent(
            referring_party_id=party.id if party else None,
            referred_user_id=referred_user_id,
            status=status.value,
            commission_paid=commission_paid,
            created_at=created_at or datetime.now(UTC),
        )
        db_session.add(event)
        await db_session.flush()
        return event

    return _make


@pytest.fixture
def make_approved_referrals(make_event):
    """
    Create ``count`` approved referrals for a party.

    Returns:
        Async callable returning the created events
    """
    async def _make(party: ReferringParty, count: int, prefix: str = "filler"):
        return [
            await make_event(party, f"{prefix}-{party.id}-{i}")
            for i in range(count)
        ]

    return _make
