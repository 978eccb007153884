"""Database engine and session factory."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from incentives.config.settings import Settings


def create_engine(config: Settings) -> AsyncEngine:
    """Create the async engine from settings."""
    return create_async_engine(
        config.database_url,
        echo=config.database_echo,
        pool_pre_ping=True,
    )


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session maker bound to ``engine``."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def transaction(
    session_maker: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """
    Open a session and run the block in one transaction.

    Commits on success, rolls back and re-raises on any error.

    Example:
        async with transaction(session_maker) as session:
            await CommissionCalculator(session).compute_commission("user-1", 2900)
    """
    async with session_maker() as session:
        async with session.begin():
            yield session
