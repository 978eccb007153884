"""Pydantic models for tier tables and reward progress."""

from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from tiering.core.resolver import resolve_commission_percentage


class CommissionTier(BaseModel):
    """One row of a tiered commission table.

    Stored configuration uses ``user_count``; both names are accepted.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    threshold_count: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("threshold_count", "user_count"),
        description="Approved referrals required for this tier",
    )
    percentage: Decimal = Field(
        ..., ge=0, le=100, description="Commission percentage (0-100)"
    )


class CommissionSchedule(BaseModel):
    """Validated commission configuration of a referring party."""

    model_config = ConfigDict(frozen=True)

    base_percentage: Decimal = Field(..., ge=0, le=100)
    tiers: tuple[CommissionTier, ...] = Field(default_factory=tuple)

    def resolve(self, qualifying_count: int) -> Decimal:
        """Return the percentage applicable for ``qualifying_count``."""
        return resolve_commission_percentage(
            self.tiers, qualifying_count, self.base_percentage
        )


class RewardTier(BaseModel):
    """Catalog entry of the reward ladder."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    threshold_count: int = Field(
        ...,
        ge=0,
        validation_alias=AliasChoices("threshold_count", "requirement"),
    )
    description: str
    icon: str | None = None


class RewardProgressEntry(BaseModel):
    """Progress toward a single reward."""

    model_config = ConfigDict(frozen=True)

    id: int
    threshold_count: int
    progress_percent: int = Field(..., ge=0, le=100)
    unlocked: bool
    is_next: bool


class RewardProgress(BaseModel):
    """Reward ladder state for one referral count."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(..., ge=0)
    unlocked: list[RewardTier]
    current: RewardTier | None = Field(
        default=None, description="Highest unlocked reward"
    )
    next: RewardTier | None = Field(
        default=None, description="First reward not yet unlocked"
    )
    per_reward: list[RewardProgressEntry]
    remaining_to_next: int | None = None
    next_goal: int | None = Field(
        default=None,
        description="Threshold of the next reward, or the top threshold once all are unlocked",
    )

    @property
    def unlocked_count(self) -> int:
        return len(self.unlocked)
