"""
Repositories.

Data access for referral events and referring parties.
"""

from incentives.repositories.base import BaseRepository
from incentives.repositories.referral_event_repository import (
    ReferralEventRepository,
)
from incentives.repositories.referring_party_repository import (
    ReferringPartyRepository,
)

__all__ = [
    "BaseRepository",
    "ReferralEventRepository",
    "ReferringPartyRepository",
]
