"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from incentives.models.base import Base
from incentives.models.enums import ReferralStatus
from incentives.models.referral_event import ReferralEvent
from incentives.models.referring_party import ReferringParty

__all__ = [
    # Base
    "Base",
    # Enums
    "ReferralStatus",
    # Models
    "ReferralEvent",
    "ReferringParty",
]
