"""
Enumerations shared by models and services.
"""

from enum import Enum


class ReferralStatus(str, Enum):
    """Approval status of a referral event."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
