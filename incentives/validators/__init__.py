"""
Configuration validators.

Converts stored, loosely typed configuration into checked tiering models.
"""

from incentives.validators.tiers import (
    build_commission_schedule,
    parse_commission_tiers,
    validate_base_percentage,
)

__all__ = [
    "build_commission_schedule",
    "parse_commission_tiers",
    "validate_base_percentage",
]
