"""
Exception handling utilities.

Defines the engine's exception types and the categories callers use to
tell "no commission due" apart from "failed to compute".
"""

from sqlalchemy.exc import SQLAlchemyError

from tiering.exceptions import TierConfigurationError


class IncentiveEngineError(Exception):
    """Base class for incentive engine errors."""
    pass


class ReferringPartyNotFoundError(IncentiveEngineError, LookupError):
    """Raised when a referring party ID does not exist."""

    def __init__(self, referring_party_id: int) -> None:
        self.referring_party_id = referring_party_id
        super().__init__(f"Referring party {referring_party_id} not found")


# Exception categories based on handling strategy

# Configuration problems - fix the stored tier table, retrying will not help
CONFIGURATION_ERRORS = (
    TierConfigurationError,
)

# Storage failures - propagate to the caller, retry policy lives there
STORAGE_ERRORS = (
    SQLAlchemyError,
)


def is_configuration_error(exc: Exception) -> bool:
    """
    Check if exception comes from malformed configuration.

    Args:
        exc: Exception to check

    Returns:
        True if the exception is a configuration error
    """
    return isinstance(exc, CONFIGURATION_ERRORS)


def is_storage_error(exc: Exception) -> bool:
    """
    Check if exception comes from the database layer.

    Args:
        exc: Exception to check

    Returns:
        True if the exception is a storage error
    """
    return isinstance(exc, STORAGE_ERRORS)


__all__ = [
    "IncentiveEngineError",
    "ReferringPartyNotFoundError",
    "TierConfigurationError",
    "CONFIGURATION_ERRORS",
    "STORAGE_ERRORS",
    "is_configuration_error",
    "is_storage_error",
]
