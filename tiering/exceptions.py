"""Exceptions raised by the tiering package."""


class TieringError(Exception):
    """Base class for tiering errors."""
    pass


class TierConfigurationError(TieringError, ValueError):
    """
    Raised when a threshold table is malformed.

    Attributes:
        index: Position of the offending entry, if known
    """

    def __init__(self, message: str, index: int | None = None) -> None:
        self.index = index
        if index is not None:
            message = f"entry {index}: {message}"
        super().__init__(message)
