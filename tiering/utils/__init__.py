"""Formatting helpers for tiering results."""

from tiering.utils.formatters import format_cents, format_percentage

__all__ = [
    "format_cents",
    "format_percentage",
]
