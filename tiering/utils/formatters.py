"""
Formatting utilities for money and percentages.

Used for log lines and dashboard labels.
"""

from decimal import Decimal

from tiering.core.money import HUNDRED, to_decimal


CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
}


def format_cents(amount_cents: int, currency: str = "USD") -> str:
    """
    Format minor currency units as a currency string.

    Args:
        amount_cents: Amount in minor units
        currency: ISO currency code

    Returns:
        Formatted string

    Example:
        >>> format_cents(290000)
        '$2,900.00'
        >>> format_cents(435, currency="SEK")
        '4.35 SEK'
    """
    value = Decimal(amount_cents) / HUNDRED
    formatted = f"{value:,.2f}"

    symbol = CURRENCY_SYMBOLS.get(currency.upper())
    if symbol:
        if formatted.startswith("-"):
            return f"-{symbol}{formatted[1:]}"
        return f"{symbol}{formatted}"
    return f"{formatted} {currency.upper()}"


def format_percentage(
    value: int | float | Decimal,
    decimals: int = 2,
) -> str:
    """
    Format a percentage value.

    Example:
        >>> format_percentage(12.5)
        '12.50%'
        >>> format_percentage(20, decimals=0)
        '20%'
    """
    return f"{to_decimal(value):.{decimals}f}%"
