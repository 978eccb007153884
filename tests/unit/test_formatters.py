"""Unit tests for money and percentage formatting."""

from decimal import Decimal

from tiering.utils.formatters import format_cents, format_percentage


class TestFormatCents:
    """Test minor-unit formatting."""

    def test_usd_symbol(self):
        """USD amounts use the dollar sign and thousands separator."""
        assert format_cents(290000) == "$2,900.00"
        assert format_cents(435) == "$4.35"

    def test_euro_symbol(self):
        """EUR amounts use the euro sign."""
        assert format_cents(100, currency="eur") == "€1.00"

    def test_unknown_currency_suffix(self):
        """Currencies without a symbol get the ISO code suffix."""
        assert format_cents(435, currency="SEK") == "4.35 SEK"

    def test_negative_amount(self):
        """Sign goes before the symbol."""
        assert format_cents(-435) == "-$4.35"

    def test_zero(self):
        """Zero is formatted with two decimals."""
        assert format_cents(0) == "$0.00"


class TestFormatPercentage:
    """Test percentage formatting."""

    def test_default_decimals(self):
        """Two decimals by default."""
        assert format_percentage(Decimal("15")) == "15.00%"
        assert format_percentage(12.5) == "12.50%"

    def test_custom_decimals(self):
        """Decimals can be reduced."""
        assert format_percentage(20, decimals=0) == "20%"
