"""Tests for taxwise.domain.currency pure functions."""

import pytest

from taxwise.domain.currency import (
    CURRENCIES,
    build_currency_table,
    format_money,
    get_currency,
    to_canonical,
    to_display,
)
from taxwise.domain.errors import InvalidInputError


class TestConversion:
    """Tests for to_display and to_canonical."""

    def test_canonical_currency_is_identity(self) -> None:
        """Should leave ZAR amounts unchanged."""
        assert to_display(1234.56, "ZAR") == 1234.56
        assert to_canonical(1234.56, "ZAR") == 1234.56

    def test_to_display_usd(self) -> None:
        """Should divide by 18.5 ZAR per dollar."""
        assert to_display(185.0, "USD") == pytest.approx(10.0)

    def test_to_canonical_eur(self) -> None:
        """Should multiply by 20 ZAR per euro."""
        assert to_canonical(10.0, "EUR") == pytest.approx(200.0)

    @pytest.mark.parametrize("code", list(CURRENCIES))
    @pytest.mark.parametrize("amount", [0.0, 0.01, 99.99, 38697.33, 1_000_000.0])
    def test_round_trip(self, code: str, amount: float) -> None:
        """Should return to the original amount within float tolerance."""
        assert to_display(to_canonical(amount, code), code) == pytest.approx(amount)

    def test_negative_amounts_convert(self) -> None:
        """Should convert negative balances rather than rejecting them."""
        assert to_display(-370.0, "USD") == pytest.approx(-20.0)

    def test_lowercase_code_accepted(self) -> None:
        """Should accept currency codes in any case."""
        assert get_currency("usd").code == "USD"

    def test_unknown_currency_rejected(self) -> None:
        """Should reject unsupported currency codes."""
        with pytest.raises(InvalidInputError, match="Unsupported currency"):
            to_display(1.0, "JPY")


class TestFormatMoney:
    """Tests for format_money."""

    def test_formats_with_symbol_and_two_decimals(self) -> None:
        """Should group thousands and pad to two decimals."""
        assert format_money(1234.5, "ZAR") == "R 1,234.50"

    def test_rounds_to_cents(self) -> None:
        """Should round to two decimal places."""
        assert format_money(1234567.891, "USD") == "$ 1,234,567.89"

    def test_euro_symbol(self) -> None:
        """Should use the euro sign."""
        assert format_money(0, "EUR") == "€ 0.00"

    def test_negative_amount(self) -> None:
        """Should keep the sign after the symbol."""
        assert format_money(-50, "ZAR") == "R -50.00"


class TestBuildCurrencyTable:
    """Tests for build_currency_table."""

    def test_adds_new_currency(self) -> None:
        """Should add configured currencies alongside the static ones."""
        table = build_currency_table({"gbp": {"symbol": "£", "rate": 0.043}})

        assert table["GBP"].symbol == "£"
        assert table["GBP"].rate == 0.043
        assert "ZAR" in table

    def test_override_keeps_missing_fields(self) -> None:
        """Should keep the existing symbol when only the rate is overridden."""
        table = build_currency_table({"USD": {"rate": 0.055}})

        assert table["USD"].symbol == "$"
        assert table["USD"].rate == 0.055

    def test_does_not_mutate_static_table(self) -> None:
        """Should leave the module-level table alone."""
        build_currency_table({"USD": {"rate": 0.055}})

        assert CURRENCIES["USD"].rate == pytest.approx(1 / 18.5)

    @pytest.mark.parametrize("rate", [0, -1, "fast", True])
    def test_rejects_bad_rate(self, rate: object) -> None:
        """Should require a positive numeric rate."""
        with pytest.raises(InvalidInputError):
            build_currency_table({"GBP": {"symbol": "£", "rate": rate}})

    def test_rejects_missing_symbol(self) -> None:
        """Should require a symbol for new currencies."""
        with pytest.raises(InvalidInputError):
            build_currency_table({"GBP": {"rate": 0.043}})

    def test_canonical_rate_fixed(self) -> None:
        """Should refuse to change the canonical currency's rate."""
        with pytest.raises(InvalidInputError):
            build_currency_table({"ZAR": {"rate": 2}})

    def test_rejects_non_table(self) -> None:
        """Should reject overrides that are not a mapping of codes."""
        with pytest.raises(InvalidInputError, match="table"):
            build_currency_table("x")  # type: ignore[arg-type]
