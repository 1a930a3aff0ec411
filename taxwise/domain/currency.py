"""Pure functions for currency conversion and display formatting.

Amounts here are major-unit floats (rands, dollars). Stored amounts
are always canonical cents; convert with to_major() before display and
to_minor() after reading user input. Converted values are never stored.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from taxwise.domain.errors import InvalidInputError
from taxwise.domain.models import CANONICAL_CURRENCY, CurrencyCode


@dataclass(frozen=True)
class CurrencyInfo:
    """Display details for a currency."""

    code: CurrencyCode
    symbol: str
    rate: float  # Units of this currency per one canonical unit


CURRENCIES: dict[CurrencyCode, CurrencyInfo] = {
    CurrencyCode("ZAR"): CurrencyInfo(CurrencyCode("ZAR"), "R", 1.0),
    CurrencyCode("USD"): CurrencyInfo(CurrencyCode("USD"), "$", 1 / 18.5),  # 1 USD = 18.5 ZAR
    CurrencyCode("EUR"): CurrencyInfo(CurrencyCode("EUR"), "€", 1 / 20.0),  # 1 EUR = 20.0 ZAR
}


def get_currency(code: str, currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None) -> CurrencyInfo:
    """Look up a supported currency.

    Raises:
        InvalidInputError: If the code is not supported.
    """
    table = CURRENCIES if currencies is None else currencies
    info = table.get(CurrencyCode(code.upper()))
    if info is None:
        raise InvalidInputError(f"Unsupported currency '{code}'. Supported: {', '.join(table)}")
    return info


def to_display(
    amount: float,
    currency: str,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> float:
    """Convert a canonical amount to the display currency."""
    return amount * get_currency(currency, currencies).rate


def to_canonical(
    amount: float,
    currency: str,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> float:
    """Convert a display-currency amount back to the canonical currency."""
    return amount / get_currency(currency, currencies).rate


def format_money(
    amount: float,
    currency: str,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> str:
    """Format an amount with currency symbol, thousands grouping and two decimals.

    Examples:
        >>> format_money(1234.5, "ZAR")
        'R 1,234.50'
    """
    symbol = get_currency(currency, currencies).symbol
    return f"{symbol} {amount:,.2f}"


def build_currency_table(overrides: Mapping[str, Any] | None = None) -> dict[CurrencyCode, CurrencyInfo]:
    """Merge configured currencies into the static table.

    Args:
        overrides: Mapping of currency code to {"symbol": str, "rate": float}.

    Returns:
        New currency table including the overrides.

    Raises:
        InvalidInputError: If the overrides are not a mapping, an override is
            malformed or has a non-positive rate, or the canonical currency's
            rate is changed.
    """
    if overrides is None:
        overrides = {}
    if not isinstance(overrides, Mapping):
        raise InvalidInputError("Currencies must be a table of currency codes")

    table = dict(CURRENCIES)
    for raw_code, details in overrides.items():
        code = CurrencyCode(raw_code.upper())
        if not isinstance(details, Mapping):
            raise InvalidInputError(f"Currency '{code}' must be a table with 'symbol' and 'rate'")

        existing = table.get(code)
        symbol = details.get("symbol", existing.symbol if existing else None)
        rate = details.get("rate", existing.rate if existing else None)

        if not isinstance(symbol, str) or not symbol:
            raise InvalidInputError(f"Currency '{code}' needs a symbol")
        if isinstance(rate, bool) or not isinstance(rate, (int, float)) or rate <= 0:
            raise InvalidInputError(f"Currency '{code}' needs a positive rate")
        if code == CANONICAL_CURRENCY and rate != 1:
            raise InvalidInputError(f"{CANONICAL_CURRENCY} is the canonical currency and must keep a rate of 1")

        table[code] = CurrencyInfo(code, symbol, float(rate))
    return table
