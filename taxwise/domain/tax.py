"""Pure functions for South African income tax calculations.

This module contains the functional core for tax operations:
- No I/O operations
- No side effects
- Bracket tables are static data keyed by tax year

All monetary amounts are in cents (Money type).
"""

from dataclasses import dataclass

from taxwise.domain.errors import InvalidInputError
from taxwise.domain.models import Money, TaxDetails


@dataclass(frozen=True)
class TaxBracket:
    """One progressive bracket: tax owed at threshold plus marginal rate above it."""

    threshold: Money
    rate: float
    base: Money


@dataclass(frozen=True)
class TaxTable:
    """Bracket table and primary rebate for one tax year."""

    year: str
    brackets: tuple[TaxBracket, ...]
    primary_rebate: Money

    def __post_init__(self) -> None:
        if not self.brackets or self.brackets[0].threshold != 0:
            raise ValueError(f"Tax table {self.year} must start at a threshold of 0")
        thresholds = [b.threshold for b in self.brackets]
        if any(lower >= upper for lower, upper in zip(thresholds, thresholds[1:])):
            raise ValueError(f"Tax table {self.year} thresholds must be strictly ascending")


def _rands(amount: int) -> Money:
    return Money(amount * 100)


# 2024/2025 brackets were carried over unchanged from 2023/2024 and into 2025/2026
_BRACKETS_2024 = (
    TaxBracket(_rands(0), 0.18, _rands(0)),
    TaxBracket(_rands(237100), 0.26, _rands(42678)),
    TaxBracket(_rands(370500), 0.31, _rands(77362)),
    TaxBracket(_rands(512800), 0.36, _rands(121475)),
    TaxBracket(_rands(673000), 0.39, _rands(179147)),
    TaxBracket(_rands(857900), 0.41, _rands(251258)),
    TaxBracket(_rands(1817000), 0.45, _rands(644489)),
)

_BRACKETS_2022 = (
    TaxBracket(_rands(0), 0.18, _rands(0)),
    TaxBracket(_rands(226000), 0.26, _rands(40680)),
    TaxBracket(_rands(353100), 0.31, _rands(73726)),
    TaxBracket(_rands(488700), 0.36, _rands(115762)),
    TaxBracket(_rands(641400), 0.39, _rands(170734)),
    TaxBracket(_rands(817600), 0.41, _rands(239452)),
    TaxBracket(_rands(1731600), 0.45, _rands(614192)),
)

# Secondary and tertiary (age) rebates are not modelled
TAX_TABLES: dict[str, TaxTable] = {
    "2022/2023": TaxTable("2022/2023", _BRACKETS_2022, _rands(16425)),
    "2023/2024": TaxTable("2023/2024", _BRACKETS_2024, _rands(17235)),
    "2024/2025": TaxTable("2024/2025", _BRACKETS_2024, _rands(17235)),
    "2025/2026": TaxTable("2025/2026", _BRACKETS_2024, _rands(17235)),
}

DEFAULT_TAX_YEAR = "2024/2025"


def get_tax_table(year: str = DEFAULT_TAX_YEAR) -> TaxTable:
    """Look up the bracket table for a tax year.

    Args:
        year: Tax year label, e.g. "2024/2025".

    Returns:
        TaxTable for that year.

    Raises:
        InvalidInputError: If no table exists for the year.
    """
    try:
        return TAX_TABLES[year]
    except KeyError:
        known = ", ".join(sorted(TAX_TABLES))
        raise InvalidInputError(f"Unknown tax year '{year}'. Known years: {known}") from None


def select_bracket(taxable_income: Money, table: TaxTable) -> TaxBracket:
    """Select the highest bracket whose threshold does not exceed the income.

    Ties resolve to the higher bracket, so income exactly on a threshold
    is taxed at that threshold's rate.

    Raises:
        RuntimeError: If no bracket matches. Cannot happen for a valid table.
    """
    selected: TaxBracket | None = None
    for bracket in table.brackets:
        if bracket.threshold > taxable_income:
            break
        selected = bracket

    if selected is None:
        raise RuntimeError(f"No tax bracket in {table.year} covers an income of {taxable_income}")
    return selected


def compute_tax(monthly_salary: Money, table: TaxTable | None = None) -> TaxDetails:
    """Compute the tax breakdown for a gross monthly salary.

    Args:
        monthly_salary: Gross monthly salary in cents.
        table: Bracket table to use. Defaults to the current tax year.

    Returns:
        TaxDetails with annual and monthly figures in cents.

    Raises:
        InvalidInputError: If the salary is negative.
    """
    if monthly_salary < 0:
        raise InvalidInputError("Salary must not be negative")
    if table is None:
        table = get_tax_table()

    gross_annual = Money(monthly_salary * 12)
    taxable_income = gross_annual

    bracket = select_bracket(taxable_income, table)
    tax_before_rebate = Money(round(bracket.base + (taxable_income - bracket.threshold) * bracket.rate))

    annual_tax = Money(max(0, tax_before_rebate - table.primary_rebate))
    monthly_tax = Money(round(annual_tax / 12))
    net_monthly = Money(monthly_salary - monthly_tax)

    return TaxDetails(
        gross_annual=gross_annual,
        taxable_income=taxable_income,
        tax_before_rebate=tax_before_rebate,
        annual_tax=annual_tax,
        monthly_tax=monthly_tax,
        net_monthly=net_monthly,
        marginal_rate=bracket.rate,
    )
