"""Pure functions building the display view of a budget.

A snapshot holds everything a renderer needs (the terminal report, a
spreadsheet summary, or an external chart) already aggregated and
converted to the display currency. Renderers never see canonical cents.
"""

from collections.abc import Mapping
from dataclasses import dataclass

from taxwise.domain.budget import BudgetSummary, summarize_budget
from taxwise.domain.currency import CurrencyInfo, to_display
from taxwise.domain.errors import InvalidInputError
from taxwise.domain.models import BudgetState, CurrencyCode, Money, to_major
from taxwise.domain.tax import TaxTable

SORT_ORDERS = ("value", "alpha", "entry")


@dataclass(frozen=True)
class CategoryShare:
    """Immutable display data for one breakdown label."""

    label: str
    amount: float
    percentage: float  # Share of total expenses, 0-100


@dataclass(frozen=True)
class ExpenseLine:
    """Immutable display data for one expense."""

    id: str
    label: str
    amount: float


@dataclass(frozen=True)
class BudgetSnapshot:
    """Immutable display-currency view of a whole budget."""

    currency: CurrencyCode
    monthly_salary: float
    monthly_tax: float
    annual_tax: float
    net_monthly: float
    total_expenses: float
    remaining_balance: float
    marginal_rate: float
    categories: list[CategoryShare]
    expenses: list[ExpenseLine]


def calculate_share_percentage(amount: Money, total: Money) -> float:
    """Percentage of total, 0 when there is no total."""
    if total <= 0:
        return 0.0
    return (amount / total) * 100


def sort_categories(categories: list[CategoryShare], sort_by: str = "value") -> list[CategoryShare]:
    """Sort breakdown entries by value (largest first) or alphabetically.

    Args:
        categories: Breakdown entries to sort.
        sort_by: Sort method - "value", "alpha" or "entry" (insertion order).

    Returns:
        New sorted list.

    Raises:
        InvalidInputError: If sort_by is not one of SORT_ORDERS.
    """
    if sort_by not in SORT_ORDERS:
        raise InvalidInputError(f"Unknown sort order '{sort_by}'. Use one of: {', '.join(SORT_ORDERS)}")
    if sort_by == "alpha":
        return sorted(categories, key=lambda c: c.label.lower())
    if sort_by == "entry":
        return list(categories)
    return sorted(categories, key=lambda c: c.amount, reverse=True)


def calculate_histogram_bar_length(amount: float, max_amount: float, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)


def create_snapshot(
    state: BudgetState,
    summary: BudgetSummary | None = None,
    table: TaxTable | None = None,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> BudgetSnapshot:
    """Build the display view of a budget.

    Args:
        state: Budget to render.
        summary: Precomputed summary. Computed from state if omitted.
        table: Tax table used when computing the summary.
        currencies: Currency table. Defaults to the static rates.

    Returns:
        BudgetSnapshot with every amount in the budget's display currency.
    """
    if summary is None:
        summary = summarize_budget(state, table)

    def display(amount: Money) -> float:
        return to_display(to_major(amount), state.currency, currencies)

    categories = [
        CategoryShare(
            label=label,
            amount=display(amount),
            percentage=calculate_share_percentage(amount, summary.total_expenses),
        )
        for label, amount in summary.breakdown.items()
    ]
    expenses = [ExpenseLine(id=e.id, label=e.label, amount=display(e.amount)) for e in state.expenses]

    return BudgetSnapshot(
        currency=state.currency,
        monthly_salary=display(state.monthly_salary),
        monthly_tax=display(summary.tax.monthly_tax),
        annual_tax=display(summary.tax.annual_tax),
        net_monthly=display(summary.tax.net_monthly),
        total_expenses=display(summary.total_expenses),
        remaining_balance=display(summary.remaining_balance),
        marginal_rate=summary.tax.marginal_rate,
        categories=categories,
        expenses=expenses,
    )
