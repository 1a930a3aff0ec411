"""Domain type definitions for taxwise.

These NewTypes and value objects describe a single budget:
- Money: Amount in cents (minor units) of the canonical currency
- CurrencyCode: Display currency code (e.g. "ZAR", "USD")
- CategoryName: Name of an expense category
- ExpenseId: Opaque, unique expense identifier
"""

from dataclasses import dataclass
from typing import NewType

# Money amounts are stored as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)

CurrencyCode = NewType("CurrencyCode", str)

CategoryName = NewType("CategoryName", str)

ExpenseId = NewType("ExpenseId", str)

# All stored amounts are kept in this currency, whatever the display currency
CANONICAL_CURRENCY = CurrencyCode("ZAR")

# Sentinel category that always carries a user supplied name
OTHER_CATEGORY = CategoryName("Other")

DEFAULT_CATEGORIES: tuple[CategoryName, ...] = (
    CategoryName("Food"),
    CategoryName("Transport"),
    CategoryName("Rent"),
    CategoryName("Medical Aid"),
    OTHER_CATEGORY,
)


def to_minor(amount: float) -> Money:
    """Convert a major-unit amount (e.g. rands) to cents.

    Args:
        amount: Amount in major units.

    Returns:
        Money amount in cents, rounded half to even.
    """
    return Money(round(amount * 100))


def to_major(amount: Money) -> float:
    """Convert cents to a major-unit amount."""
    return amount / 100


@dataclass(frozen=True)
class NamedCategory:
    """An expense filed under one of the category vocabulary names."""

    name: CategoryName

    @property
    def label(self) -> str:
        return self.name

    @property
    def raw_name(self) -> CategoryName:
        return self.name


@dataclass(frozen=True)
class CustomCategory:
    """An expense filed under "Other" with its own display name."""

    custom_name: str

    @property
    def label(self) -> str:
        return self.custom_name

    @property
    def raw_name(self) -> CategoryName:
        return OTHER_CATEGORY


Category = NamedCategory | CustomCategory


@dataclass(frozen=True)
class Expense:
    """Immutable expense, amount in canonical cents."""

    id: ExpenseId
    category: Category
    amount: Money

    @property
    def label(self) -> str:
        """Effective label: custom name for "Other", category name otherwise."""
        return self.category.label


@dataclass(frozen=True)
class BudgetState:
    """Immutable snapshot of a whole budget."""

    monthly_salary: Money = Money(0)
    expenses: tuple[Expense, ...] = ()
    currency: CurrencyCode = CANONICAL_CURRENCY
    expense_categories: tuple[CategoryName, ...] = DEFAULT_CATEGORIES


@dataclass(frozen=True)
class TaxDetails:
    """Derived tax breakdown for a monthly salary. Never stored."""

    gross_annual: Money
    taxable_income: Money
    tax_before_rebate: Money
    annual_tax: Money  # After rebate
    monthly_tax: Money
    net_monthly: Money
    marginal_rate: float
