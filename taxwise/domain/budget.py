"""Pure functions for budget aggregation and state updates.

This module contains the functional core for budget operations:
- No I/O operations (no files, no console)
- No side effects: updates return a new BudgetState
- Pure data transformations
- Easy to test

All monetary amounts are in cents (Money type).
"""

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from uuid import uuid4

from taxwise.domain.currency import CURRENCIES, CurrencyInfo, get_currency
from taxwise.domain.errors import InvalidInputError
from taxwise.domain.models import (
    OTHER_CATEGORY,
    BudgetState,
    Category,
    CategoryName,
    CurrencyCode,
    CustomCategory,
    Expense,
    ExpenseId,
    Money,
    NamedCategory,
    TaxDetails,
)
from taxwise.domain.tax import TaxTable, compute_tax


@dataclass(frozen=True)
class BudgetSummary:
    """Immutable derived totals for a budget."""

    tax: TaxDetails
    total_expenses: Money
    remaining_balance: Money  # Negative when overspent
    breakdown: dict[str, Money]


def make_category(category: str, custom_name: str | None = None) -> Category:
    """Build a Category from the raw category name and optional custom name.

    Args:
        category: Category name. "Other" requires a custom name.
        custom_name: Display name, used only for "Other".

    Returns:
        CustomCategory for "Other", NamedCategory otherwise.

    Raises:
        InvalidInputError: If "Other" is given without a non-blank custom name.
    """
    if category == OTHER_CATEGORY:
        name = (custom_name or "").strip()
        if not name:
            raise InvalidInputError("Custom name is required for 'Other' category.")
        return CustomCategory(name)
    return NamedCategory(CategoryName(category))


def new_expense_id() -> ExpenseId:
    return ExpenseId(uuid4().hex)


def calculate_total_expenses(expenses: Iterable[Expense]) -> Money:
    return Money(sum(e.amount for e in expenses))


def calculate_remaining_balance(net_monthly: Money, total_expenses: Money) -> Money:
    return Money(net_monthly - total_expenses)


def calculate_category_breakdown(expenses: Iterable[Expense]) -> dict[str, Money]:
    """Sum expense amounts per effective label.

    Expenses with the same label are merged even across different ids,
    so a custom "Food" expense lands in the same bucket as named "Food".

    Args:
        expenses: Expenses to aggregate.

    Returns:
        Dictionary of label to total cents, in order of first occurrence.
    """
    breakdown: dict[str, Money] = {}
    for expense in expenses:
        breakdown[expense.label] = Money(breakdown.get(expense.label, 0) + expense.amount)
    return breakdown


def summarize_budget(state: BudgetState, table: TaxTable | None = None) -> BudgetSummary:
    """Compute all derived totals for a budget.

    Args:
        state: Budget to summarize.
        table: Tax table to use. Defaults to the current tax year.

    Returns:
        BudgetSummary recomputed from scratch.
    """
    tax = compute_tax(state.monthly_salary, table)
    total = calculate_total_expenses(state.expenses)

    return BudgetSummary(
        tax=tax,
        total_expenses=total,
        remaining_balance=calculate_remaining_balance(tax.net_monthly, total),
        breakdown=calculate_category_breakdown(state.expenses),
    )


def reconstruct_categories(expenses: Iterable[Expense]) -> tuple[CategoryName, ...]:
    """Distinct raw category names in order of first occurrence."""
    return tuple(dict.fromkeys(e.category.raw_name for e in expenses))


def add_expense(
    state: BudgetState,
    category: str,
    amount: Money,
    custom_name: str | None = None,
    expense_id: ExpenseId | None = None,
) -> BudgetState:
    """Append a new expense.

    Args:
        state: Current budget.
        category: Category name from the budget's vocabulary, or "Other".
        amount: Amount in canonical cents.
        custom_name: Display name, required for "Other".
        expense_id: Optional id. A random one is generated if omitted.

    Returns:
        New BudgetState with the expense appended.

    Raises:
        InvalidInputError: If the amount is negative, the category is unknown,
            the id is already used, or "Other" lacks a custom name.
    """
    if amount < 0:
        raise InvalidInputError("Amount must not be negative")
    if category != OTHER_CATEGORY and category not in state.expense_categories:
        known = ", ".join(state.expense_categories) or "none"
        raise InvalidInputError(f"Unknown category '{category}'. Known categories: {known}")
    if expense_id is not None and any(e.id == expense_id for e in state.expenses):
        raise InvalidInputError(f"Expense id '{expense_id}' is already in use")

    expense = Expense(
        id=expense_id or new_expense_id(),
        category=make_category(category, custom_name),
        amount=amount,
    )
    return dataclasses.replace(state, expenses=(*state.expenses, expense))


def delete_expense(state: BudgetState, expense_id: str) -> BudgetState:
    """Remove the expense with the given id. Unknown ids leave the state unchanged."""
    remaining = tuple(e for e in state.expenses if e.id != expense_id)
    if len(remaining) == len(state.expenses):
        return state
    return dataclasses.replace(state, expenses=remaining)


def set_salary(state: BudgetState, amount: Money) -> BudgetState:
    if amount < 0:
        raise InvalidInputError("Salary must not be negative")
    return dataclasses.replace(state, monthly_salary=amount)


def set_currency(
    state: BudgetState,
    code: str,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> BudgetState:
    """Switch the display currency. Stored amounts are untouched."""
    info = get_currency(code, CURRENCIES if currencies is None else currencies)
    return dataclasses.replace(state, currency=info.code)


def add_category(state: BudgetState, name: str) -> BudgetState:
    """Add a category to the vocabulary. Existing names are a no-op.

    Raises:
        InvalidInputError: If the name is blank.
    """
    name = name.strip()
    if not name:
        raise InvalidInputError("Category name must not be empty")
    if name in state.expense_categories:
        return state
    return dataclasses.replace(state, expense_categories=(*state.expense_categories, CategoryName(name)))
