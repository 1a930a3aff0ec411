"""Conversion between BudgetState and the portable budget document.

The document is the JSON-shaped dictionary shared by the JSON export and
the spreadsheet raw sheet:

    {
        "monthlySalary": 50000.0,
        "expenses": [{"id": "...", "category": "Other", "customName": "Gym", "amount": 450.0}],
        "currency": "ZAR",
        "expenseCategories": ["Food", "Transport", "Rent", "Medical Aid", "Other"],
    }

Amounts are major units in the canonical currency.
"""

import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from taxwise.domain.budget import make_category, new_expense_id, reconstruct_categories
from taxwise.domain.currency import CURRENCIES, CurrencyInfo
from taxwise.domain.errors import InvalidInputError, SchemaError, TaxwiseError
from taxwise.domain.models import (
    BudgetState,
    CategoryName,
    CurrencyCode,
    CustomCategory,
    Expense,
    ExpenseId,
    Money,
    to_major,
    to_minor,
)

REQUIRED_FIELDS = ("monthlySalary", "expenses", "currency")


@dataclass(frozen=True)
class ImportSuccess:
    """Import produced a complete budget."""

    state: BudgetState
    source: str  # "json", "raw-sheet" or "expense-sheet"


@dataclass(frozen=True)
class ImportFailure:
    """Import failed; the caller's budget must stay as it was."""

    error: TaxwiseError

    @property
    def message(self) -> str:
        return str(self.error)


ImportResult = ImportSuccess | ImportFailure


def expense_to_document(expense: Expense) -> dict[str, Any]:
    doc: dict[str, Any] = {
        "id": expense.id,
        "category": expense.category.raw_name,
        "amount": to_major(expense.amount),
    }
    if isinstance(expense.category, CustomCategory):
        doc["customName"] = expense.category.label
    return doc


def budget_to_document(state: BudgetState) -> dict[str, Any]:
    """Serialize a budget to the portable document shape."""
    return {
        "monthlySalary": to_major(state.monthly_salary),
        "expenses": [expense_to_document(e) for e in state.expenses],
        "currency": state.currency,
        "expenseCategories": list(state.expense_categories),
    }


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _parse_amount(value: Any, what: str) -> Money:
    """Parse a non-negative major-unit amount into cents."""
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise SchemaError(f"{what} must be a number, got '{value}'") from None
    if not _is_number(value):
        raise SchemaError(f"{what} must be a number")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise SchemaError(f"{what} must be a finite number")
    if value < 0:
        raise InvalidInputError(f"{what} must not be negative")
    return to_minor(float(value))


def expense_from_document(data: Any, index: int) -> Expense:
    """Validate one expense entry.

    Raises:
        SchemaError: If the entry is not an object or lacks category/amount.
        InvalidInputError: If the amount is negative or "Other" lacks a name.
    """
    if not isinstance(data, Mapping):
        raise SchemaError(f"Expense #{index + 1} must be an object")
    for key in ("category", "amount"):
        if key not in data:
            raise SchemaError(f"Expense #{index + 1} is missing '{key}'")

    category = data["category"]
    if not isinstance(category, str) or not category.strip():
        raise SchemaError(f"Expense #{index + 1} has an invalid category")

    custom_name = data.get("customName")
    if custom_name is not None and not isinstance(custom_name, str):
        custom_name = str(custom_name)

    raw_id = data.get("id")
    expense_id = ExpenseId(str(raw_id)) if raw_id not in (None, "") else new_expense_id()

    return Expense(
        id=expense_id,
        category=make_category(category.strip(), custom_name),
        amount=_parse_amount(data["amount"], f"Expense #{index + 1} amount"),
    )


def budget_from_document(
    data: Any,
    currencies: Mapping[CurrencyCode, CurrencyInfo] | None = None,
) -> BudgetState:
    """Validate a parsed document and build a BudgetState.

    Args:
        data: Parsed document (dict-like).
        currencies: Supported currencies. Defaults to the static table.

    Returns:
        Validated BudgetState.

    Raises:
        SchemaError: If a required field is missing or has the wrong type.
        InvalidInputError: If the salary or an amount is negative.
    """
    if not isinstance(data, Mapping):
        raise SchemaError("Invalid structure for budget data: expected an object")

    missing = [key for key in REQUIRED_FIELDS if key not in data]
    if missing:
        raise SchemaError(f"Invalid structure for budget data: missing {', '.join(missing)}")

    table = CURRENCIES if currencies is None else currencies
    currency = data["currency"]
    if not isinstance(currency, str) or CurrencyCode(currency.upper()) not in table:
        raise SchemaError(f"Unsupported currency '{currency}'")

    raw_expenses = data["expenses"]
    if not isinstance(raw_expenses, list):
        raise SchemaError("'expenses' must be a list")
    expenses = tuple(expense_from_document(entry, i) for i, entry in enumerate(raw_expenses))

    ids = [e.id for e in expenses]
    if len(set(ids)) != len(ids):
        raise SchemaError("Expense ids must be unique")

    raw_categories = data.get("expenseCategories")
    if raw_categories is None:
        categories = reconstruct_categories(expenses)
    elif isinstance(raw_categories, list) and all(isinstance(c, str) for c in raw_categories):
        categories = tuple(dict.fromkeys(CategoryName(c) for c in raw_categories))
    else:
        raise SchemaError("'expenseCategories' must be a list of names")

    return BudgetState(
        monthly_salary=_parse_amount(data["monthlySalary"], "monthlySalary"),
        expenses=expenses,
        currency=CurrencyCode(currency.upper()),
        expense_categories=categories,
    )
