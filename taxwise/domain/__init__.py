"""Domain models and calculations for taxwise.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from taxwise.domain.models import (
    BudgetState,
    CategoryName,
    CurrencyCode,
    CustomCategory,
    Expense,
    ExpenseId,
    Money,
    NamedCategory,
    TaxDetails,
)

__all__ = [
    "BudgetState",
    "CategoryName",
    "CurrencyCode",
    "CustomCategory",
    "Expense",
    "ExpenseId",
    "Money",
    "NamedCategory",
    "TaxDetails",
]
