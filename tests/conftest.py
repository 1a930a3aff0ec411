"""Shared fixtures for taxwise tests."""

from pathlib import Path

import pytest

from taxwise.domain.models import (
    BudgetState,
    CategoryName,
    CurrencyCode,
    CustomCategory,
    Expense,
    ExpenseId,
    Money,
    NamedCategory,
)


@pytest.fixture
def sample_state() -> BudgetState:
    """A budget with named and custom expenses in a non-default currency."""
    return BudgetState(
        monthly_salary=Money(5_000_000),
        expenses=(
            Expense(ExpenseId("e-rent"), NamedCategory(CategoryName("Rent")), Money(1_250_000)),
            Expense(ExpenseId("e-food"), NamedCategory(CategoryName("Food")), Money(350_050)),
            Expense(ExpenseId("e-gym"), CustomCategory("Gym"), Money(49_999)),
            Expense(ExpenseId("e-holiday"), NamedCategory(CategoryName("Holidays")), Money(0)),
        ),
        currency=CurrencyCode("USD"),
        expense_categories=(
            CategoryName("Food"),
            CategoryName("Rent"),
            CategoryName("Other"),
            CategoryName("Holidays"),
        ),
    )


@pytest.fixture
def xdg_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and data directories at a temporary directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path
