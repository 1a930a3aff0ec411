"""The session: the single owned, mutable budget record.

Domain functions never mutate a BudgetState; they return a new one.
BudgetSession holds the current state and swaps it after each
successful update, one mutation at a time. A failed update or import
leaves the previous state in place.
"""

import logging
from pathlib import Path

from taxwise.config import Settings, get_settings
from taxwise.domain import budget as budget_ops
from taxwise.domain.budget import BudgetSummary, summarize_budget
from taxwise.domain.models import BudgetState, Expense, ExpenseId, Money, TaxDetails
from taxwise.domain.snapshot import BudgetSnapshot, create_snapshot
from taxwise.domain.tax import compute_tax
from taxwise.interchange.documents import ImportResult, ImportSuccess
from taxwise.interchange.json_io import read_json, write_json
from taxwise.store.paths import get_budget_path

logger = logging.getLogger(__name__)


class BudgetSession:
    """Owns one BudgetState and applies updates to it."""

    def __init__(self, state: BudgetState | None = None, settings: Settings | None = None) -> None:
        self.settings = settings if settings is not None else get_settings()
        self.state = state if state is not None else BudgetState(currency=self.settings.currency)

    def add_expense(
        self,
        category: str,
        amount: Money,
        custom_name: str | None = None,
        expense_id: ExpenseId | None = None,
    ) -> Expense:
        """Add an expense and return it."""
        self.state = budget_ops.add_expense(self.state, category, amount, custom_name, expense_id)
        return self.state.expenses[-1]

    def delete_expense(self, expense_id: str) -> bool:
        """Delete an expense. Returns False if no expense had that id."""
        before = self.state
        self.state = budget_ops.delete_expense(self.state, expense_id)
        return self.state is not before

    def set_salary(self, amount: Money) -> None:
        self.state = budget_ops.set_salary(self.state, amount)

    def set_currency(self, code: str) -> None:
        self.state = budget_ops.set_currency(self.state, code, self.settings.currencies)

    def add_category(self, name: str) -> bool:
        """Add a category. Returns False if it already existed."""
        before = self.state
        self.state = budget_ops.add_category(self.state, name)
        return self.state is not before

    def replace(self, state: BudgetState) -> None:
        self.state = state

    def apply_import(self, result: ImportResult) -> ImportResult:
        """Replace the budget with an imported one, only if the import succeeded."""
        if isinstance(result, ImportSuccess):
            self.replace(result.state)
        return result

    def tax_details(self) -> TaxDetails:
        return compute_tax(self.state.monthly_salary, self.settings.tax_table)

    def summary(self) -> BudgetSummary:
        return summarize_budget(self.state, self.settings.tax_table)

    def snapshot(self) -> BudgetSnapshot:
        return create_snapshot(self.state, self.summary(), currencies=self.settings.currencies)


def load_session(budget_path: Path | None = None, settings: Settings | None = None) -> BudgetSession:
    """Load the working budget, or start an empty one if none is saved yet.

    Args:
        budget_path: Path to the working budget. If None, uses default location.
        settings: Resolved settings. If None, loads them from the config file.

    Returns:
        BudgetSession holding the saved (or a new) budget.

    Raises:
        DocumentReadError, ParseError, SchemaError: If the saved budget is unusable.
    """
    if budget_path is None:
        budget_path = get_budget_path()
    if settings is None:
        settings = get_settings()

    if not budget_path.exists():
        logger.debug("No budget at %s, starting a new one", budget_path)
        return BudgetSession(settings=settings)

    return BudgetSession(read_json(budget_path, settings.currencies), settings)


def save_session(session: BudgetSession, budget_path: Path | None = None) -> None:
    """Write the session's budget to the working file.

    Args:
        session: Session to save.
        budget_path: Path to the working budget. If None, uses default location.
    """
    if budget_path is None:
        budget_path = get_budget_path()

    budget_path.parent.mkdir(parents=True, exist_ok=True)
    write_json(session.state, budget_path)
    logger.debug("Saved budget to %s", budget_path)
