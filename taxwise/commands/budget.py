"""Budget commands for salary, currency, expenses and categories."""

import math
import sys
from typing import NoReturn

from rich.console import Console
from rich.table import Table

from taxwise.domain.currency import format_money, get_currency, to_canonical, to_display
from taxwise.domain.errors import InvalidInputError, TaxwiseError
from taxwise.domain.models import OTHER_CATEGORY, Money, to_major, to_minor
from taxwise.store.session import BudgetSession, load_session, save_session

console = Console()


def to_stored_amount(session: BudgetSession, amount: float, currency: str | None = None) -> Money:
    """Convert an amount typed in a display currency to canonical cents.

    Args:
        session: Session supplying the default currency and rates.
        amount: Amount as entered.
        currency: Currency the amount is in. Defaults to the budget's display currency.

    Returns:
        Money amount in canonical cents.

    Raises:
        InvalidInputError: If the amount is not a finite number.
    """
    code = currency or session.state.currency
    canonical = to_canonical(amount, code, session.settings.currencies)
    if not math.isfinite(canonical):
        raise InvalidInputError(f"Amount must be a finite number, got {amount}")
    return to_minor(canonical)


def display(session: BudgetSession, amount: Money) -> str:
    """Format stored cents in the budget's display currency."""
    code = session.state.currency
    currencies = session.settings.currencies
    return format_money(to_display(to_major(amount), code, currencies), code, currencies)


def fail(error: Exception) -> NoReturn:
    console.print(f"[red]{error}[/red]", style="bold")
    sys.exit(1)


def salary_command(amount: float, currency: str | None = None) -> None:
    """Set the gross monthly salary."""
    try:
        session = load_session()
        if currency:
            get_currency(currency, session.settings.currencies)
        session.set_salary(to_stored_amount(session, amount, currency))
        save_session(session)
    except (TaxwiseError, OSError) as e:
        fail(e)

    tax = session.tax_details()
    console.print(f"[green]✓[/green] Monthly salary set to {display(session, session.state.monthly_salary)}")
    console.print(f"[dim]Monthly tax: {display(session, tax.monthly_tax)}[/dim]")
    console.print(f"[dim]Net monthly income: {display(session, tax.net_monthly)}[/dim]")


def currency_command(code: str) -> None:
    """Switch the display currency."""
    try:
        session = load_session()
        session.set_currency(code)
        save_session(session)
    except (TaxwiseError, OSError) as e:
        fail(e)

    info = get_currency(session.state.currency, session.settings.currencies)
    console.print(f"[green]✓[/green] Display currency is now {info.code} ({info.symbol})")


def add_command(category: str, amount: float, name: str | None = None) -> None:
    """Add an expense in the display currency."""
    try:
        session = load_session()
        expense = session.add_expense(category, to_stored_amount(session, amount), custom_name=name)
        save_session(session)
    except (TaxwiseError, OSError) as e:
        fail(e)

    console.print(f"[green]✓[/green] Added {expense.label}: {display(session, expense.amount)}")
    console.print(f"[dim]Id: {expense.id}[/dim]")


def delete_command(expense_id: str) -> None:
    """Delete an expense by id."""
    try:
        session = load_session()
        deleted = session.delete_expense(expense_id)
        if deleted:
            save_session(session)
    except (TaxwiseError, OSError) as e:
        fail(e)

    if deleted:
        console.print(f"[green]✓[/green] Deleted expense {expense_id}")
    else:
        console.print(f"[yellow]No expense with id {expense_id}[/yellow]")


def list_command() -> None:
    """List expenses with their ids."""
    try:
        session = load_session()
    except TaxwiseError as e:
        fail(e)

    if not session.state.expenses:
        console.print("[dim]No expenses yet[/dim]")
        return

    table = Table(title=f"Expenses ({session.state.currency})")
    table.add_column("Id", style="dim")
    table.add_column("Category", style="cyan")
    table.add_column("Amount", justify="right")

    for expense in session.state.expenses:
        table.add_row(expense.id, expense.label, display(session, expense.amount))

    console.print(table)


def category_command(name: str | None = None) -> None:
    """Add a category, or list them when no name is given."""
    try:
        session = load_session()
        if name is not None:
            added = session.add_category(name)
            if added:
                save_session(session)
    except (TaxwiseError, OSError) as e:
        fail(e)

    if name is None:
        for category in session.state.expense_categories:
            note = " [dim](needs --name)[/dim]" if category == OTHER_CATEGORY else ""
            console.print(f"  • {category}{note}")
        return

    if added:
        console.print(f"[green]✓[/green] Added category {name.strip()}")
    else:
        console.print(f"[yellow]Category {name.strip()} already exists[/yellow]")
