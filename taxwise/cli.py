"""CLI entry point for taxwise."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from taxwise.commands.admin import config_command, init_command
from taxwise.commands.budget import (
    add_command,
    category_command,
    currency_command,
    delete_command,
    list_command,
    salary_command,
)
from taxwise.commands.files import export_command, import_command
from taxwise.commands.report import summary_command

app = typer.Typer(
    name="taxwise",
    help="TaxWise - South African income tax and monthly budget planner",
    add_completion=False,
)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich, DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """TaxWise - South African income tax and monthly budget planner."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing budget and config"),
) -> None:
    """Initialize taxwise configuration and an empty budget."""
    init_command(force)


@app.command(name="config")
def config(
    currency: str = typer.Option(None, "--currency", help="Default display currency for new budgets"),
    tax_year: str = typer.Option(None, "--tax-year", help="Tax year bracket table (e.g. 2024/2025)"),
) -> None:
    """Show or update your defaults."""
    config_command(currency, tax_year)


@app.command()
def salary(
    amount: float,
    currency: str = typer.Option(None, "--currency", "-c", help="Currency of AMOUNT (default: display currency)"),
) -> None:
    """Set your gross monthly salary."""
    salary_command(amount, currency)


@app.command()
def currency(code: str) -> None:
    """Set your display currency (e.g. ZAR, USD, EUR)."""
    currency_command(code)


@app.command()
def add(
    category: str,
    amount: float,
    name: str = typer.Option(None, "--name", "-n", help="Custom name (required for 'Other')"),
) -> None:
    """Add an expense in your display currency."""
    add_command(category, amount, name)


@app.command()
def delete(expense_id: str) -> None:
    """Delete an expense by id."""
    delete_command(expense_id)


@app.command(name="list")
def list_expenses() -> None:
    """List your expenses."""
    list_command()


@app.command()
def category(
    name: str = typer.Argument(None, help="Category to add (omit to list categories)"),
) -> None:
    """Add an expense category, or list your categories."""
    category_command(name)


@app.command()
def summary(
    sort_by: str = typer.Option("value", help="Sort by 'value', 'alpha' or 'entry'"),
    histogram: bool = typer.Option(True, help="Show histogram of your spending"),
) -> None:
    """Show your tax, net income, balance and spending breakdown."""
    summary_command(sort_by, histogram)


@app.command(name="export")
def export(path: str) -> None:
    """Export your budget to a .json or .xlsx file."""
    export_command(path)


@app.command(name="import")
def import_(path: str) -> None:
    """Import a budget from a .json or .xlsx file."""
    import_command(path)


if __name__ == "__main__":
    app()
