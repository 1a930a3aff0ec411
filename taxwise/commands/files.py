"""Export and import commands for budget files."""

import sys
from pathlib import Path

from rich.console import Console

from taxwise.commands.budget import fail
from taxwise.domain.errors import TaxwiseError
from taxwise.interchange import ImportFailure, export_budget, import_budget
from taxwise.store.session import load_session, save_session

console = Console()

SOURCE_DESCRIPTIONS = {
    "json": "JSON budget",
    "raw-sheet": "spreadsheet budget",
    "expense-sheet": "spreadsheet expense list (salary and currency reset)",
}


def export_command(path: str) -> None:
    """Export the budget to a .json or .xlsx file."""
    target = Path(path).expanduser()

    try:
        session = load_session()
        export_budget(
            session.state,
            target,
            summary=session.summary(),
            currencies=session.settings.currencies,
        )
    except (TaxwiseError, OSError) as e:
        fail(e)

    console.print(f"[green]✓[/green] Budget exported to: {target}")


def import_command(path: str) -> None:
    """Import a budget from a .json or .xlsx file, replacing the current one."""
    source = Path(path).expanduser()

    try:
        session = load_session()
    except TaxwiseError as e:
        fail(e)

    result = session.apply_import(import_budget(source, session.settings.currencies))

    if isinstance(result, ImportFailure):
        console.print("[red]Import failed:[/red]", style="bold")
        console.print(f"  {result.message}")
        console.print("[dim]Your current budget was left unchanged[/dim]")
        sys.exit(1)

    try:
        save_session(session)
    except OSError as e:
        fail(e)

    state = result.state
    console.print(f"[green]✓[/green] Imported {SOURCE_DESCRIPTIONS[result.source]} from: {source}")
    console.print(f"[dim]{len(state.expenses)} expenses, display currency {state.currency}[/dim]")
