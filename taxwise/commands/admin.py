"""Admin commands for initialization and configuration."""

import sys
from typing import Any

from rich.console import Console

from taxwise.config import create_default_config, get_config_path, get_settings, update_config
from taxwise.domain.errors import TaxwiseError
from taxwise.domain.tax import TAX_TABLES
from taxwise.store.paths import get_budget_path
from taxwise.store.session import BudgetSession, save_session

console = Console()


def init_command(force: bool = False) -> None:
    """Initialize taxwise config and an empty budget."""
    budget_path = get_budget_path()
    config_path = get_config_path()

    budget_exists = budget_path.exists()
    config_exists = config_path.exists()

    # Guard: refuse to overwrite without force flag
    if not force and (budget_exists or config_exists):
        console.print("[red]Initialization failed:[/red]", style="bold")
        if budget_exists:
            console.print(f"  Budget already exists: {budget_path}")
        if config_exists:
            console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'taxwise init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print(f"[cyan]Creating empty budget at {budget_path}...[/cyan]")
        save_session(BudgetSession(settings=get_settings(config_path)), budget_path)
        console.print("[green]✓[/green] Budget created")
    except (TaxwiseError, OSError) as e:
        console.print(f"[red]Initialization failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Budget: {budget_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def config_command(currency: str | None = None, tax_year: str | None = None) -> None:
    """Show or update the default currency and tax year."""
    changes: dict[str, Any] = {}
    if currency:
        changes["currency"] = currency.upper()
    if tax_year:
        changes["tax_year"] = tax_year

    try:
        settings = update_config(changes) if changes else get_settings()
    except (TaxwiseError, OSError) as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    if changes:
        console.print("[green]✓[/green] Configuration updated")
    console.print(f"Default currency: {settings.currency}")
    console.print(f"Tax year: {settings.tax_table.year}")
    console.print(f"Currencies: {', '.join(settings.currencies)}")
    console.print(f"[dim]Available tax years: {', '.join(TAX_TABLES)}[/dim]")
    console.print(f"[dim]Config: {get_config_path()}[/dim]")
