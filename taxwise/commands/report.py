"""Summary command for viewing tax, income and spending."""

from rich.console import Console
from rich.table import Table

from taxwise.commands.budget import fail
from taxwise.domain.currency import format_money
from taxwise.domain.errors import TaxwiseError
from taxwise.domain.snapshot import BudgetSnapshot, calculate_histogram_bar_length, sort_categories
from taxwise.store.session import load_session

console = Console()


def render_totals(snapshot: BudgetSnapshot, money: dict[str, str]) -> None:
    """Render the income and balance table."""
    table = Table(title=f"Monthly budget ({snapshot.currency})", show_header=False)
    table.add_column("Item", style="cyan")
    table.add_column("Amount", justify="right")

    table.add_row("Gross salary", money["salary"])
    table.add_row(f"Income tax (marginal {snapshot.marginal_rate:.0%})", f"[red]-{money['tax']}[/red]")
    table.add_row("Net income", f"[bold]{money['net']}[/bold]")
    table.add_row("Total expenses", f"[red]-{money['expenses']}[/red]")

    colour = "green" if snapshot.remaining_balance >= 0 else "red"
    table.add_row("Remaining balance", f"[bold {colour}]{money['remaining']}[/bold {colour}]")

    console.print(table)


def summary_command(sort_by: str = "value", histogram: bool = True) -> None:
    """Show tax, net income, remaining balance and spending by category."""
    try:
        session = load_session()
        snapshot = session.snapshot()
        categories = sort_categories(snapshot.categories, sort_by)
    except TaxwiseError as e:
        fail(e)

    currencies = session.settings.currencies

    def fmt(amount: float) -> str:
        return format_money(amount, snapshot.currency, currencies)

    render_totals(
        snapshot,
        {
            "salary": fmt(snapshot.monthly_salary),
            "tax": fmt(snapshot.monthly_tax),
            "net": fmt(snapshot.net_monthly),
            "expenses": fmt(snapshot.total_expenses),
            "remaining": fmt(snapshot.remaining_balance),
        },
    )

    if not snapshot.categories:
        console.print("\n[dim]No expenses yet[/dim]")
        return

    console.print("\n[bold red]Spending by category:[/bold red]\n")
    max_amount = max(c.amount for c in categories) if histogram else 0.0
    bar_width = 30

    for share in categories:
        amount_display = fmt(share.amount)
        if histogram:
            bar = "█" * calculate_histogram_bar_length(share.amount, max_amount, bar_width)
            console.print(f"  {share.label:20} {amount_display:>14} {share.percentage:5.1f}% {bar}")
        else:
            console.print(f"  {share.label}: {amount_display} ({share.percentage:.1f}%)")

    if snapshot.remaining_balance < 0:
        console.print(f"\n[red]You are over budget by {fmt(abs(snapshot.remaining_balance))}[/red]")
