"""Budget management commands (add, list)."""

from rich.console import Console
from rich.table import Table

from finlite.commands.errors import reported_errors
from finlite.config import Settings
from finlite.dates import month_label, parse_month
from finlite.domain.models import CategoryName
from finlite.domain.money import format_money, parse_money
from finlite.domain.records import Budget, make_tags
from finlite.store import Database

console = Console()


def add_budget_command(db: Database, category: str, limit: str, month: str, tags: list[str]) -> None:
    """Add a budget.

    Args:
        db: Open database.
        category: Category name.
        limit: Limit in rupees.
        month: Month in YYYY-MM format.
        tags: Tags; comma-separated entries are split.
    """
    raw_tags = [part for entry in tags for part in entry.split(",")]
    with reported_errors():
        budget = Budget(
            category=CategoryName(category.strip()),
            limit=parse_money(limit),
            month=parse_month(month),
            tags=make_tags(raw_tags),
        )
        budget_id = db.budgets.insert(budget)

    console.print(f"[green]✓[/green] Budget added (ID: {budget_id}).")


def list_budgets_command(db: Database, settings: Settings) -> None:
    """List every budget with its tags."""
    with reported_errors():
        budgets = db.budgets.find_all()

    if not budgets:
        console.print("[yellow]No budgets found[/yellow]")
        return

    table = Table(title=f"Budgets ({len(budgets)})")
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("Limit", justify="right")
    table.add_column("Month", style="cyan")
    table.add_column("Tags", style="dim")

    for b in budgets:
        table.add_row(
            str(b.id),
            b.category,
            format_money(b.limit, settings.currency),
            month_label(b.month),
            ", ".join(sorted(b.tags)),
        )

    console.print(table)
