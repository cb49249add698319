"""Report commands: category summary, CSV export, aggregates and raw documents."""

from datetime import date
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from finlite.commands.errors import reported_errors
from finlite.config import Settings
from finlite.domain.aggregate import (
    average_by_category,
    budgets_by_tag,
    category_summary,
    expense_total,
    tag_limit_total,
    total_limit,
)
from finlite.domain.export import average_lines, budget_line, csv_lines, document_view, summary_lines
from finlite.domain.money import format_money
from finlite.domain.records import Expense
from finlite.domain.samples import seed_expenses, tagged_budgets
from finlite.store import Database

console = Console()

SUMMARY_TAG = "Monthly"
LOOKUP_TAG = "food"


def write_csv(path: Path, expenses: list[Expense]) -> int:
    """Write expenses to a UTF-8 CSV file.

    Args:
        path: Destination file (overwritten).
        expenses: Expense snapshot, written in the given order.

    Returns:
        Number of expense rows written (header excluded).
    """
    lines = csv_lines(expenses)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return len(lines) - 1


def summary_command(db: Database, settings: Settings) -> None:
    """Show total spent per category, largest first."""
    with reported_errors():
        expenses = db.expenses.find_all()

    rows = category_summary(expenses)
    console.print("\n[bold cyan]SQL-like Summary (Total per Category):[/bold cyan]")
    if not rows:
        console.print("[dim]No expenses yet[/dim]")
        return

    for line in summary_lines(rows, settings.currency):
        console.print(line, markup=False, highlight=False)
    console.print(f"\n[bold]Total:[/bold] {format_money(expense_total(expenses), settings.currency)}")


def export_command(db: Database, settings: Settings, output: Path | None = None) -> None:
    """Export every expense to CSV."""
    path = output or settings.csv_path
    with reported_errors():
        written = write_csv(path, db.expenses.find_all())

    console.print(f"[green]✓[/green] {written} expenses exported to {path}")


def raw_command(db: Database) -> None:
    """Print every stored expense document as JSON.

    Seeds two expenses first when the collection is empty.
    """
    with reported_errors():
        if db.expenses.count() == 0:
            db.expenses.insert_bulk(seed_expenses(date.today()))
        documents = db.expenses.raw_documents()

    console.print("[bold cyan]=== Raw Document Representation ===[/bold cyan]\n")
    for document in documents:
        console.print_json(document_view(document))
        console.print("[dim]----------------------------[/dim]")


def tags_command(db: Database, settings: Settings, tag: str = LOOKUP_TAG, seed: bool = True) -> None:
    """Look up budgets by tag through the tag index.

    Args:
        db: Open database.
        settings: Display settings.
        tag: Tag to look up (case-sensitive).
        seed: Insert the three tagged example budgets first.
    """
    with reported_errors():
        if seed:
            db.budgets.insert_bulk(tagged_budgets())
        matches = db.budgets.find_by_tag(tag)

    console.print(f"Budgets with tag '{escape(tag)}':")
    if not matches:
        console.print("[dim]  (none)[/dim]")
    for budget in matches:
        console.print(budget_line(budget, settings.currency), markup=False, highlight=False)


def aggregates_command(db: Database, settings: Settings, tag: str = SUMMARY_TAG) -> None:
    """Show budget aggregates: overall sum, sum for one tag, average per category."""
    with reported_errors():
        budgets = db.budgets.find_all()

    console.print("\n[bold]************* SUM *************[/bold]")
    console.print(f"Total Budget Limit: {format_money(total_limit(budgets), settings.currency)}")
    console.print("[dim]Equivalent to SQL's: SELECT SUM(Limit) FROM budgets;[/dim]")

    tagged = budgets_by_tag(budgets, tag)
    console.print(
        f"\nTotal {escape(tag)} Budget: {format_money(tag_limit_total(budgets, tag), settings.currency)}"
        f" ({len(tagged)} budgets)"
    )
    console.print(f"[dim]Equivalent to SQL's: SELECT SUM(Limit) FROM budgets WHERE Tags CONTAINS '{escape(tag)}'[/dim]")

    console.print("\n[bold]************* AVG *************[/bold]")
    console.print("Average Limit by Category:")
    for line in average_lines(average_by_category(budgets), settings.currency):
        console.print(line, markup=False, highlight=False)
    console.print("[dim]Equivalent to SQL's: SELECT Category, AVG(Limit) FROM budgets GROUP BY Category;[/dim]")
