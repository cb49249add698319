"""Expense management commands (sample, add, update, delete, list, query)."""

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from finlite.commands.errors import fail, parse_id, reported_errors
from finlite.config import Settings
from finlite.dates import parse_date
from finlite.domain.aggregate import find_by_category
from finlite.domain.export import expense_line
from finlite.domain.models import CategoryName, Description
from finlite.domain.money import format_money, parse_money
from finlite.domain.records import Expense
from finlite.domain.samples import sample_budgets, sample_expenses
from finlite.store import Database

console = Console()


def sample_command(db: Database) -> None:
    """Bulk-insert the sample expenses and budgets."""
    with reported_errors():
        expenses = db.expenses.insert_bulk(sample_expenses())
        console.print(f"[green]✓[/green] Sample expenses inserted successfully ({expenses}).")
        budgets = db.budgets.insert_bulk(sample_budgets())
        console.print(f"[green]✓[/green] Sample budgets inserted successfully ({budgets}).")


def add_command(db: Database, date: str, amount: str, category: str, description: str) -> None:
    """Add an expense.

    Args:
        db: Open database.
        date: Expense date (YYYY-MM-DD, or DD/MM/YYYY and similar).
        amount: Amount in rupees.
        category: Category name.
        description: Description text.
    """
    with reported_errors():
        expense = Expense(
            date=parse_date(date),
            amount=parse_money(amount),
            category=CategoryName(category.strip()),
            description=Description(description.strip()),
        )
        expense_id = db.expenses.insert(expense)

    console.print(f"[green]✓[/green] Expense added successfully (ID: {expense_id}).")


def add_interactive(db: Database) -> None:
    """Prompt for the fields of a new expense and add it."""
    date = typer.prompt("Date (yyyy-MM-dd)")
    amount = typer.prompt("Amount")
    category = typer.prompt("Category")
    description = typer.prompt("Description", default="", show_default=False)
    add_command(db, date, amount, category, description)


def update_command(db: Database, expense_id: int, amount: str, category: str, description: str) -> None:
    """Overwrite amount, category and description of an expense.

    The expense date is kept.
    """
    with reported_errors():
        existing = db.expenses.find_by_id(expense_id)
        if existing is None:
            fail("Expense not found.")

        updated = Expense(
            id=existing.id,
            date=existing.date,
            amount=parse_money(amount),
            category=CategoryName(category.strip()),
            description=Description(description.strip()),
        )
        if not db.expenses.update(updated):
            fail("Expense not found.")

    console.print("[green]✓[/green] Expense updated successfully.")


def update_interactive(db: Database) -> None:
    """Prompt for an expense id and its new values, then update it."""
    with reported_errors():
        expense_id = parse_id(typer.prompt("Enter Expense ID to update"))
        if db.expenses.find_by_id(expense_id) is None:
            fail("Expense not found.")

    amount = typer.prompt("New Amount")
    category = typer.prompt("New Category")
    description = typer.prompt("New Description", default="", show_default=False)
    update_command(db, expense_id, amount, category, description)


def delete_command(db: Database, expense_id: int) -> None:
    """Delete an expense by id."""
    with reported_errors():
        deleted = db.expenses.delete(expense_id)

    if not deleted:
        fail("Expense not found.")
    console.print("[green]✓[/green] Expense deleted.")


def delete_interactive(db: Database) -> None:
    """Prompt for an expense id and delete it."""
    with reported_errors():
        expense_id = parse_id(typer.prompt("Enter Expense ID to delete"))
    delete_command(db, expense_id)


def render_expenses(expenses: list[Expense], title: str, settings: Settings) -> None:
    """Print expenses as a rich table."""
    table = Table(title=title)
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Date", style="cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Amount", justify="right")
    table.add_column("Description", style="white")

    for e in expenses:
        table.add_row(str(e.id), e.date.isoformat(), e.category, format_money(e.amount, settings.currency), e.description)

    console.print(table)


def list_command(db: Database, settings: Settings) -> None:
    """List every expense."""
    with reported_errors():
        expenses = db.expenses.find_all()

    if not expenses:
        console.print("[yellow]No expenses found[/yellow]")
        return

    render_expenses(expenses, f"Expenses ({len(expenses)})", settings)


def query_command(db: Database, settings: Settings, category: str) -> None:
    """Show expenses whose category matches, ignoring case."""
    with reported_errors():
        matches = find_by_category(db.expenses.find_all(), category)

    if not matches:
        console.print(f"[yellow]No expenses found in category '{escape(category)}'[/yellow]")
        return

    console.print(f"\n[bold]Expenses in category '{escape(category)}':[/bold]")
    for expense in matches:
        console.print(expense_line(expense, settings.currency, with_category=False), markup=False, highlight=False)


def query_interactive(db: Database, settings: Settings) -> None:
    """Prompt for a category and show its expenses."""
    query_command(db, settings, typer.prompt("Enter category to filter"))
