"""Interactive numbered menu (options 0-13)."""

import logging
from collections.abc import Callable

import typer
from rich.console import Console

from finlite.commands.admin import files_interactive
from finlite.commands.expenses import (
    add_interactive,
    delete_interactive,
    list_command,
    query_interactive,
    sample_command,
    update_interactive,
)
from finlite.commands.report import aggregates_command, export_command, raw_command, summary_command, tags_command
from finlite.commands.simulate import simulate_command
from finlite.config import Settings
from finlite.store import Database

console = Console()
logger = logging.getLogger(__name__)

EXIT_CHOICE = "0"


def build_menu(db: Database, settings: Settings) -> list[tuple[str, str, Callable[[], None]]]:
    """Menu entries as (choice, label, action), in display order."""
    return [
        ("1", "Add Sample Data", lambda: sample_command(db)),
        ("2", "Add Expense", lambda: add_interactive(db)),
        ("3", "Update Expense", lambda: update_interactive(db)),
        ("4", "Delete Expense", lambda: delete_interactive(db)),
        ("5", "View Expenses", lambda: list_command(db, settings)),
        ("6", "Query by Category", lambda: query_interactive(db, settings)),
        ("7", "SQL-like Summary", lambda: summary_command(db, settings)),
        ("8", "Export to CSV", lambda: export_command(db, settings)),
        ("9", "Run Concurrency Simulation", lambda: simulate_command(db, settings)),
        ("10", "Show Raw Document Representation", lambda: raw_command(db)),
        ("11", "Working With Files", lambda: files_interactive(db)),
        ("12", "Multi-Key Index example", lambda: tags_command(db, settings)),
        ("13", "Expressions and Functions", lambda: aggregates_command(db, settings)),
    ]


def render_menu(entries: list[tuple[str, str, Callable[[], None]]]) -> None:
    """Print the menu."""
    console.print("\n[bold cyan]--- Personal Expense Tracker ---[/bold cyan]")
    for choice, label, _ in entries:
        console.print(f"{choice}. {label}")
    console.print(f"{EXIT_CHOICE}. Exit")


def menu_command(db: Database, settings: Settings) -> None:
    """Run the menu loop until the user picks 0 or input ends.

    A failing action prints its error and returns to the menu.
    """
    entries = build_menu(db, settings)
    actions = {choice: action for choice, _, action in entries}

    while True:
        render_menu(entries)
        try:
            choice = typer.prompt("Choose an option", default="", show_default=False).strip()
        except typer.Abort:
            console.print()
            return

        if choice == EXIT_CHOICE:
            return

        action = actions.get(choice)
        if action is None:
            console.print("[red]Invalid option.[/red]")
            continue

        try:
            action()
        except typer.Exit as e:
            logger.debug("menu action %s stopped with exit code %s", choice, e.exit_code)
        except typer.Abort:
            console.print("\n[yellow]Cancelled[/yellow]")
