"""CLI entry point for finlite."""

import tomllib
from dataclasses import replace
from pathlib import Path

import typer

from finlite.commands.admin import download_command, files_list_command, init_command, upload_command
from finlite.commands.budgets import add_budget_command, list_budgets_command
from finlite.commands.errors import fail, reported_errors
from finlite.commands.expenses import (
    add_command,
    delete_command,
    list_command,
    query_command,
    sample_command,
    update_command,
)
from finlite.commands.menu import menu_command
from finlite.commands.report import (
    LOOKUP_TAG,
    SUMMARY_TAG,
    aggregates_command,
    export_command,
    raw_command,
    summary_command,
    tags_command,
)
from finlite.commands.simulate import simulate_command
from finlite.config import Settings, load_settings
from finlite.logs import setup_logging
from finlite.store import Database, open_database

app = typer.Typer(
    name="finlite",
    help="finlite - expenses and budgets in a small embedded database",
    add_completion=False,
)
files_app = typer.Typer(help="Store and retrieve files inside the database.")
app.add_typer(files_app, name="files")


@app.callback()
def main(
    ctx: typer.Context,
    db: Path = typer.Option(None, "--db", help="Database file (overrides config)"),
    config: Path = typer.Option(None, "--config", help="Config file (default: ~/.config/finlite/config.toml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """finlite - expenses and budgets in a small embedded database."""
    try:
        settings = load_settings(config)
    except tomllib.TOMLDecodeError as e:
        fail(f"Invalid config file: {e}")
    if db is not None:
        settings = replace(settings, db_path=db.expanduser())

    setup_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


def _open(ctx: typer.Context) -> tuple[Database, Settings]:
    settings: Settings = ctx.obj
    with reported_errors():
        db = open_database(settings.db_path)
    return db, settings


@app.command(name="init")
def init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize the finlite database and configuration."""
    settings: Settings = ctx.obj
    init_command(settings.db_path, force)


@app.command()
def menu(ctx: typer.Context) -> None:
    """Run the interactive numbered menu."""
    db, settings = _open(ctx)
    menu_command(db, settings)


@app.command()
def sample(ctx: typer.Context) -> None:
    """Insert the sample expenses and budgets."""
    db, _ = _open(ctx)
    sample_command(db)


@app.command()
def add(
    ctx: typer.Context,
    date: str = typer.Argument(..., help="Expense date (YYYY-MM-DD)"),
    amount: str = typer.Argument(..., help="Amount in rupees"),
    category: str = typer.Argument(..., help="Category"),
    description: str = typer.Argument("", help="Description"),
) -> None:
    """Add an expense."""
    db, _ = _open(ctx)
    add_command(db, date, amount, category, description)


@app.command()
def update(
    ctx: typer.Context,
    expense_id: int = typer.Argument(..., help="Expense ID"),
    amount: str = typer.Option(..., "--amount", help="New amount in rupees"),
    category: str = typer.Option(..., "--category", help="New category"),
    description: str = typer.Option("", "--description", help="New description"),
) -> None:
    """Update an expense's amount, category and description."""
    db, _ = _open(ctx)
    update_command(db, expense_id, amount, category, description)


@app.command()
def delete(ctx: typer.Context, expense_id: int = typer.Argument(..., help="Expense ID")) -> None:
    """Delete an expense."""
    db, _ = _open(ctx)
    delete_command(db, expense_id)


@app.command(name="list")
def list_expenses(ctx: typer.Context) -> None:
    """List all expenses."""
    db, settings = _open(ctx)
    list_command(db, settings)


@app.command()
def query(ctx: typer.Context, category: str = typer.Argument(..., help="Category (case-insensitive)")) -> None:
    """Show expenses in a category."""
    db, settings = _open(ctx)
    query_command(db, settings, category)


@app.command()
def summary(ctx: typer.Context) -> None:
    """Show total spending per category, largest first."""
    db, settings = _open(ctx)
    summary_command(db, settings)


@app.command()
def export(
    ctx: typer.Context,
    output: Path = typer.Option(None, "--output", "-o", help="CSV file (default from config)"),
) -> None:
    """Export all expenses to CSV."""
    db, settings = _open(ctx)
    export_command(db, settings, output)


@app.command()
def simulate(ctx: typer.Context) -> None:
    """Run the concurrent reader/writer simulation."""
    db, settings = _open(ctx)
    simulate_command(db, settings)


@app.command()
def raw(ctx: typer.Context) -> None:
    """Show expenses as stored documents."""
    db, _ = _open(ctx)
    raw_command(db)


@app.command(name="budget-add")
def budget_add(
    ctx: typer.Context,
    category: str = typer.Argument(..., help="Category"),
    limit: str = typer.Argument(..., help="Limit in rupees"),
    month: str = typer.Argument(..., help="Month (YYYY-MM)"),
    tag: list[str] = typer.Option([], "--tag", "-t", help="Tag (repeatable, or comma-separated)"),
) -> None:
    """Add a budget."""
    db, _ = _open(ctx)
    add_budget_command(db, category, limit, month, tag)


@app.command()
def budgets(ctx: typer.Context) -> None:
    """List all budgets."""
    db, settings = _open(ctx)
    list_budgets_command(db, settings)


@app.command()
def tags(
    ctx: typer.Context,
    tag: str = typer.Argument(LOOKUP_TAG, help="Tag to look up (case-sensitive)"),
    seed: bool = typer.Option(False, "--seed", help="Insert the tagged example budgets first"),
) -> None:
    """List budgets carrying a tag."""
    db, settings = _open(ctx)
    tags_command(db, settings, tag, seed)


@app.command()
def aggregates(
    ctx: typer.Context,
    tag: str = typer.Option(SUMMARY_TAG, "--tag", help="Tag for the filtered sum"),
) -> None:
    """Show budget sum, tag-filtered sum and average limit per category."""
    db, settings = _open(ctx)
    aggregates_command(db, settings, tag)


@files_app.command("upload")
def files_upload(
    ctx: typer.Context,
    file_id: int = typer.Argument(..., help="ID to store the file under"),
    source: Path = typer.Argument(..., help="File to upload"),
) -> None:
    """Upload a file into the database."""
    db, _ = _open(ctx)
    upload_command(db, file_id, source)


@files_app.command("download")
def files_download(
    ctx: typer.Context,
    file_id: int = typer.Argument(..., help="Stored file ID"),
    target: Path = typer.Argument(..., help="Destination path"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing destination file"),
) -> None:
    """Download a stored file."""
    db, _ = _open(ctx)
    download_command(db, file_id, target, overwrite)


@files_app.command("list")
def files_list(ctx: typer.Context) -> None:
    """List stored files."""
    db, _ = _open(ctx)
    files_list_command(db)


if __name__ == "__main__":
    app()
