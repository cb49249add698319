"""Admin commands for init and file storage."""

import sqlite3
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from finlite.commands.errors import fail, parse_id, reported_errors
from finlite.config import create_default_config, get_config_path
from finlite.store import Database
from finlite.store.schema import init_database

console = Console()


def init_command(db_path: Path, force: bool = False) -> None:
    """Initialize the database and configuration."""
    config_path = get_config_path()

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists: {config_path}[/yellow]")
        console.print("[yellow]Use 'finlite init --force' to overwrite[/yellow]")
    else:
        try:
            create_default_config(config_path)
        except OSError as e:
            fail(f"Filesystem error: {e}")
        console.print(f"[green]✓[/green] Config file created at {config_path} (permissions: 600)")

    try:
        init_database(db_path)
    except sqlite3.Error as e:
        fail(f"Database error: {e}")
    except OSError as e:
        fail(f"Filesystem error: {e}")

    console.print(f"[green]✓[/green] Database ready at {db_path}")


def upload_command(db: Database, file_id: int, source: Path) -> None:
    """Store a file in the database."""
    with reported_errors():
        stored = db.files.upload(file_id, source)
    console.print(f"[green]✓[/green] Uploaded {stored.filename} ({stored.size} bytes) as file {stored.id}")


def download_command(db: Database, file_id: int, target: Path, overwrite: bool = False) -> None:
    """Write a stored file back to the filesystem."""
    with reported_errors():
        stored = db.files.download(file_id, target, overwrite)
    console.print(f"[green]✓[/green] Downloaded file {stored.id} ({stored.filename}) to {target}")


def files_list_command(db: Database) -> None:
    """List stored files."""
    with reported_errors():
        files = db.files.find_all()

    if not files:
        console.print("[yellow]No files stored[/yellow]")
        return

    table = Table(title="Stored files")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Uploaded", style="dim")
    for f in files:
        table.add_row(str(f.id), f.filename, str(f.size), f.uploaded_at)
    console.print(table)


def files_interactive(db: Database) -> None:
    """Prompt for a file to upload, then download a copy of it."""
    console.print("[bold cyan]=== Working with files ===[/bold cyan]\n")
    with reported_errors():
        file_id = parse_id(typer.prompt("File ID"))
    source = Path(typer.prompt("Path of file to upload")).expanduser()
    upload_command(db, file_id, source)

    target = Path(typer.prompt("Download copy to", default=str(source.with_name(f"copy-of-{source.name}")))).expanduser()
    download_command(db, file_id, target, overwrite=True)
