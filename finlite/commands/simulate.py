"""Concurrency simulation command."""

from rich.console import Console

from finlite.commands.errors import reported_errors
from finlite.config import Settings
from finlite.simulation import run_simulation
from finlite.store import Database

console = Console()


def simulate_command(db: Database, settings: Settings) -> None:
    """Run one writer and several readers against the expense collection."""
    sim = settings.simulation
    with reported_errors():
        result = run_simulation(
            db.expenses,
            writes=sim.writes,
            readers=sim.readers,
            reads_per_reader=sim.reads_per_reader,
            write_delay=sim.write_delay,
            read_delay=sim.read_delay,
            on_event=console.print,
        )

    console.print(f"[dim]Expenses before: {result.initial_count}, after: {result.final_count}[/dim]")
    if result.final_count != result.initial_count + result.inserted:
        console.print("[yellow]Final count does not match the number of inserts[/yellow]")
    if not result.readers_monotonic:
        console.print("[yellow]A reader saw the collection shrink[/yellow]")
