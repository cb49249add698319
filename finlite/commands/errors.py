"""Shared error reporting for commands."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape

from finlite.domain.errors import InvalidInputError, RecordNotFoundError, StorageError

console = Console()


def fail(message: str) -> NoReturn:
    """Print an error and stop the current command with exit code 1."""
    console.print(f"[red]{escape(message)}[/red]", style="bold")
    raise typer.Exit(code=1)


@contextmanager
def reported_errors() -> Iterator[None]:
    """Turn domain and storage failures into a printed error and typer.Exit(1)."""
    try:
        yield
    except InvalidInputError as e:
        fail(f"Invalid input: {e}")
    except RecordNotFoundError as e:
        fail(str(e))
    except StorageError as e:
        fail(str(e))
    except OSError as e:
        fail(f"Filesystem error: {e}")


def parse_id(raw_id: str) -> int:
    """Parse a record id typed by the user.

    Raises:
        InvalidInputError: If the id is not a positive integer.
    """
    try:
        record_id = int(raw_id.strip())
    except ValueError as e:
        raise InvalidInputError(f"Invalid id: '{raw_id}'") from e
    if record_id <= 0:
        raise InvalidInputError(f"Invalid id: '{raw_id}'")
    return record_id
