"""Database store layer - provides persistence for the application.

``Database`` bundles the collections of one database file and is passed
explicitly to every action.
"""

import sqlite3
from dataclasses import dataclass, field
from pathlib import Path

from finlite.domain.errors import StorageError
from finlite.store.collections import BudgetCollection, ExpenseCollection
from finlite.store.files import FileStorage, StoredFile
from finlite.store.schema import database_exists, get_db_path, init_database


@dataclass
class Database:
    """Collections stored in a single SQLite file."""

    path: Path
    expenses: ExpenseCollection = field(init=False)
    budgets: BudgetCollection = field(init=False)
    files: FileStorage = field(init=False)

    def __post_init__(self) -> None:
        self.expenses = ExpenseCollection(self.path)
        self.budgets = BudgetCollection(self.path)
        self.files = FileStorage(self.path)


def open_database(db_path: Path | None = None) -> Database:
    """Ensure the schema exists and return the collections for ``db_path``.

    Raises:
        StorageError: If the database cannot be initialized.
    """
    path = db_path or get_db_path()
    try:
        init_database(path)
    except sqlite3.Error as e:
        raise StorageError(f"Could not initialize database {path}: {e}") from e
    return Database(path)


__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Collections
    "BudgetCollection",
    "Database",
    "ExpenseCollection",
    "FileStorage",
    "StoredFile",
    "open_database",
]
