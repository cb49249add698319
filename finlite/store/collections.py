"""Expense and budget collections backed by SQLite.

Both collections expose the same small contract: insert, insert_bulk,
find_by_id, find_all, find(predicate), update, delete and count. Every
read returns a fully materialized list (a snapshot); nothing holds a
live cursor.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from datetime import date
from pathlib import Path
from typing import Any, Generic, TypeVar

from finlite.domain.models import CategoryName, Description, Money, Month, Tag
from finlite.domain.records import Budget, Expense
from finlite.store.connection import connect

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", Expense, Budget)


class _Collection(ABC, Generic[RecordT]):
    """Operations shared by both record kinds."""

    table: str = ""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    @abstractmethod
    def find_all(self) -> list[RecordT]:
        """Return every record, in storage order."""

    def find(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        """Return records matching ``predicate``, in storage order."""
        return [record for record in self.find_all() if predicate(record)]

    def count(self) -> int:
        """Number of records in the collection."""
        with connect(self.db_path) as conn:
            row = conn.execute(f"SELECT COUNT(*) FROM {self.table}").fetchone()
            return int(row[0])

    def delete(self, record_id: int) -> bool:
        """Delete a record by id.

        Returns:
            True if a record was deleted, False if the id is unknown.
        """
        with connect(self.db_path, write=True) as conn:
            cursor = conn.execute(f"DELETE FROM {self.table} WHERE id = ?", (record_id,))
            deleted = cursor.rowcount > 0
        logger.debug("delete %s id=%s deleted=%s", self.table, record_id, deleted)
        return deleted


class ExpenseCollection(_Collection[Expense]):
    """Expenses stored in the ``expenses`` table."""

    table = "expenses"

    @staticmethod
    def _from_row(row: sqlite3.Row) -> Expense:
        return Expense(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            amount=Money(row["amount"]),
            category=CategoryName(row["category"]),
            description=Description(row["description"]),
        )

    @staticmethod
    def _params(expense: Expense) -> tuple[str, int, str, str]:
        return (expense.date.isoformat(), expense.amount, expense.category, expense.description)

    def insert(self, expense: Expense) -> int:
        """Insert an expense.

        Args:
            expense: Expense to store; its id is ignored.

        Returns:
            The id assigned by the store.

        Raises:
            StorageError: If database operation fails.
        """
        with connect(self.db_path, write=True) as conn:
            cursor = conn.execute(
                "INSERT INTO expenses (date, amount, category, description) VALUES (?, ?, ?, ?)",
                self._params(expense),
            )
            new_id = cursor.lastrowid
        logger.debug("insert expense id=%s category=%s", new_id, expense.category)
        assert new_id is not None
        return new_id

    def insert_bulk(self, expenses: Iterable[Expense]) -> int:
        """Insert many expenses in a single transaction.

        Returns:
            Number of expenses inserted.
        """
        params = [self._params(e) for e in expenses]
        with connect(self.db_path, write=True) as conn:
            conn.executemany(
                "INSERT INTO expenses (date, amount, category, description) VALUES (?, ?, ?, ?)",
                params,
            )
        logger.debug("insert_bulk expenses count=%d", len(params))
        return len(params)

    def find_by_id(self, expense_id: int) -> Expense | None:
        """Get an expense by id, or None if it does not exist."""
        with connect(self.db_path) as conn:
            row = conn.execute(
                "SELECT id, date, amount, category, description FROM expenses WHERE id = ?",
                (expense_id,),
            ).fetchone()
        return self._from_row(row) if row else None

    def find_all(self) -> list[Expense]:
        """Get every expense in insertion (id) order."""
        with connect(self.db_path) as conn:
            rows = conn.execute("SELECT id, date, amount, category, description FROM expenses ORDER BY id").fetchall()
        return [self._from_row(row) for row in rows]

    def update(self, expense: Expense) -> bool:
        """Overwrite every field of a stored expense.

        Returns:
            True if the expense was updated, False if its id is unknown.
        """
        if expense.id is None:
            return False
        with connect(self.db_path, write=True) as conn:
            cursor = conn.execute(
                "UPDATE expenses SET date = ?, amount = ?, category = ?, description = ? WHERE id = ?",
                (*self._params(expense), expense.id),
            )
            updated = cursor.rowcount > 0
        logger.debug("update expense id=%s updated=%s", expense.id, updated)
        return updated

    def raw_documents(self) -> list[dict[str, Any]]:
        """Get every expense row exactly as stored (no mapping to Expense)."""
        with connect(self.db_path) as conn:
            rows = conn.execute("SELECT * FROM expenses ORDER BY id").fetchall()
        return [dict(row) for row in rows]


class BudgetCollection(_Collection[Budget]):
    """Budgets stored in ``budgets`` with one ``budget_tags`` row per tag."""

    table = "budgets"

    @staticmethod
    def _from_row(row: sqlite3.Row, tags: Iterable[str]) -> Budget:
        return Budget(
            id=row["id"],
            category=CategoryName(row["category"]),
            limit=Money(row["limit"]),
            month=Month(row["month"]),
            tags=frozenset(Tag(t) for t in tags),
        )

    @staticmethod
    def _insert(conn: sqlite3.Connection, budget: Budget) -> int:
        cursor = conn.execute(
            'INSERT INTO budgets (category, "limit", month) VALUES (?, ?, ?)',
            (budget.category, budget.limit, budget.month),
        )
        budget_id = cursor.lastrowid
        assert budget_id is not None
        conn.executemany(
            "INSERT INTO budget_tags (budget_id, tag) VALUES (?, ?)",
            [(budget_id, tag) for tag in budget.tags],
        )
        return budget_id

    @staticmethod
    def _load_tags(conn: sqlite3.Connection) -> dict[int, list[str]]:
        tags: dict[int, list[str]] = {}
        for row in conn.execute("SELECT budget_id, tag FROM budget_tags"):
            tags.setdefault(row["budget_id"], []).append(row["tag"])
        return tags

    def _select(self, where: str = "", params: tuple[Any, ...] = ()) -> list[Budget]:
        # Rows and tags are read in one transaction so they agree
        with connect(self.db_path) as conn:
            rows = conn.execute(f'SELECT id, category, "limit", month FROM budgets {where} ORDER BY id', params).fetchall()
            tags = self._load_tags(conn)
        return [self._from_row(row, tags.get(row["id"], [])) for row in rows]

    def insert(self, budget: Budget) -> int:
        """Insert a budget and index its tags.

        Returns:
            The id assigned by the store.

        Raises:
            StorageError: If database operation fails.
        """
        with connect(self.db_path, write=True) as conn:
            new_id = self._insert(conn, budget)
        logger.debug("insert budget id=%s category=%s tags=%s", new_id, budget.category, sorted(budget.tags))
        return new_id

    def insert_bulk(self, budgets: Iterable[Budget]) -> int:
        """Insert many budgets in a single transaction.

        Returns:
            Number of budgets inserted.
        """
        inserted = 0
        with connect(self.db_path, write=True) as conn:
            for budget in budgets:
                self._insert(conn, budget)
                inserted += 1
        logger.debug("insert_bulk budgets count=%d", inserted)
        return inserted

    def find_by_id(self, budget_id: int) -> Budget | None:
        """Get a budget by id, or None if it does not exist."""
        found = self._select("WHERE id = ?", (budget_id,))
        return found[0] if found else None

    def find_all(self) -> list[Budget]:
        """Get every budget in insertion (id) order."""
        return self._select()

    def find_by_tag(self, tag: str) -> list[Budget]:
        """Get budgets carrying ``tag`` using the tag index.

        Matching is case-sensitive and exact: "monthly" does not match
        "Monthly".
        """
        return self._select("WHERE id IN (SELECT budget_id FROM budget_tags WHERE tag = ?)", (tag,))

    def update(self, budget: Budget) -> bool:
        """Overwrite every field of a stored budget, tags included.

        Returns:
            True if the budget was updated, False if its id is unknown.
        """
        if budget.id is None:
            return False
        with connect(self.db_path, write=True) as conn:
            cursor = conn.execute(
                'UPDATE budgets SET category = ?, "limit" = ?, month = ? WHERE id = ?',
                (budget.category, budget.limit, budget.month, budget.id),
            )
            updated = cursor.rowcount > 0
            if updated:
                conn.execute("DELETE FROM budget_tags WHERE budget_id = ?", (budget.id,))
                conn.executemany(
                    "INSERT INTO budget_tags (budget_id, tag) VALUES (?, ?)",
                    [(budget.id, tag) for tag in budget.tags],
                )
        logger.debug("update budget id=%s updated=%s", budget.id, updated)
        return updated
