"""Tests for the SQLite-backed collections and file storage."""

import sqlite3
from datetime import date
from pathlib import Path

import pytest

from finlite.domain.errors import RecordNotFoundError, StorageError
from finlite.domain.models import CategoryName, Description, Money, Month
from finlite.domain.records import Budget, Expense, make_tags
from finlite.domain.samples import sample_budgets, sample_expenses, tagged_budgets
from finlite.store import Database, open_database
from finlite.store.collections import _Collection
from finlite.store.schema import database_exists, init_database


@pytest.fixture
def db(tmp_path: Path) -> Database:
    return open_database(tmp_path / "finlite.db")


def make_expense(category: str = "Food", rupees: int = 100, description: str = "Lunch") -> Expense:
    return Expense(date(2025, 9, 1), Money(rupees * 100), CategoryName(category), Description(description))


class TestSchema:
    """Tests for init_database."""

    def test_creates_file(self, tmp_path: Path) -> None:
        """Should create the database and parent directories."""
        path = tmp_path / "nested" / "finlite.db"
        assert not database_exists(path)

        init_database(path)

        assert database_exists(path)

    def test_idempotent(self, tmp_path: Path) -> None:
        """Should be safe to run twice."""
        path = tmp_path / "finlite.db"
        init_database(path)
        init_database(path)

        conn = sqlite3.connect(path)
        tables = {row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")}
        conn.close()
        assert {"expenses", "budgets", "budget_tags", "files"} <= tables


class TestExpenseCollection:
    """Tests for ExpenseCollection."""

    def test_insert_assigns_unique_ids(self, db: Database) -> None:
        """Should assign a new id to each insert."""
        first = db.expenses.insert(make_expense())
        second = db.expenses.insert(make_expense())

        assert first != second
        assert db.expenses.count() == 2

    def test_find_by_id_round_trip(self, db: Database) -> None:
        """Should read back every field."""
        expense_id = db.expenses.insert(make_expense("Transport", 75, "Taxi"))

        found = db.expenses.find_by_id(expense_id)

        assert found == make_expense("Transport", 75, "Taxi").with_id(expense_id)

    def test_find_by_id_missing(self, db: Database) -> None:
        """Should return None for an unknown id."""
        assert db.expenses.find_by_id(999) is None

    def test_insert_bulk(self, db: Database) -> None:
        """Should insert every sample expense."""
        assert db.expenses.insert_bulk(sample_expenses()) == 25
        assert db.expenses.count() == 25

    def test_find_all_in_insert_order(self, db: Database) -> None:
        """Should return expenses in insertion order."""
        db.expenses.insert_bulk(sample_expenses())

        found = db.expenses.find_all()

        assert [e.description for e in found] == [e.description for e in sample_expenses()]

    def test_find_all_empty(self, db: Database) -> None:
        """Should return an empty list for an empty collection."""
        assert db.expenses.find_all() == []

    def test_find_with_predicate(self, db: Database) -> None:
        """Should filter with a Python predicate."""
        db.expenses.insert_bulk(sample_expenses())

        found = db.expenses.find(lambda e: e.category == "Health")

        assert [e.description for e in found] == ["Medicines", "Doctor visit"]

    def test_snapshot_not_affected_by_later_writes(self, db: Database) -> None:
        """Should return a materialized list."""
        db.expenses.insert(make_expense())
        snapshot = db.expenses.find_all()

        db.expenses.insert(make_expense())

        assert len(snapshot) == 1

    def test_update_overwrites_fields(self, db: Database) -> None:
        """Should replace amount, category and description."""
        expense_id = db.expenses.insert(make_expense())
        updated = Expense(date(2025, 9, 2), Money(999), CategoryName("Health"), Description("Pills"), id=expense_id)

        assert db.expenses.update(updated) is True
        assert db.expenses.find_by_id(expense_id) == updated

    def test_update_unknown_id(self, db: Database) -> None:
        """Should report NotFound as False."""
        assert db.expenses.update(make_expense().with_id(42)) is False

    def test_update_without_id(self, db: Database) -> None:
        """Should not update a record that was never stored."""
        assert db.expenses.update(make_expense()) is False

    def test_delete(self, db: Database) -> None:
        """Should delete by id and report unknown ids."""
        expense_id = db.expenses.insert(make_expense())

        assert db.expenses.delete(expense_id) is True
        assert db.expenses.delete(expense_id) is False
        assert db.expenses.count() == 0

    def test_raw_documents(self, db: Database) -> None:
        """Should return stored rows as dictionaries."""
        expense_id = db.expenses.insert(make_expense())

        docs = db.expenses.raw_documents()

        assert docs == [
            {"id": expense_id, "date": "2025-09-01", "amount": 10000, "category": "Food", "description": "Lunch"}
        ]


class TestBudgetCollection:
    """Tests for BudgetCollection."""

    def test_round_trip_with_tags(self, db: Database) -> None:
        """Should store and load tags as a set."""
        budget = Budget(CategoryName("Food"), Money(800000), Month("2025-10"), make_tags(["Monthly", "Essential"]))
        budget_id = db.budgets.insert(budget)

        assert db.budgets.find_by_id(budget_id) == budget.with_id(budget_id)

    def test_budget_without_tags(self, db: Database) -> None:
        """Should allow an empty tag set."""
        budget_id = db.budgets.insert(Budget(CategoryName("Misc"), Money(0), Month("2025-10")))

        found = db.budgets.find_by_id(budget_id)

        assert found is not None
        assert found.tags == frozenset()

    def test_find_by_tag_uses_exact_case(self, db: Database) -> None:
        """Should match tags case-sensitively."""
        db.budgets.insert_bulk(sample_budgets())
        db.budgets.insert_bulk(tagged_budgets())

        assert [b.category for b in db.budgets.find_by_tag("Monthly")] == ["Food", "Travel", "Savings"]
        assert [b.category for b in db.budgets.find_by_tag("monthly")] == [
            "Monthly Groceries",
            "Entertainment Budget",
            "Office Expenses",
        ]

    def test_find_by_tag_returns_full_tag_sets(self, db: Database) -> None:
        """Should load every tag of a matching budget, not only the queried one."""
        db.budgets.insert_bulk(tagged_budgets())

        (groceries,) = db.budgets.find_by_tag("food")

        assert groceries.tags == frozenset({"food", "monthly", "home"})

    def test_find_by_tag_no_match(self, db: Database) -> None:
        """Should return an empty list."""
        db.budgets.insert_bulk(sample_budgets())

        assert db.budgets.find_by_tag("Nope") == []

    def test_update_replaces_tags(self, db: Database) -> None:
        """Should overwrite tags on update."""
        budget_id = db.budgets.insert(
            Budget(CategoryName("Food"), Money(100), Month("2025-10"), make_tags(["Monthly"]))
        )
        updated = Budget(CategoryName("Food"), Money(200), Month("2025-11"), make_tags(["Yearly"]), id=budget_id)

        assert db.budgets.update(updated) is True
        assert db.budgets.find_by_tag("Monthly") == []
        assert db.budgets.find_by_id(budget_id) == updated

    def test_update_unknown_id(self, db: Database) -> None:
        """Should report NotFound as False."""
        missing = Budget(CategoryName("Food"), Money(100), Month("2025-10"), id=77)
        assert db.budgets.update(missing) is False

    def test_delete_removes_tag_index_entries(self, db: Database) -> None:
        """Should drop the budget's tags with it."""
        budget_id = db.budgets.insert(
            Budget(CategoryName("Food"), Money(100), Month("2025-10"), make_tags(["Monthly"]))
        )

        assert db.budgets.delete(budget_id) is True
        assert db.budgets.find_by_tag("Monthly") == []
        assert db.budgets.count() == 0


class TestStorageErrors:
    """Tests for storage failure reporting."""

    def test_sqlite_error_wrapped(self, tmp_path: Path) -> None:
        """Should raise StorageError when the schema is missing."""
        # A directory cannot be opened as a database file
        broken = Database(tmp_path)

        with pytest.raises(StorageError):
            broken.expenses.count()

    def test_failed_bulk_insert_rolls_back(self, db: Database) -> None:
        """Should insert nothing when one row of a bulk insert fails."""
        db.expenses.insert(make_expense())
        good = make_expense()
        bad = make_expense()
        # Bypass record validation to hit the CHECK constraint
        object.__setattr__(bad, "amount", Money(-1))

        with pytest.raises(StorageError):
            db.expenses.insert_bulk([good, bad])

        assert db.expenses.count() == 1

    def test_oversized_amount_wrapped(self, db: Database) -> None:
        """Should raise StorageError for an amount beyond SQLite INTEGER."""
        with pytest.raises(StorageError):
            db.expenses.insert(make_expense(rupees=2**63))

        assert db.expenses.count() == 0

    def test_collection_base_is_abstract(self, tmp_path: Path) -> None:
        """Should refuse to build a collection without find_all."""
        with pytest.raises(TypeError):
            _Collection(tmp_path / "finlite.db")


class TestFileStorage:
    """Tests for FileStorage."""

    def test_upload_and_download(self, db: Database, tmp_path: Path) -> None:
        """Should restore the exact bytes."""
        source = tmp_path / "hobbit.jpg"
        source.write_bytes(b"\x89PNG\x00binary")

        stored = db.files.upload(123, source)
        target = tmp_path / "out" / "copy-of-hobbit.jpg"
        db.files.download(123, target)

        assert stored.filename == "hobbit.jpg"
        assert stored.size == 11
        assert target.read_bytes() == source.read_bytes()

    def test_upload_replaces_same_id(self, db: Database, tmp_path: Path) -> None:
        """Should overwrite the stored file for a reused id."""
        first = tmp_path / "a.txt"
        first.write_text("one")
        second = tmp_path / "b.txt"
        second.write_text("two!")

        db.files.upload(1, first)
        db.files.upload(1, second)

        files = db.files.find_all()
        assert [(f.id, f.filename, f.size) for f in files] == [(1, "b.txt", 4)]

    def test_download_unknown_id(self, db: Database, tmp_path: Path) -> None:
        """Should raise RecordNotFoundError."""
        with pytest.raises(RecordNotFoundError):
            db.files.download(5, tmp_path / "x")

    def test_download_refuses_overwrite(self, db: Database, tmp_path: Path) -> None:
        """Should keep an existing target unless overwrite is set."""
        source = tmp_path / "a.txt"
        source.write_text("data")
        db.files.upload(1, source)
        target = tmp_path / "target.txt"
        target.write_text("keep")

        with pytest.raises(FileExistsError):
            db.files.download(1, target)
        assert target.read_text() == "keep"

        db.files.download(1, target, overwrite=True)
        assert target.read_text() == "data"

    def test_upload_missing_source(self, db: Database, tmp_path: Path) -> None:
        """Should raise FileNotFoundError for a missing source file."""
        with pytest.raises(FileNotFoundError):
            db.files.upload(1, tmp_path / "missing.bin")

    def test_delete(self, db: Database, tmp_path: Path) -> None:
        """Should delete and report unknown ids."""
        source = tmp_path / "a.txt"
        source.write_text("data")
        db.files.upload(1, source)

        assert db.files.delete(1) is True
        assert db.files.delete(1) is False
        assert db.files.find_by_id(1) is None
