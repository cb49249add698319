"""Tests for finlite.domain.export pure functions."""

import json
from datetime import date
from decimal import Decimal

from finlite.domain.aggregate import CategoryAverage, CategoryTotal
from finlite.domain.export import (
    CSV_HEADER,
    average_lines,
    budget_line,
    csv_lines,
    csv_row,
    document_view,
    expense_line,
    summary_lines,
)
from finlite.domain.models import CategoryName, Description, Money, Month
from finlite.domain.records import Budget, Expense, make_tags
from finlite.domain.samples import sample_expenses


class TestCsv:
    """Tests for csv_row and csv_lines."""

    def test_header_only_for_no_expenses(self) -> None:
        """Should emit just the header."""
        assert csv_lines([]) == ["Date,Category,Amount,Description"]

    def test_row_format(self) -> None:
        """Should render date, category, amount and description."""
        e = Expense(date(2025, 9, 1), Money(15000), CategoryName("Food"), Description("Breakfast"))

        assert csv_row(e) == "2025-09-01,Food,150.00,Breakfast"

    def test_line_count(self) -> None:
        """Should produce N+1 lines for N expenses."""
        expenses = sample_expenses()

        assert len(csv_lines(expenses)) == len(expenses) + 1

    def test_keeps_snapshot_order(self) -> None:
        """Should not sort rows."""
        late = Expense(date(2025, 9, 30), Money(100), CategoryName("B"), Description("late"))
        early = Expense(date(2025, 9, 1), Money(100), CategoryName("A"), Description("early"))

        assert [line.split(",")[3] for line in csv_lines([late, early])[1:]] == ["late", "early"]

    def test_reparse_recovers_fields(self) -> None:
        """Should recover (date, category, amount, description) by splitting on commas."""
        expenses = sample_expenses()
        lines = csv_lines(expenses)

        assert lines[0] == CSV_HEADER
        parsed = [tuple(line.split(",")) for line in lines[1:]]
        expected = [(e.date.isoformat(), e.category, f"{e.amount / 100:.2f}", e.description) for e in expenses]
        assert parsed == expected

    def test_embedded_comma_not_escaped(self) -> None:
        """Should write embedded commas as-is (no quoting)."""
        e = Expense(date(2025, 9, 1), Money(100), CategoryName("Food"), Description("Tea, biscuits"))

        assert csv_row(e) == "2025-09-01,Food,1.00,Tea, biscuits"


class TestConsoleLines:
    """Tests for console rendering helpers."""

    def test_summary_category_column_is_fifteen_wide(self) -> None:
        """Should left-justify the category in 15 characters."""
        lines = summary_lines([CategoryTotal(CategoryName("Food"), Money(142000))])

        assert lines == ["Food            ₹1,420.00"]

    def test_summary_long_category_not_truncated(self) -> None:
        """Should keep categories longer than the column."""
        lines = summary_lines([CategoryTotal(CategoryName("Entertainment Budget"), Money(100))])

        assert lines[0].startswith("Entertainment Budget ")

    def test_average_line(self) -> None:
        """Should render the average with the fixed category column."""
        lines = average_lines([CategoryAverage(CategoryName("Food"), Decimal(400000), 3)], "₹")

        assert lines == ["Food            | Avg: ₹4,000.00"]

    def test_expense_line(self) -> None:
        """Should join fields with ' | '."""
        e = Expense(date(2025, 9, 1), Money(15000), CategoryName("Food"), Description("Breakfast"), id=3)

        assert expense_line(e) == "3 | 2025-09-01 | Food | ₹150.00 | Breakfast"
        assert expense_line(e, with_category=False) == "3 | 2025-09-01 | ₹150.00 | Breakfast"

    def test_budget_line_sorts_tags(self) -> None:
        """Should list tags alphabetically."""
        b = Budget(CategoryName("Monthly Groceries"), Money(500000), Month("2025-10"), make_tags(["home", "food"]))

        assert budget_line(b) == "- Monthly Groceries (Limit: ₹5,000.00) [food, home]"

    def test_document_view_is_json(self) -> None:
        """Should render a document as parseable JSON."""
        doc = {"id": 1, "category": "Food", "amount": 25000}

        assert json.loads(document_view(doc)) == doc
