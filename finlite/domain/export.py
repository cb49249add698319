"""Pure functions for rendering expenses as CSV and console text.

CSV output is deliberately unescaped: a category or description that
contains a comma produces an extra column. Readers must not rely on the
file for such values.
"""

import json
from collections.abc import Iterable
from typing import Any

from finlite.domain.aggregate import CategoryAverage, CategoryTotal
from finlite.domain.money import format_amount, format_money
from finlite.domain.records import Budget, Expense

CSV_HEADER = "Date,Category,Amount,Description"
CATEGORY_WIDTH = 15


def csv_row(expense: Expense) -> str:
    """Render one expense as an unescaped CSV line."""
    return ",".join(
        [expense.date.isoformat(), expense.category, format_amount(expense.amount), expense.description]
    )


def csv_lines(expenses: Iterable[Expense]) -> list[str]:
    """Render the header plus one line per expense, in snapshot order.

    Args:
        expenses: Expense snapshot.

    Returns:
        List of lines without line terminators.
    """
    return [CSV_HEADER, *(csv_row(e) for e in expenses)]


def expense_line(expense: Expense, currency: str = "₹", with_category: bool = True) -> str:
    """Render an expense as a ' | ' joined line for plain console output."""
    fields = [str(expense.id), expense.date.isoformat()]
    if with_category:
        fields.append(expense.category)
    fields.extend([format_money(expense.amount, currency), expense.description])
    return " | ".join(fields)


def summary_lines(rows: Iterable[CategoryTotal], currency: str = "₹") -> list[str]:
    """Render category totals with a fixed-width, left-justified category column."""
    return [f"{row.category:<{CATEGORY_WIDTH}} {format_money(row.total, currency)}" for row in rows]


def average_lines(rows: Iterable[CategoryAverage], currency: str = "₹") -> list[str]:
    """Render category averages with a fixed-width, left-justified category column."""
    return [f"{row.category:<{CATEGORY_WIDTH}} | Avg: {format_money(row.average, currency)}" for row in rows]


def budget_line(budget: Budget, currency: str = "₹") -> str:
    """Render a budget as '- Category (Limit: ...)' with its sorted tags."""
    tags = ", ".join(sorted(budget.tags))
    return f"- {budget.category} (Limit: {format_money(budget.limit, currency)}) [{tags}]"


def document_view(document: dict[str, Any]) -> str:
    """Render a raw stored document as indented JSON."""
    return json.dumps(document, indent=2, ensure_ascii=False, default=str)
