"""Pure functions for expense and budget aggregation.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Works on a snapshot that has already been read from storage
- Empty input gives empty output (or zero), never an error

All monetary amounts are in paise (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from finlite.domain.models import CategoryName, Money
from finlite.domain.records import Budget, Expense


@dataclass(frozen=True)
class CategoryTotal:
    """Immutable category total (sum of expense amounts)."""

    category: CategoryName
    total: Money


@dataclass(frozen=True)
class CategoryAverage:
    """Immutable category average (mean budget limit)."""

    category: CategoryName
    average: Decimal
    count: int


def expense_total(expenses: Iterable[Expense]) -> Money:
    """Sum every expense amount.

    Args:
        expenses: Expense snapshot.

    Returns:
        Grand total in paise (0 for no expenses).
    """
    return Money(sum(e.amount for e in expenses))


def category_summary(expenses: Iterable[Expense]) -> list[CategoryTotal]:
    """Group expenses by category and total each group.

    Grouping is case-sensitive on the category as entered. Output is
    ordered by total descending; equal totals keep the order in which
    their category was first seen.

    Args:
        expenses: Expense snapshot.

    Returns:
        List of CategoryTotal, largest first.
    """
    totals: dict[CategoryName, int] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0) + expense.amount

    # sorted() is stable, so first-seen order survives ties
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [CategoryTotal(category=cat, total=Money(total)) for cat, total in ranked]


def matches_category(category: str, query: str) -> bool:
    """Case-insensitive equality (not substring) between two category names."""
    return category.casefold() == query.casefold()


def find_by_category(expenses: Iterable[Expense], query: str) -> list[Expense]:
    """Select expenses whose category equals the query, ignoring case.

    Args:
        expenses: Expense snapshot.
        query: Category to look for.

    Returns:
        Matching expenses in snapshot order.
    """
    return [e for e in expenses if matches_category(e.category, query)]


def average_by_category(budgets: Iterable[Budget]) -> list[CategoryAverage]:
    """Mean budget limit per category.

    Grouping is case-sensitive. Groups are returned in first-seen order.
    The average is exact (Decimal, in paise); a group always has at least
    one member so there is no division by zero.

    Args:
        budgets: Budget snapshot.

    Returns:
        List of CategoryAverage.
    """
    groups: dict[CategoryName, list[int]] = {}
    for budget in budgets:
        groups.setdefault(budget.category, []).append(budget.limit)

    return [
        CategoryAverage(category=cat, average=Decimal(sum(limits)) / len(limits), count=len(limits))
        for cat, limits in groups.items()
    ]


def budgets_by_tag(budgets: Iterable[Budget], tag: str) -> list[Budget]:
    """Select budgets whose tag set contains ``tag`` (case-sensitive)."""
    return [b for b in budgets if b.has_tag(tag)]


def total_limit(budgets: Iterable[Budget]) -> Money:
    """Sum every budget limit.

    Args:
        budgets: Budget snapshot.

    Returns:
        Total in paise (0 for no budgets).
    """
    return Money(sum(b.limit for b in budgets))


def tag_limit_total(budgets: Iterable[Budget], tag: str) -> Money:
    """Sum limits of the budgets carrying ``tag``.

    Args:
        budgets: Budget snapshot.
        tag: Tag to filter on (case-sensitive exact match).

    Returns:
        Total in paise; exactly 0 when nothing matches.
    """
    return total_limit(budgets_by_tag(budgets, tag))

