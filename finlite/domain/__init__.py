"""Domain models and types for finlite.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from storage and console
"""

from finlite.domain.errors import InvalidInputError, RecordNotFoundError, StorageError
from finlite.domain.models import CategoryName, Description, Money, Month, Tag
from finlite.domain.records import Budget, Expense

__all__ = [
    "Money",
    "Month",
    "CategoryName",
    "Description",
    "Tag",
    "Expense",
    "Budget",
    "InvalidInputError",
    "RecordNotFoundError",
    "StorageError",
]
