"""Expense and budget records.

Records are immutable. The store assigns ``id`` on insert; until then it
is ``None``. Amounts and limits are in paise (Money type).
"""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import date

from finlite.domain.errors import InvalidInputError
from finlite.domain.models import CategoryName, Description, Money, Month, Tag


@dataclass(frozen=True)
class Expense:
    """Immutable expense record."""

    date: date
    amount: Money
    category: CategoryName
    description: Description
    id: int | None = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise InvalidInputError("Amount must not be negative")

    def with_id(self, record_id: int) -> "Expense":
        """Return a copy carrying the id assigned by the store."""
        return replace(self, id=record_id)


@dataclass(frozen=True)
class Budget:
    """Immutable budget record with a set of tags."""

    category: CategoryName
    limit: Money
    month: Month
    tags: frozenset[Tag] = field(default_factory=frozenset)
    id: int | None = None

    def __post_init__(self) -> None:
        if self.limit < 0:
            raise InvalidInputError("Limit must not be negative")
        # Accept any iterable of tags; duplicates collapse.
        if not isinstance(self.tags, frozenset):
            object.__setattr__(self, "tags", frozenset(self.tags))

    def with_id(self, record_id: int) -> "Budget":
        """Return a copy carrying the id assigned by the store."""
        return replace(self, id=record_id)

    def has_tag(self, tag: str) -> bool:
        """Check tag membership (case-sensitive exact match)."""
        return tag in self.tags


def make_tags(tags: Iterable[str]) -> frozenset[Tag]:
    """Build a tag set from raw strings, dropping blanks.

    Args:
        tags: Raw tag strings.

    Returns:
        Frozen set of stripped, non-empty tags.
    """
    return frozenset(Tag(t.strip()) for t in tags if t.strip())
