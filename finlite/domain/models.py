"""Domain type definitions for finlite.

These NewTypes provide semantic clarity and help with type checking:
- Money: Amount in paise (minor units)
- Month: Month in YYYY-MM format
- CategoryName: Free-text expense or budget category
- Description: Expense description text
- Tag: Free-text budget label
"""

from typing import NewType

# Money amounts are stored as paise (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Month is always in YYYY-MM format (e.g., "2025-10")
Month = NewType("Month", str)

# Category name, matched as entered (no normalization)
CategoryName = NewType("CategoryName", str)

# Expense description text
Description = NewType("Description", str)

# Budget tag, compared case-sensitively
Tag = NewType("Tag", str)
