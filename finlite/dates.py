"""Date utilities for finlite.

Pure functions for parsing and formatting expense dates and budget months.
"""

import re
from datetime import date, datetime

import pandas as pd

from finlite.domain.errors import InvalidInputError
from finlite.domain.models import Month

DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

# Day-first numeric dates: 13/09/2025, 13-09-2025, 13.09.2025
DAY_FIRST_PATTERN = re.compile(r"\d{1,2}[/.-]\d{1,2}[/.-]\d{4}")
MIN_YEAR = 1900
MAX_YEAR = 2100


def parse_date(raw_date: str) -> date:
    """Parse a user-entered date.

    ISO dates (YYYY-MM-DD) are read exactly. Numeric day-first dates such as
    "13/09/2025" go through pandas.to_datetime with dayfirst=True; their year
    must fall between MIN_YEAR and MAX_YEAR. Anything else is rejected.

    Args:
        raw_date: Raw date string.

    Returns:
        Calendar date.

    Raises:
        InvalidInputError: If the date cannot be parsed.
    """
    text = raw_date.strip()
    if not text:
        raise InvalidInputError("Date is required")

    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        pass

    if not DAY_FIRST_PATTERN.fullmatch(text):
        raise InvalidInputError(f"Could not parse date '{raw_date}' (expected YYYY-MM-DD or DD/MM/YYYY)")

    try:
        parsed = pd.to_datetime(text, dayfirst=True)
    except (ValueError, OverflowError, pd.errors.ParserError) as e:
        raise InvalidInputError(f"Could not parse date '{raw_date}'") from e
    if pd.isna(parsed):
        raise InvalidInputError(f"Could not parse date '{raw_date}'")
    if not MIN_YEAR <= parsed.year <= MAX_YEAR:
        raise InvalidInputError(f"Date '{raw_date}' is outside {MIN_YEAR}-{MAX_YEAR}")
    return parsed.date()


def parse_month(raw_month: str) -> Month:
    """Validate a YYYY-MM month string.

    Raises:
        InvalidInputError: If the month is not in YYYY-MM format.
    """
    text = raw_month.strip()
    try:
        datetime.strptime(text, MONTH_FORMAT)
    except ValueError as e:
        raise InvalidInputError(f"Invalid month '{raw_month}' (expected YYYY-MM)") from e
    return Month(text)


def month_label(month: Month) -> str:
    """Human-readable month (e.g., "October 2025").

    Raises:
        ValueError: If month is not in YYYY-MM format.
    """
    return datetime.strptime(month, MONTH_FORMAT).strftime("%B %Y")
