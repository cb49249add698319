"""Sample records used by the demo actions."""

from datetime import date

from finlite.domain.models import CategoryName, Description, Money, Month
from finlite.domain.records import Budget, Expense, make_tags

SAMPLE_MONTH = Month("2025-10")

_SAMPLE_EXPENSES = [
    ("2025-09-01", 150, "Food", "Breakfast"),
    ("2025-09-01", 50, "Transport", "Bus fare"),
    ("2025-09-02", 200, "Food", "Lunch"),
    ("2025-09-02", 300, "Shopping", "Groceries"),
    ("2025-09-03", 120, "Food", "Dinner"),
    ("2025-09-03", 75, "Transport", "Taxi"),
    ("2025-09-04", 500, "Shopping", "Clothes"),
    ("2025-09-04", 250, "Health", "Medicines"),
    ("2025-09-05", 80, "Food", "Breakfast"),
    ("2025-09-05", 60, "Transport", "Metro"),
    ("2025-09-06", 150, "Food", "Lunch"),
    ("2025-09-06", 100, "Entertainment", "Movie"),
    ("2025-09-07", 200, "Food", "Dinner"),
    ("2025-09-07", 300, "Shopping", "Electronics"),
    ("2025-09-08", 120, "Health", "Doctor visit"),
    ("2025-09-08", 50, "Transport", "Bus fare"),
    ("2025-09-09", 400, "Shopping", "Shoes"),
    ("2025-09-09", 90, "Food", "Lunch"),
    ("2025-09-10", 60, "Transport", "Taxi"),
    ("2025-09-10", 180, "Food", "Dinner"),
    ("2025-09-11", 120, "Entertainment", "Concert"),
    ("2025-09-11", 300, "Shopping", "Groceries"),
    ("2025-09-12", 50, "Transport", "Metro"),
    ("2025-09-12", 100, "Food", "Breakfast"),
    ("2025-09-13", 150, "Food", "Lunch"),
]

_SAMPLE_BUDGETS = [
    ("Food", 8000, ["Monthly", "Essential"]),
    ("Travel", 5000, ["Monthly", "Optional"]),
    ("Entertainment", 3000, ["Optional"]),
    ("Health", 4000, ["Essential"]),
    ("Savings", 10000, ["Monthly", "Goal"]),
]

_TAGGED_BUDGETS = [
    ("Monthly Groceries", 5000, ["food", "monthly", "home"]),
    ("Entertainment Budget", 2000, ["fun", "monthly", "leisure"]),
    ("Office Expenses", 10000, ["office", "work", "monthly"]),
]


def _budgets(rows: list[tuple[str, int, list[str]]]) -> list[Budget]:
    return [
        Budget(category=CategoryName(cat), limit=Money(limit * 100), month=SAMPLE_MONTH, tags=make_tags(tags))
        for cat, limit, tags in rows
    ]


def sample_expenses() -> list[Expense]:
    """Twenty-five expenses spread over 1-13 September 2025."""
    return [
        Expense(
            date=date.fromisoformat(day),
            amount=Money(rupees * 100),
            category=CategoryName(cat),
            description=Description(desc),
        )
        for day, rupees, cat, desc in _SAMPLE_EXPENSES
    ]


def sample_budgets() -> list[Budget]:
    """Five budgets tagged Monthly/Essential/Optional/Goal."""
    return _budgets(_SAMPLE_BUDGETS)


def tagged_budgets() -> list[Budget]:
    """Three budgets with lowercase tags for the multi-key tag lookup."""
    return _budgets(_TAGGED_BUDGETS)


def seed_expenses(today: date) -> list[Expense]:
    """Two expenses inserted when the raw document view finds an empty collection."""
    return [
        Expense(date=today, amount=Money(25000), category=CategoryName("Food"), description=Description("Lunch")),
        Expense(date=today, amount=Money(10000), category=CategoryName("Transport"), description=Description("Taxi")),
    ]
