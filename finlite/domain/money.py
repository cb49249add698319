"""Pure functions for converting between paise and display amounts."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, Overflow

from finlite.domain.errors import InvalidInputError
from finlite.domain.models import Money

PAISE_PER_RUPEE = 100

# Largest amount SQLite can store in an INTEGER column
MAX_PAISE = 2**63 - 1


def parse_money(amount_str: str) -> Money:
    """Parse a user-entered amount in rupees to paise.

    Args:
        amount_str: String containing a non-negative amount (e.g. "150", "99.5").

    Returns:
        Money amount in paise, rounded half-up to the nearest paisa.

    Raises:
        InvalidInputError: If the string is not a finite, non-negative number
            or the amount is too large to store.
    """
    try:
        value = Decimal(amount_str.strip().replace(",", ""))
    except InvalidOperation as e:
        raise InvalidInputError(f"Invalid amount: '{amount_str}'") from e

    if not value.is_finite():
        raise InvalidInputError(f"Invalid amount: '{amount_str}'")
    if value < 0:
        raise InvalidInputError("Amount must not be negative")

    try:
        paise = (value * PAISE_PER_RUPEE).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except (InvalidOperation, Overflow) as e:
        raise InvalidInputError(f"Amount too large: '{amount_str}'") from e

    if paise > MAX_PAISE:
        raise InvalidInputError(f"Amount too large: '{amount_str}'")
    return Money(int(paise))


def to_major(amount: Money | Decimal) -> Decimal:
    """Convert paise to rupees."""
    return Decimal(amount) / PAISE_PER_RUPEE


def format_amount(amount: Money | Decimal) -> str:
    """Format paise as a plain two-decimal rupee amount (e.g. "150.00")."""
    return f"{to_major(amount):.2f}"


def format_money(amount: Money | Decimal, currency: str = "₹") -> str:
    """Format paise for display with currency symbol and thousands separators.

    Args:
        amount: Amount in paise.
        currency: Currency symbol prefix.

    Returns:
        Display string, e.g. "₹1,234.50".
    """
    return f"{currency}{to_major(amount):,.2f}"
