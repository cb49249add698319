"""Tests for finlite.domain.records and finlite.domain.money."""

from datetime import date

import pytest

from finlite.domain.errors import InvalidInputError
from finlite.domain.models import CategoryName, Description, Money, Month, Tag
from finlite.domain.money import MAX_PAISE, format_amount, format_money, parse_money
from finlite.domain.records import Budget, Expense, make_tags


class TestExpense:
    """Tests for Expense."""

    def test_new_expense_has_no_id(self) -> None:
        """Should leave id unset until stored."""
        e = Expense(date(2025, 9, 1), Money(100), CategoryName("Food"), Description("Tea"))
        assert e.id is None

    def test_with_id_copies(self) -> None:
        """Should return a copy with the id set."""
        e = Expense(date(2025, 9, 1), Money(100), CategoryName("Food"), Description("Tea"))
        stored = e.with_id(7)

        assert stored.id == 7
        assert e.id is None
        assert stored.amount == e.amount

    def test_negative_amount_rejected(self) -> None:
        """Should reject negative amounts."""
        with pytest.raises(InvalidInputError):
            Expense(date(2025, 9, 1), Money(-1), CategoryName("Food"), Description("Tea"))

    def test_zero_amount_allowed(self) -> None:
        """Should allow a zero amount."""
        assert Expense(date(2025, 9, 1), Money(0), CategoryName("Food"), Description("")).amount == 0


class TestBudget:
    """Tests for Budget."""

    def test_tags_become_a_set(self) -> None:
        """Should collapse duplicate tags and ignore order."""
        b = Budget(CategoryName("Food"), Money(100), Month("2025-10"), tags=["a", "b", "a"])  # type: ignore[arg-type]

        assert b.tags == frozenset({Tag("a"), Tag("b")})

    def test_has_tag_is_case_sensitive(self) -> None:
        """Should match tags exactly."""
        b = Budget(CategoryName("Food"), Money(100), Month("2025-10"), tags=make_tags(["Monthly"]))

        assert b.has_tag("Monthly")
        assert not b.has_tag("monthly")

    def test_zero_limit_allowed(self) -> None:
        """Should allow a zero limit."""
        assert Budget(CategoryName("Food"), Money(0), Month("2025-10")).limit == 0

    def test_negative_limit_rejected(self) -> None:
        """Should reject negative limits."""
        with pytest.raises(InvalidInputError):
            Budget(CategoryName("Food"), Money(-100), Month("2025-10"))

    def test_make_tags_drops_blanks(self) -> None:
        """Should strip whitespace and drop empty tags."""
        assert make_tags([" food ", "", "  ", "home"]) == frozenset({"food", "home"})


class TestParseMoney:
    """Tests for parse_money."""

    def test_whole_rupees(self) -> None:
        """Should convert rupees to paise."""
        assert parse_money("150") == Money(15000)

    def test_decimal_rupees(self) -> None:
        """Should keep paise."""
        assert parse_money("99.5") == Money(9950)

    def test_rounds_half_up(self) -> None:
        """Should round to the nearest paisa."""
        assert parse_money("0.005") == Money(1)

    def test_thousands_separator(self) -> None:
        """Should accept 1,250.00."""
        assert parse_money("1,250.00") == Money(125000)

    def test_negative_rejected(self) -> None:
        """Should reject negative amounts."""
        with pytest.raises(InvalidInputError):
            parse_money("-5")

    @pytest.mark.parametrize("raw", ["", "abc", "NaN", "Infinity"])
    def test_invalid_rejected(self, raw: str) -> None:
        """Should reject non-numeric and non-finite input."""
        with pytest.raises(InvalidInputError):
            parse_money(raw)

    @pytest.mark.parametrize("raw", ["1e20", "1e30", "123456789012345678901234567", "92233720368547758.08"])
    def test_too_large_rejected(self, raw: str) -> None:
        """Should reject amounts that do not fit in a 64-bit paise count."""
        with pytest.raises(InvalidInputError, match="too large"):
            parse_money(raw)

    def test_largest_amount_accepted(self) -> None:
        """Should accept the largest storable amount."""
        assert parse_money("92233720368547758.07") == Money(MAX_PAISE)


class TestFormatMoney:
    """Tests for format_amount and format_money."""

    def test_format_amount_two_decimals(self) -> None:
        """Should render paise as rupees with two decimals."""
        assert format_amount(Money(15000)) == "150.00"
        assert format_amount(Money(5)) == "0.05"

    def test_format_money_with_separator(self) -> None:
        """Should add currency symbol and thousands separator."""
        assert format_money(Money(123450)) == "₹1,234.50"

    def test_format_money_custom_currency(self) -> None:
        """Should use the given currency symbol."""
        assert format_money(Money(100), "£") == "£1.00"
