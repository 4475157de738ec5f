"""Unit tests for cs-CZ formatting."""

from datetime import date

from quotebook.quotes.formatting import format_currency, format_date, format_quantity

NBSP = "\u00a0"


def test_currency_uses_czech_separators() -> None:
    """Thousands are grouped with non-breaking spaces and a decimal comma."""
    assert format_currency(1234567.891) == f"1{NBSP}234{NBSP}567,89{NBSP}Kč"
    assert format_currency(302.5) == f"302,50{NBSP}Kč"
    assert format_currency(-50) == f"-50,00{NBSP}Kč"


def test_date_is_day_month_year() -> None:
    """Dates render like 17. 5. 2024."""
    assert format_date(date(2024, 5, 17)) == "17. 5. 2024"
    assert format_date(None) == ""


def test_quantity_drops_trailing_zeroes() -> None:
    """Whole quantities print without decimals."""
    assert format_quantity(2.0) == "2"
    assert format_quantity(1.5) == "1,5"


def test_non_finite_amounts_do_not_break_formatting() -> None:
    assert format_currency(float("nan")) == f"nan{NBSP}Kč"
    assert format_currency(float("inf")) == f"inf{NBSP}Kč"
