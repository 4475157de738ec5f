"""Unit tests for next quote number proposals."""

import pytest

from quotebook.quotes.numbering import next_quote_number, numeric_value


def test_next_number_uses_highest_numeric_value() -> None:
    """0007, 12 and abc propose 0013."""
    assert next_quote_number(["0007", "12", "abc"]) == "0013"


def test_first_quote_is_0001() -> None:
    """Without quotes the proposal starts at 0001."""
    assert next_quote_number([]) == "0001"


@pytest.mark.parametrize(
    "number, expected",
    [("NAB-2024-0005", 20240005), ("abc", 0), ("", 0), ("0099", 99)],
)
def test_numeric_value_reads_all_digits(number, expected) -> None:
    """Every digit counts; non-numeric numbers read as 0."""
    assert numeric_value(number) == expected


def test_wide_numbers_are_not_truncated() -> None:
    """Numbers beyond four digits keep growing."""
    assert next_quote_number(["12345"]) == "12346"
