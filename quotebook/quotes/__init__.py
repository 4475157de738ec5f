"""Quote composition helpers: totals, numbering, editing, validation."""

from quotebook.quotes.calculation import Totals, calculate_totals, line_total
from quotebook.quotes.numbering import next_quote_number
from quotebook.quotes.validation import ValidationError

__all__ = [
    "Totals",
    "ValidationError",
    "calculate_totals",
    "line_total",
    "next_quote_number",
]
