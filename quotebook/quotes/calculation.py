"""Quote totals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from quotebook.store.models import LineItem, Quote


@dataclass(frozen=True)
class Totals:
    subtotal: float
    tax_amount: float
    total: float


def line_total(item: LineItem) -> float:
    return item.quantity * item.unit_price


def subtotal(line_items: Iterable[LineItem]) -> float:
    return sum((line_total(item) for item in line_items), 0.0)


def tax_amount(amount: float, tax_rate: float) -> float:
    return amount * (tax_rate / 100)


def calculate_totals(quote: Quote) -> Totals:
    """Return subtotal, tax and total; nothing is rounded here."""
    base = subtotal(quote.line_items)
    tax = tax_amount(base, quote.tax_rate)
    return Totals(subtotal=base, tax_amount=tax, total=base + tax)
