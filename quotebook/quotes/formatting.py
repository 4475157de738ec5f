"""cs-CZ presentation of amounts and dates."""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

CURRENCY_SYMBOL = "Kč"
_NBSP = "\u00a0"


def format_currency(amount: float) -> str:
    """``1234.5`` -> ``1 234,50 Kč`` (non-breaking spaces)."""
    if isinstance(amount, float) and not math.isfinite(amount):
        return f"{amount}{_NBSP}{CURRENCY_SYMBOL}"
    grouped = f"{amount:,.2f}"
    integral, fraction = grouped.rsplit(".", 1)
    return f"{integral.replace(',', _NBSP)},{fraction}{_NBSP}{CURRENCY_SYMBOL}"


def format_date(value: Optional[date]) -> str:
    if value is None:
        return ""
    return f"{value.day}. {value.month}. {value.year}"


def format_quantity(quantity: float) -> str:
    if float(quantity).is_integer():
        return str(int(quantity))
    return f"{quantity:g}".replace(".", ",")
