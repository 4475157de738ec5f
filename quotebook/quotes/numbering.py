"""Proposal of the next quote number."""

from __future__ import annotations

import re
from typing import Iterable

NUMBER_WIDTH = 4
_NON_DIGITS = re.compile(r"[^0-9]")


def numeric_value(quote_number: str) -> int:
    """Digits of ``quote_number`` read as one integer; 0 when there are none."""
    digits = _NON_DIGITS.sub("", quote_number or "")
    return int(digits) if digits else 0


def next_quote_number(existing_numbers: Iterable[str]) -> str:
    highest = max((numeric_value(number) for number in existing_numbers), default=0)
    return str(highest + 1).zfill(NUMBER_WIDTH)
