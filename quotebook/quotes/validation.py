"""Checks applied before an entity is handed to the store."""

from __future__ import annotations

import math
from typing import List, Sequence

from quotebook.store.models import ClientAddress, Quote, QuoteItemTemplate

ADDRESS_FIELDS = ("name", "street", "house_number", "city", "postal_code", "country")


class ValidationError(ValueError):
    """Raised when an entity is rejected at the save boundary."""

    def __init__(self, problems: Sequence[str]) -> None:
        super().__init__("; ".join(problems))
        self.problems = list(problems)


def _raise_if(problems: List[str]) -> None:
    if problems:
        raise ValidationError(problems)


def _number_problems(label: str, value: float) -> List[str]:
    if isinstance(value, float) and not math.isfinite(value):
        return [f"{label} must be a finite number"]
    if value < 0:
        return [f"{label} must not be negative"]
    return []


def validate_client_address(address: ClientAddress) -> ClientAddress:
    problems = [f"{name} is required" for name in ADDRESS_FIELDS if not getattr(address, name).strip()]
    _raise_if(problems)
    return address


def validate_item_template(template: QuoteItemTemplate) -> QuoteItemTemplate:
    problems: List[str] = []
    if not template.description.strip():
        problems.append("description is required")
    problems.extend(_number_problems("unit_price", template.unit_price))
    _raise_if(problems)
    return template


def validate_quote(quote: Quote) -> Quote:
    problems: List[str] = []
    problems.extend(_number_problems("tax_rate", quote.tax_rate))
    for position, item in enumerate(quote.line_items, start=1):
        problems.extend(_number_problems(f"line {position}: quantity", item.quantity))
        problems.extend(_number_problems(f"line {position}: unit_price", item.unit_price))
    _raise_if(problems)
    return quote
