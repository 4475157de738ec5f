"""Entity types held by the store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Generic, List, Optional, TypeVar, Union


@dataclass
class LineItem:
    id: str
    description: str = ""
    quantity: float = 1
    unit_price: float = 0


@dataclass
class Quote:
    quote_number: str
    date: date
    from_name: str = ""
    from_address: str = ""
    to_name: str = ""
    to_address: str = ""
    line_items: List[LineItem] = field(default_factory=list)
    tax_rate: float = 0
    notes: str = ""
    terms: str = ""
    logo_image: Optional[str] = None


@dataclass
class ClientAddress:
    name: str
    street: str
    house_number: str
    city: str
    postal_code: str
    country: str


@dataclass
class QuoteItemTemplate:
    description: str
    unit_price: float = 0


T = TypeVar("T")


@dataclass(frozen=True)
class Draft(Generic[T]):
    """An entity that has not been saved yet and therefore has no id."""

    entity: T


@dataclass(frozen=True)
class Persisted(Generic[T]):
    """An entity stored under ``id``."""

    id: str
    entity: T


Record = Union[Draft[T], Persisted[T]]
