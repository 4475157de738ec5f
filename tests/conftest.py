"""Shared fixtures for the quotebook tests."""

from __future__ import annotations

import itertools
from datetime import date

import pytest

from quotebook.store import ClientAddress, EntityStore, LineItem, MemoryStorage, Quote, QuoteItemTemplate


class SequentialIds:
    """Deterministic stand-in for :class:`IdGenerator`."""

    def __init__(self, prefix: str = "id") -> None:
        self._counter = itertools.count(1)
        self.prefix = prefix

    def new_id(self) -> str:
        return f"{self.prefix}_{next(self._counter)}"


@pytest.fixture
def ids() -> SequentialIds:
    return SequentialIds()


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def store(storage: MemoryStorage, ids: SequentialIds) -> EntityStore:
    return EntityStore(storage, id_generator=ids).init()


@pytest.fixture
def sample_quote() -> Quote:
    return Quote(
        quote_number="0042",
        date=date(2024, 5, 17),
        from_name="Jana Nováková",
        from_address="Dlouhá 12\n110 00 Praha",
        to_name="ACME s.r.o.",
        to_address="Krátká 3\n602 00 Brno\nČesko",
        line_items=[
            LineItem(id="li_1", description="Web design", quantity=2, unit_price=100),
            LineItem(id="li_2", description="Hosting", quantity=1, unit_price=50),
        ],
        tax_rate=21,
        notes="Cena platí 30 dní.",
        terms="Splatnost 14 dní.",
    )


@pytest.fixture
def sample_address() -> ClientAddress:
    return ClientAddress(
        name="ACME s.r.o.",
        street="Krátká",
        house_number="3",
        city="Brno",
        postal_code="602 00",
        country="Česko",
    )


@pytest.fixture
def sample_template() -> QuoteItemTemplate:
    return QuoteItemTemplate(description="Konzultace (1 h)", unit_price=1200)
