"""Navigation state: which view is open and which quote is selected."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import date
from typing import Optional

from quotebook.quotes.editing import new_quote_draft
from quotebook.quotes.validation import validate_quote
from quotebook.store.entity_store import EntityStore
from quotebook.store.models import Persisted, Quote, Record


class View(str, enum.Enum):
    HOME = "home"
    EDITOR = "editor"
    ADDRESS_BOOK = "address_book"
    QUOTE_ITEMS = "quote_items"


@dataclass
class Session:
    view: View = View.HOME
    selected_quote_id: Optional[str] = None

    def open_new_quote(self) -> None:
        self.selected_quote_id = None
        self.view = View.EDITOR

    def open_quote(self, quote_id: str) -> None:
        self.selected_quote_id = quote_id
        self.view = View.EDITOR

    def show_address_book(self) -> None:
        self.view = View.ADDRESS_BOOK

    def show_quote_items(self) -> None:
        self.view = View.QUOTE_ITEMS

    def back_home(self) -> None:
        self.view = View.HOME

    def editing_quote(self, store: EntityStore, today: Optional[date] = None) -> Record[Quote]:
        """The selected quote, or a fresh draft when none is selected or it no longer exists."""
        if self.selected_quote_id is not None:
            selected = store.quotes.find(self.selected_quote_id)
            if selected is not None:
                return selected
        existing = [record.entity for record in store.quotes.list()]
        return new_quote_draft(existing, store.id_generator.new_id, today)

    def save_quote(self, store: EntityStore, record: Record[Quote]) -> Persisted[Quote]:
        validate_quote(record.entity)
        saved = store.quotes.save(record)
        self.back_home()
        return saved
