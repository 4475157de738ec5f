"""Editing operations on a quote being composed.

All helpers return a new :class:`Quote`; the instance passed in is left
untouched, so a quote that copied a client address or template keeps its
snapshot when the address book changes later.
"""

from __future__ import annotations

import base64
import dataclasses
import mimetypes
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, Optional

from quotebook.quotes.numbering import next_quote_number
from quotebook.store.models import ClientAddress, Draft, LineItem, Quote, QuoteItemTemplate

DEFAULT_FROM_NAME = "Vaše Jméno / Společnost"
DEFAULT_FROM_ADDRESS = "Vaše Adresa\nPSČ, Město"
DEFAULT_TAX_RATE = 21
DEFAULT_TERMS = "Splatnost faktury je 14 dní. Platba je možná bankovním převodem."

NewId = Callable[[], str]


def new_quote_draft(existing: Iterable[Quote], new_id: NewId, today: Optional[date] = None) -> Draft[Quote]:
    quote = Quote(
        quote_number=next_quote_number(quote.quote_number for quote in existing),
        date=today or date.today(),
        from_name=DEFAULT_FROM_NAME,
        from_address=DEFAULT_FROM_ADDRESS,
        line_items=[blank_line_item(new_id)],
        tax_rate=DEFAULT_TAX_RATE,
        terms=DEFAULT_TERMS,
    )
    return Draft(quote)


def blank_line_item(new_id: NewId) -> LineItem:
    return LineItem(id=new_id(), description="", quantity=1, unit_price=0)


def format_client_address(address: ClientAddress) -> str:
    return (
        f"{address.street} {address.house_number}\n"
        f"{address.postal_code} {address.city}\n"
        f"{address.country}"
    )


def apply_client_address(quote: Quote, address: Optional[ClientAddress]) -> Quote:
    """Copy the recipient from ``address``; ``None`` clears it."""
    if address is None:
        return dataclasses.replace(quote, to_name="", to_address="")
    return dataclasses.replace(quote, to_name=address.name, to_address=format_client_address(address))


def line_item_from_template(template: QuoteItemTemplate, new_id: NewId) -> LineItem:
    return LineItem(id=new_id(), description=template.description, quantity=1, unit_price=template.unit_price)


def add_line_item(quote: Quote, item: LineItem) -> Quote:
    return dataclasses.replace(quote, line_items=[*quote.line_items, item])


def add_template_item(quote: Quote, template: QuoteItemTemplate, new_id: NewId) -> Quote:
    return add_line_item(quote, line_item_from_template(template, new_id))


def update_line_item(quote: Quote, index: int, **changes) -> Quote:
    items = list(quote.line_items)
    items[index] = dataclasses.replace(items[index], **changes)
    return dataclasses.replace(quote, line_items=items)


def remove_line_item(quote: Quote, index: int) -> Quote:
    return dataclasses.replace(quote, line_items=[item for i, item in enumerate(quote.line_items) if i != index])


def logo_data_url(data: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def set_logo(quote: Quote, image_path: Path) -> Quote:
    mime_type = mimetypes.guess_type(str(image_path))[0] or "application/octet-stream"
    if not mime_type.startswith("image/"):
        raise ValueError(f"Not an image file: {image_path}")
    return dataclasses.replace(quote, logo_image=logo_data_url(image_path.read_bytes(), mime_type))


def remove_logo(quote: Quote) -> Quote:
    return dataclasses.replace(quote, logo_image=None)
