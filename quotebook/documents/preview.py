"""Document model of a rendered quote.

The same :class:`QuotePreview` feeds the on-screen/text print path and the PDF
converter, so both show identical content.
"""

from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import List, Optional, Tuple

from quotebook.quotes.calculation import Totals, calculate_totals, line_total
from quotebook.quotes.formatting import format_currency, format_date, format_quantity
from quotebook.store.models import Quote

TITLE = "Nabídka"
PLACEHOLDER_FROM_NAME = "Vaše Jméno / Společnost"
PLACEHOLDER_FROM_ADDRESS = "Vaše Adresa"
PLACEHOLDER_TO_NAME = "Jméno Klienta"
PLACEHOLDER_TO_ADDRESS = "Adresa Klienta"
PLACEHOLDER_NUMBER = "N/A"
EMPTY_ITEMS = "Žádné položky"
FOOTER = "Děkujeme za Váš zájem."

LABEL_TO = "Pro"
LABEL_NUMBER = "Číslo Nabídky"
LABEL_DATE = "Datum Vystavení"
TABLE_HEADER = ("Popis", "Množství", "Cena/Jedn.", "Celkem")
LABEL_SUBTOTAL = "Mezisoučet"
LABEL_TOTAL = "Celkem"
LABEL_NOTES = "Poznámky"
LABEL_TERMS = "Obchodní Podmínky"


@dataclass(frozen=True)
class PreviewRow:
    description: str
    quantity: str
    unit_price: str
    total: str


@dataclass(frozen=True)
class QuotePreview:
    quote_number: str
    from_name: str
    from_address: str
    to_name: str
    to_address: str
    display_number: str
    issue_date: str
    rows: Tuple[PreviewRow, ...]
    tax_label: str
    subtotal: str
    tax_amount: str
    total: str
    notes: str = ""
    terms: str = ""
    logo_image: Optional[str] = None

    @property
    def totals_block(self) -> List[Tuple[str, str]]:
        return [
            (f"{LABEL_SUBTOTAL}:", self.subtotal),
            (f"{self.tax_label}:", self.tax_amount),
            (f"{LABEL_TOTAL}:", self.total),
        ]


def _tax_label(tax_rate: float) -> str:
    return f"Daň ({tax_rate:g}%)"


def build_preview(quote: Quote, totals: Optional[Totals] = None) -> QuotePreview:
    totals = totals or calculate_totals(quote)
    rows = tuple(
        PreviewRow(
            description=item.description,
            quantity=format_quantity(item.quantity),
            unit_price=format_currency(item.unit_price),
            total=format_currency(line_total(item)),
        )
        for item in quote.line_items
    )
    return QuotePreview(
        quote_number=quote.quote_number,
        from_name=quote.from_name or PLACEHOLDER_FROM_NAME,
        from_address=quote.from_address or PLACEHOLDER_FROM_ADDRESS,
        to_name=quote.to_name or PLACEHOLDER_TO_NAME,
        to_address=quote.to_address or PLACEHOLDER_TO_ADDRESS,
        display_number=quote.quote_number or PLACEHOLDER_NUMBER,
        issue_date=format_date(quote.date),
        rows=rows,
        tax_label=_tax_label(quote.tax_rate),
        subtotal=format_currency(totals.subtotal),
        tax_amount=format_currency(totals.tax_amount),
        total=format_currency(totals.total),
        notes=quote.notes,
        terms=quote.terms,
        logo_image=quote.logo_image,
    )


def render_text(preview: QuotePreview, width: int = 78) -> str:
    """Plain-text rendering for terminals and line printers."""
    rule = "=" * width
    thin = "-" * width
    lines = [preview.from_name, *preview.from_address.splitlines()]
    lines.append(TITLE.upper().rjust(width))
    lines.append(rule)
    lines.append(f"{LABEL_TO.upper()}:")
    lines.append(preview.to_name)
    lines.extend(preview.to_address.splitlines())
    lines.append(f"{LABEL_NUMBER}: {preview.display_number}".rjust(width))
    lines.append(f"{LABEL_DATE}: {preview.issue_date}".rjust(width))
    lines.append(thin)

    desc_width = width - 3 * 15
    header = TABLE_HEADER
    lines.append(f"{header[0]:<{desc_width}}{header[1]:>15}{header[2]:>15}{header[3]:>15}")
    lines.append(thin)
    if not preview.rows:
        lines.append(EMPTY_ITEMS.center(width))
    for row in preview.rows:
        wrapped = textwrap.wrap(row.description, desc_width - 1) or [""]
        lines.append(f"{wrapped[0]:<{desc_width}}{row.quantity:>15}{row.unit_price:>15}{row.total:>15}")
        lines.extend(wrapped[1:])
    lines.append(thin)
    for label, amount in preview.totals_block:
        lines.append(f"{label} {amount}".rjust(width))

    if preview.notes:
        lines.extend(["", f"{LABEL_NOTES.upper()}:", *textwrap.wrap(preview.notes, width)])
    if preview.terms:
        lines.extend(["", f"{LABEL_TERMS.upper()}:", *preview.terms.splitlines()])
    lines.extend(["", FOOTER.center(width)])
    return "\n".join(lines)
