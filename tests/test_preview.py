"""Unit tests for the quote document model and its text rendering."""

import dataclasses

from quotebook.documents.preview import EMPTY_ITEMS, FOOTER, build_preview, render_text

NBSP = "\u00a0"


def test_preview_carries_formatted_totals(sample_quote) -> None:
    """Amounts in the preview come from the calculation engine."""
    preview = build_preview(sample_quote)

    assert preview.subtotal == f"250,00{NBSP}Kč"
    assert preview.tax_amount == f"52,50{NBSP}Kč"
    assert preview.total == f"302,50{NBSP}Kč"
    assert preview.tax_label == "Daň (21%)"
    assert [row.description for row in preview.rows] == ["Web design", "Hosting"]
    assert preview.rows[0].total == f"200,00{NBSP}Kč"


def test_preview_fills_placeholders(sample_quote) -> None:
    """Empty party fields and number show placeholders."""
    quote = dataclasses.replace(sample_quote, quote_number="", from_name="", to_name="", to_address="")
    preview = build_preview(quote)

    assert preview.display_number == "N/A"
    assert preview.quote_number == ""
    assert preview.from_name == "Vaše Jméno / Společnost"
    assert preview.to_name == "Jméno Klienta"
    assert preview.to_address == "Adresa Klienta"


def test_text_rendering_contains_every_section(sample_quote) -> None:
    """The print surface lists parties, rows, totals, notes and terms."""
    text = render_text(build_preview(sample_quote))

    for expected in ("Jana Nováková", "ACME s.r.o.", "0042", "17. 5. 2024", "Web design", "Hosting",
                     f"302,50{NBSP}Kč", "Cena platí 30 dní.", "Splatnost 14 dní.", FOOTER):
        assert expected in text
    assert text.index("Web design") < text.index("Hosting")


def test_text_rendering_without_items(sample_quote) -> None:
    """A quote without rows says so."""
    text = render_text(build_preview(dataclasses.replace(sample_quote, line_items=[], notes="", terms="")))
    assert EMPTY_ITEMS in text
    assert "POZNÁMKY" not in text
