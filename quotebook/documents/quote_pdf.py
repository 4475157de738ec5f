"""Quote PDF generation with ReportLab."""

from __future__ import annotations

import base64
import binascii
import logging
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Tuple
from xml.sax.saxutils import escape

from PIL import Image as PILImage
from PIL import UnidentifiedImageError
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4, landscape, portrait
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm, inch
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.platypus import Flowable, Image, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from quotebook.documents.base import ExportOptions
from quotebook.documents.preview import (
    EMPTY_ITEMS,
    FOOTER,
    LABEL_DATE,
    LABEL_NOTES,
    LABEL_NUMBER,
    LABEL_TERMS,
    LABEL_TO,
    TABLE_HEADER,
    TITLE,
    QuotePreview,
)

_LOGGER = logging.getLogger(__name__)

FALLBACK_FONTS = ("Helvetica", "Helvetica-Bold")
FONT_CANDIDATES = (
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
    Path("/usr/share/fonts/dejavu/DejaVuSans.ttf"),
    Path("/Library/Fonts/DejaVuSans.ttf"),
)
LOGO_MAX_WIDTH = 5 * cm
LOGO_MAX_HEIGHT = 2 * cm

TEXT_DARK = colors.HexColor("#1f2937")
TEXT_MUTED = colors.HexColor("#6b7280")
RULE = colors.HexColor("#e5e7eb")
HEADER_FILL = colors.HexColor("#f9fafb")


def _register_ttf(path: Path) -> Optional[str]:
    name = path.stem
    if name in pdfmetrics.getRegisteredFontNames():
        return name
    try:
        pdfmetrics.registerFont(TTFont(name, str(path)))
    except (TTFError, OSError) as exc:
        _LOGGER.warning("Could not register font %s: %s", path, exc)
        return None
    return name


def resolve_fonts(font_path: Optional[Path] = None) -> Tuple[str, str]:
    """Return (regular, bold) font names, preferring a TTF with Czech glyphs."""
    candidates = [Path(font_path)] if font_path else []
    candidates.extend(FONT_CANDIDATES)
    for candidate in candidates:
        if not candidate.is_file():
            continue
        regular = _register_ttf(candidate)
        if not regular:
            continue
        bold_path = candidate.with_name(f"{candidate.stem}-Bold{candidate.suffix}")
        bold = (_register_ttf(bold_path) if bold_path.is_file() else None) or regular
        pdfmetrics.registerFontFamily(regular, normal=regular, bold=bold, italic=regular, boldItalic=bold)
        return regular, bold
    return FALLBACK_FONTS


def _decode_data_url(data_url: str) -> bytes:
    payload = data_url.split(",", 1)[1] if "," in data_url else data_url
    return base64.b64decode(payload, validate=False)


def _logo_flowable(data_url: str, options: ExportOptions) -> Optional[Image]:
    """Re-encode the embedded logo as JPEG at ``capture_scale`` times its printed size."""
    try:
        source = PILImage.open(BytesIO(_decode_data_url(data_url)))
        source.load()
    except (binascii.Error, UnidentifiedImageError, OSError, ValueError) as exc:
        _LOGGER.warning("Skipping unreadable logo: %s", exc)
        return None

    if source.mode in ("RGBA", "LA", "P"):
        rgba = source.convert("RGBA")
        flattened = PILImage.new("RGB", rgba.size, (255, 255, 255))
        flattened.paste(rgba, mask=rgba.getchannel("A"))
        source = flattened
    else:
        source = source.convert("RGB")

    ratio = min(LOGO_MAX_WIDTH / source.width, LOGO_MAX_HEIGHT / source.height)
    width, height = source.width * ratio, source.height * ratio
    source.thumbnail((max(1, int(width * options.capture_scale)), max(1, int(height * options.capture_scale))))

    encoded = BytesIO()
    source.save(encoded, format="JPEG", quality=options.jpeg_quality)
    encoded.seek(0)
    logo = Image(encoded, width=width, height=height)
    logo.hAlign = "LEFT"
    return logo


def _text(value: str) -> str:
    return escape(value).replace("\n", "<br/>")


def _styles(regular: str, bold: str) -> dict:
    base = getSampleStyleSheet()
    normal = ParagraphStyle("QuoteNormal", parent=base["Normal"], fontName=regular, fontSize=10, leading=14, textColor=TEXT_DARK)
    return {
        "normal": normal,
        "muted": ParagraphStyle("QuoteMuted", parent=normal, fontSize=9, textColor=TEXT_MUTED),
        "right": ParagraphStyle("QuoteRight", parent=normal, alignment=TA_RIGHT),
        "company": ParagraphStyle("QuoteCompany", parent=normal, fontName=bold, fontSize=20, leading=24),
        "title": ParagraphStyle(
            "QuoteTitle", parent=normal, fontName=bold, fontSize=16, leading=20, alignment=TA_RIGHT, textColor=TEXT_MUTED
        ),
        "section": ParagraphStyle("QuoteSection", parent=normal, fontName=bold, fontSize=9, textColor=TEXT_MUTED),
        "bold": ParagraphStyle("QuoteBold", parent=normal, fontName=bold),
        "small": ParagraphStyle("QuoteSmall", parent=normal, fontSize=8, leading=11, textColor=TEXT_MUTED),
        "footer": ParagraphStyle("QuoteFooter", parent=normal, fontSize=8, textColor=TEXT_MUTED, alignment=TA_CENTER),
    }


def build_story(preview: QuotePreview, options: ExportOptions, frame_width: float) -> List[Flowable]:
    regular, bold = resolve_fonts(options.font_path)
    styles = _styles(regular, bold)
    story: List[Flowable] = []

    # Header: logo and sender on the left, document title on the right.
    sender: List[Flowable] = []
    if preview.logo_image:
        logo = _logo_flowable(preview.logo_image, options)
        if logo is not None:
            sender.extend([logo, Spacer(1, 0.3 * cm)])
    sender.append(Paragraph(_text(preview.from_name), styles["company"]))
    sender.append(Paragraph(_text(preview.from_address), styles["muted"]))
    header = Table([[sender, Paragraph(TITLE.upper(), styles["title"])]], colWidths=[frame_width * 0.65, frame_width * 0.35])
    header.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ("RIGHTPADDING", (0, 0), (-1, -1), 0),
                ("LINEBELOW", (0, 0), (-1, 0), 1.5, RULE),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 12),
            ]
        )
    )
    story.extend([header, Spacer(1, 0.6 * cm)])

    recipient = [
        Paragraph(LABEL_TO.upper(), styles["section"]),
        Paragraph(_text(preview.to_name), styles["bold"]),
        Paragraph(_text(preview.to_address), styles["muted"]),
    ]
    reference = [
        Paragraph(f"<b>{LABEL_NUMBER}:</b> {_text(preview.display_number)}", styles["right"]),
        Paragraph(f"<b>{LABEL_DATE}:</b> {_text(preview.issue_date)}", styles["right"]),
    ]
    parties = Table([[recipient, reference]], colWidths=[frame_width / 2, frame_width / 2])
    parties.setStyle(
        TableStyle(
            [
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ("RIGHTPADDING", (0, 0), (-1, -1), 0),
            ]
        )
    )
    story.extend([parties, Spacer(1, 0.8 * cm)])

    rows: List[list] = [[Paragraph(label.upper(), styles["section"]) for label in TABLE_HEADER]]
    for row in preview.rows:
        rows.append([Paragraph(_text(row.description), styles["normal"]), row.quantity, row.unit_price, row.total])
    if not preview.rows:
        rows.append([Paragraph(EMPTY_ITEMS, styles["muted"]), "", "", ""])
    description_width = frame_width - 3 * 3.2 * cm
    items = Table(rows, colWidths=[description_width, 3.2 * cm, 3.2 * cm, 3.2 * cm], repeatRows=1)
    item_style = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
        ("FONTNAME", (0, 1), (-1, -1), regular),
        ("FONTSIZE", (0, 1), (-1, -1), 10),
        ("TEXTCOLOR", (0, 1), (-1, -1), TEXT_DARK),
        ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LINEBELOW", (0, 0), (-1, -1), 0.5, RULE),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]
    if not preview.rows:
        item_style.append(("SPAN", (0, 1), (-1, 1)))
    items.setStyle(TableStyle(item_style))
    story.extend([items, Spacer(1, 0.5 * cm)])

    totals = Table(preview.totals_block, colWidths=[frame_width - 4.5 * cm, 4.5 * cm])
    totals.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, -1), regular),
                ("FONTNAME", (0, -1), (-1, -1), bold),
                ("FONTSIZE", (0, -1), (-1, -1), 12),
                ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                ("TEXTCOLOR", (0, 0), (-1, -1), TEXT_DARK),
                ("LINEABOVE", (0, -1), (-1, -1), 1, RULE),
                ("RIGHTPADDING", (0, 0), (-1, -1), 0),
            ]
        )
    )
    story.append(totals)

    if preview.notes:
        story.extend(
            [
                Spacer(1, 0.8 * cm),
                Paragraph(LABEL_NOTES.upper(), styles["section"]),
                Paragraph(_text(preview.notes), styles["muted"]),
            ]
        )
    if preview.terms:
        story.extend(
            [
                Spacer(1, 0.8 * cm),
                Paragraph(LABEL_TERMS.upper(), styles["section"]),
                Paragraph(_text(preview.terms), styles["small"]),
            ]
        )

    story.extend([Spacer(1, 1.2 * cm), Paragraph(FOOTER, styles["footer"])])
    return story


def convert_to_pdf(preview: QuotePreview, options: ExportOptions) -> bytes:
    """Lay out ``preview`` on A4 pages and return the PDF bytes."""
    if options.page_format.lower() != "a4":
        raise ValueError(f"Unsupported page format: {options.page_format}")
    pagesize = landscape(A4) if options.orientation == "landscape" else portrait(A4)
    margin = options.margin_inches * inch

    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=pagesize,
        leftMargin=margin,
        rightMargin=margin,
        topMargin=margin,
        bottomMargin=margin,
        title=f"{TITLE} {preview.display_number}",
    )
    doc.build(build_story(preview, options, doc.width))
    pdf_bytes = buffer.getvalue()
    buffer.close()
    return pdf_bytes
