"""Quote export pipeline: render, settle, convert, deliver."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from quotebook.documents.base import PRINT_AREA_ID, ExportOptions, ensure_output_dir, export_filename
from quotebook.documents.errors import (
    CaptureTargetNotFoundError,
    ConversionFailedError,
    ConverterUnavailableError,
    DeliveryError,
    PDFGenerationError,
)
from quotebook.documents.preview import QuotePreview, build_preview
from quotebook.documents.render_target import OffscreenHost, Renderer, headless_surface, mount_preview
from quotebook.quotes.calculation import calculate_totals
from quotebook.store.models import Quote

_LOGGER = logging.getLogger(__name__)

DEFAULT_SETTLE_DELAY = 0.1

Converter = Callable[[QuotePreview, ExportOptions], bytes]


@dataclass(frozen=True)
class ExportResult:
    path: Path
    filename: str
    size: int


def load_reportlab_converter() -> Converter:
    """Import the ReportLab converter, failing with a displayable error when it is missing."""
    try:
        from quotebook.documents.quote_pdf import convert_to_pdf
    except ImportError as exc:
        _LOGGER.error("PDF converter is not installed: %s", exc)
        raise ConverterUnavailableError(f"PDF converter unavailable: {exc}") from exc
    return convert_to_pdf


class QuoteExporter:
    """Turns quotes into ``Nabidka-<number>.pdf`` files.

    :meth:`export_quote` renders the quote on its own off-screen surface, so
    several exports may run concurrently. :meth:`export_preview` captures a
    preview that is already rendered in the visible view. Both share the
    capture, conversion and delivery steps.
    """

    def __init__(
        self,
        output_dir: Optional[Path] = None,
        host: Optional[OffscreenHost] = None,
        options: Optional[ExportOptions] = None,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        converter_loader: Callable[[], Converter] = load_reportlab_converter,
        renderer: Renderer = mount_preview,
    ) -> None:
        self.output_dir = output_dir
        self.host = host or OffscreenHost()
        self.options = options or ExportOptions()
        self.settle_delay = settle_delay
        self._load_converter = converter_loader
        self._render = renderer

    async def export_quote(self, quote: Quote) -> ExportResult:
        converter = self._load_converter()
        preview = build_preview(quote, calculate_totals(quote))

        with headless_surface(self.host) as surface:
            self._render(surface, preview)
            await asyncio.sleep(self.settle_delay)

            target = surface.query(PRINT_AREA_ID)
            if target is None:
                _LOGGER.error(
                    "Print area missing after render",
                    extra={"quote_number": quote.quote_number, "surface": surface.surface_id},
                )
                raise CaptureTargetNotFoundError(f"Element {PRINT_AREA_ID!r} not found on surface {surface.surface_id}")
            return await self._capture(target, converter)

    async def export_preview(self, preview: QuotePreview) -> ExportResult:
        converter = self._load_converter()
        return await self._capture(preview, converter)

    async def _capture(self, preview: QuotePreview, converter: Converter) -> ExportResult:
        try:
            pdf_bytes = await asyncio.to_thread(converter, preview, self.options)
        except PDFGenerationError:
            raise
        except Exception as exc:
            _LOGGER.exception("PDF conversion failed", extra={"quote_number": preview.quote_number})
            raise ConversionFailedError(str(exc)) from exc

        filename = export_filename(preview.quote_number)
        try:
            path = ensure_output_dir(self.output_dir) / filename
            path.write_bytes(pdf_bytes)
        except OSError as exc:
            raise DeliveryError(str(exc)) from exc

        _LOGGER.info("Exported %s", filename, extra={"quote_number": preview.quote_number, "bytes": len(pdf_bytes)})
        return ExportResult(path=path, filename=filename, size=len(pdf_bytes))
