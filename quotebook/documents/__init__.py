"""Document generation modules."""

from quotebook.documents.base import ExportOptions, export_filename
from quotebook.documents.errors import (
    CaptureTargetNotFoundError,
    ConversionFailedError,
    ConverterUnavailableError,
    DeliveryError,
    PDFGenerationError,
)
from quotebook.documents.export import ExportResult, QuoteExporter
from quotebook.documents.preview import QuotePreview, build_preview, render_text
from quotebook.documents.render_target import OffscreenHost, headless_surface

__all__ = [
    "CaptureTargetNotFoundError",
    "ConversionFailedError",
    "ConverterUnavailableError",
    "DeliveryError",
    "ExportOptions",
    "ExportResult",
    "OffscreenHost",
    "PDFGenerationError",
    "QuoteExporter",
    "QuotePreview",
    "build_preview",
    "export_filename",
    "headless_surface",
    "render_text",
]
