"""Errors for document generation."""


class PDFGenerationError(RuntimeError):
    """Raised when a quote cannot be exported; ``user_message`` is safe to display."""

    user_message = "Při generování PDF došlo k chybě."


class ConverterUnavailableError(PDFGenerationError):
    """Raised before any surface exists when the PDF library cannot be loaded."""

    user_message = "Chyba při generování PDF. Knihovna pro generování není načtena."


class CaptureTargetNotFoundError(PDFGenerationError):
    """Raised when the rendered surface does not contain the print area."""

    user_message = "Chyba při generování PDF. Prvek pro tisk nebyl nalezen."


class ConversionFailedError(PDFGenerationError):
    """Raised when converting the rendered quote into PDF bytes fails."""

    user_message = "Při převodu nabídky do PDF došlo k chybě."


class DeliveryError(PDFGenerationError):
    """Raised when the finished PDF cannot be written to the output directory."""

    user_message = "PDF se nepodařilo uložit."
