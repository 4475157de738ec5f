"""Shared settings and helpers for PDF document generation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).resolve().parents[2]
OUTPUT_BASE = PROJECT_ROOT / "output"

FILENAME_PREFIX = "Nabidka"
MISSING_NUMBER = "XXXX"
PRINT_AREA_ID = "print-area"


@dataclass(frozen=True)
class ExportOptions:
    """Page and capture settings shared by every export flow."""

    page_format: str = "a4"
    orientation: str = "portrait"
    margin_inches: float = 0.5
    image_type: str = "jpeg"
    image_quality: float = 0.98
    capture_scale: int = 2
    font_path: Optional[Path] = None

    @property
    def jpeg_quality(self) -> int:
        return int(round(self.image_quality * 100))


def ensure_output_dir(output_dir: Optional[Path] = None) -> Path:
    """Ensure the export directory exists and return its path."""
    target = Path(output_dir) if output_dir is not None else OUTPUT_BASE
    target.mkdir(parents=True, exist_ok=True)
    return target


def export_filename(quote_number: str) -> str:
    number = (quote_number or MISSING_NUMBER).replace("/", "-").replace("\\", "-")
    return f"{FILENAME_PREFIX}-{number}.pdf"
