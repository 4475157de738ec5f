"""Runtime settings read from the environment (and an optional ``.env`` file)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from quotebook.documents.export import DEFAULT_SETTLE_DELAY
from quotebook.suggestions.text_suggestions import DEFAULT_MODEL

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    output_dir: Path
    openai_api_key: Optional[str] = None
    suggest_model: str = DEFAULT_MODEL
    settle_delay: float = DEFAULT_SETTLE_DELAY
    font_path: Optional[Path] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "Settings":
        if load_env_file:
            load_dotenv()
        font_path = os.getenv("QUOTEBOOK_FONT_PATH")
        return cls(
            data_dir=Path(os.getenv("QUOTEBOOK_DATA_DIR") or PROJECT_ROOT / "data"),
            output_dir=Path(os.getenv("QUOTEBOOK_OUTPUT_DIR") or PROJECT_ROOT / "output"),
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            suggest_model=os.getenv("QUOTEBOOK_SUGGEST_MODEL") or DEFAULT_MODEL,
            settle_delay=_float_env("QUOTEBOOK_SETTLE_DELAY", DEFAULT_SETTLE_DELAY),
            font_path=Path(font_path) if font_path else None,
            log_level=(os.getenv("QUOTEBOOK_LOG_LEVEL") or "INFO").upper(),
        )
