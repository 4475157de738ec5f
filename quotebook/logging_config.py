"""Console logging setup; call :func:`setup_logging` once at start-up."""

from __future__ import annotations

import logging
import sys
from typing import Optional

_FORMAT = "%(asctime)s [%(levelname).1s] %(name)s: %(message)s"
_configured = False


def setup_logging(level: Optional[str] = None) -> None:
    global _configured
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))
    if _configured:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)
    # Keep HTTP client chatter out of the console.
    for noisy in ("httpx", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
    _configured = True
