"""Key-value persistence slots backing the entity store."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

_LOGGER = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def read(self, key: str) -> Optional[str]:
        ...

    def write(self, key: str, value: str) -> None:
        ...


class MemoryStorage:
    """Process-local slots kept in a dict."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self.slots: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.slots.get(key)

    def write(self, key: str, value: str) -> None:
        self.slots[key] = value


class JsonFileStorage:
    """One ``<key>.json`` file per slot inside ``directory``.

    Writes go to a temporary file in the same directory which is then renamed
    over the slot, so a reader never sees a partially written collection.
    """

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.warning("Could not read slot %s: %s", key, exc, extra={"slot": key})
            return None

    def write(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_name, self.path_for(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
