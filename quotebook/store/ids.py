"""Process-unique identifiers for new entities."""

from __future__ import annotations

import secrets
import string
import threading
import time
from typing import Callable

_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 9


class IdGenerator:
    """Mint ids of the form ``id_<millis>_<base36 suffix>``.

    The millisecond component never goes backwards within one generator, even
    if the wall clock is adjusted. Uniqueness holds for one process lifetime.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last_millis = 0
        self._lock = threading.Lock()

    def _next_millis(self) -> int:
        with self._lock:
            millis = max(int(self._clock() * 1000), self._last_millis)
            self._last_millis = millis
            return millis

    def new_id(self) -> str:
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(SUFFIX_LENGTH))
        return f"id_{self._next_millis()}_{suffix}"

    __call__ = new_id
