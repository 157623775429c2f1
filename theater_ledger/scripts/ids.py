"""Collision-resistant script id generation.

Ids are ``{milliseconds}-{suffix}`` where suffix is 7 random base-36
characters (about 36 bits of entropy), so uncoordinated clients creating
scripts in the same millisecond collide with negligible probability.
"""

import secrets
import string
import threading
import time
from collections.abc import Callable

from theater_ledger.scripts._types import ScriptId

ID_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LENGTH = 7


class ScriptIdGenerator:
    """Generates ids whose timestamp component never decreases within a process."""

    def __init__(self, clock_ms: Callable[[], int] | None = None) -> None:
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._last_ms = 0
        self._lock = threading.Lock()

    def __call__(self) -> ScriptId:
        with self._lock:
            now = max(self._clock_ms(), self._last_ms)
            self._last_ms = now
        suffix = "".join(secrets.choice(ID_ALPHABET) for _ in range(SUFFIX_LENGTH))
        return ScriptId(f"{now}-{suffix}")


generate_script_id = ScriptIdGenerator()
