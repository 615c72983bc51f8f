"""Time sources for notice timestamps."""

from __future__ import annotations

import threading
import time
from typing import Callable, Protocol


class Clock(Protocol):
    def now(self) -> int:
        """Current time in nanoseconds."""
        ...


class SystemClock:
    """Wall-clock nanoseconds since the epoch that never go backwards.

    If the system clock steps back, the last reading is repeated so that a
    record's ``updated_at`` can never precede its ``created_at``.
    """

    def __init__(self, source: Callable[[], int] = time.time_ns) -> None:
        self._source = source
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, self._source())
            return self._last
