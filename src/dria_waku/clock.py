"""Time source for message timestamps."""

from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], int]


def now_nanos() -> int:
    """Return the current wall-clock time in nanoseconds since the Unix epoch."""
    return time.time_ns()
