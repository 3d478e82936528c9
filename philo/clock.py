"""Millisecond wall-clock helpers."""

from __future__ import annotations

import time


def now_ms() -> int:
    """Return the current wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def precise_sleep(ms: float) -> None:
    """Sleep for ``ms`` milliseconds, polling finely near the deadline."""
    start = now_ms()
    while (elapsed := now_ms() - start) < ms:
        if elapsed < ms - 5:
            time.sleep(0.0005)
        else:
            time.sleep(0.00005)