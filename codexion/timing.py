"""Wall-clock readings and a sleep that can be interrupted."""

from __future__ import annotations

import time
from typing import Callable


def now_ms() -> int:
    """Current wall-clock time in whole milliseconds."""
    return time.time_ns() // 1_000_000


def now_us() -> int:
    """Current wall-clock time in whole microseconds."""
    return time.time_ns() // 1_000


def precise_sleep(millisec: int, should_stop: Callable[[], bool]) -> bool:
    """Sleep ``millisec`` milliseconds, stopping early when ``should_stop()`` is true.

    Sleeps in halving steps and spins for the last millisecond. Returns True if
    the full duration elapsed, False if it was cut short.
    """
    start = now_us()
    target = millisec * 1000
    while now_us() - start < target:
        if should_stop():
            return False
        remaining = target - (now_us() - start)
        if remaining > 1000:
            time.sleep(remaining / 2 / 1_000_000)
        else:
            while now_us() - start < target:
                pass
    return True