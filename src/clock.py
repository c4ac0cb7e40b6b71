"""
Millisecond time sources used for cache TTL comparisons.
"""

import threading
import time


class Clock:
    """Monotonic clock reporting whole milliseconds."""

    def now_ms(self) -> int:
        return time.monotonic_ns() // 1_000_000


class FrozenClock(Clock):
    """
    Clock that only moves when told to.

    Lets tests drive TTL expiry without sleeping.
    """

    def __init__(self, start_ms: int = 0):
        self._now_ms = start_ms
        self._lock = threading.Lock()

    def now_ms(self) -> int:
        with self._lock:
            return self._now_ms

    def advance(self, seconds: float) -> None:
        """Move the clock forward by the given number of seconds."""
        if seconds < 0:
            raise ValueError(f"Clock cannot move backwards, got {seconds}")
        with self._lock:
            self._now_ms += int(seconds * 1000)
