"""Injectable time sources for control loops."""

import time
from abc import ABC, abstractmethod


class Clock(ABC):
    """Monotonic time source in seconds."""

    @abstractmethod
    def now(self) -> float:
        """Current time in seconds. Only differences are meaningful."""
        ...


class MonotonicClock(Clock):
    """Wall clock backed by time.perf_counter()."""

    def now(self) -> float:
        return time.perf_counter()


class ManualClock(Clock):
    """Clock that only moves when told to.

    Lets control-loop tests step time deterministically without sleeping.
    """

    def __init__(self, start: float = 0.0):
        self._seconds = float(start)

    def now(self) -> float:
        return self._seconds

    def advance(self, dt: float) -> float:
        """Move time forward by dt seconds and return the new time."""
        if dt < 0:
            raise ValueError(f"Cannot move a clock backwards (dt={dt})")
        self._seconds += dt
        return self._seconds
