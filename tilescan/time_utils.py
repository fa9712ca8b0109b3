"""Named start/end time intervals on a monotonic clock."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional

Clock = Callable[[], float]


@dataclass
class TimeInterval:
    """One interval whose start and end may each be recorded once."""

    clock: Clock = time.perf_counter
    _start: Optional[float] = field(default=None, init=False)
    _end: Optional[float] = field(default=None, init=False)

    def record_start(self) -> None:
        if self._start is not None:
            raise RuntimeError("Start time has already been recorded.")
        self._start = self.clock()

    def record_end(self) -> None:
        if self._end is not None:
            raise RuntimeError("End time has already been recorded.")
        self._end = self.clock()

    def start_time(self) -> float:
        """Start time in seconds on the clock's scale."""
        if self._start is None:
            raise RuntimeError("Start time has not been recorded.")
        return self._start

    def end_time(self) -> float:
        """End time in seconds on the clock's scale."""
        if self._end is None:
            raise RuntimeError("End time has not been recorded.")
        return self._end

    def elapsed_time(self) -> float:
        """Seconds between start and end."""
        if self._start is None or self._end is None:
            raise RuntimeError("Start and/or end time has not been recorded.")
        return self._end - self._start


class TimeIntervals:
    """A set of named intervals sharing one clock."""

    def __init__(self, clock: Clock = time.perf_counter) -> None:
        self._clock = clock
        self._intervals: Dict[str, TimeInterval] = {}

    def attach_intervals(self, names: Iterable[str]) -> None:
        """Create intervals; a name already present raises ValueError."""
        for name in names:
            if name in self._intervals:
                raise ValueError(f"Duplicate interval name: {name}")
            self._intervals[name] = TimeInterval(self._clock)

    def record_start(self, name: str) -> None:
        self._intervals[name].record_start()

    def record_end(self, name: str) -> None:
        self._intervals[name].record_end()

    def start_time(self, name: str) -> float:
        return self._intervals[name].start_time()

    def end_time(self, name: str) -> float:
        return self._intervals[name].end_time()

    def elapsed_time(self, name: str) -> float:
        return self._intervals[name].elapsed_time()