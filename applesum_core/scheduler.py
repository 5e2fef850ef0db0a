from __future__ import annotations

import heapq
import itertools
import threading
from typing import Callable, List, Tuple

Callback = Callable[[], None]


class Scheduler:
    """Runs deferred work once after a delay. Scheduled work cannot be cancelled."""

    def schedule(self, delay_ms: int, callback: Callback) -> None:
        raise NotImplementedError


class ThreadingScheduler(Scheduler):
    """Fires each callback on its own daemon timer thread."""

    def schedule(self, delay_ms: int, callback: Callback) -> None:
        timer = threading.Timer(max(0, delay_ms) / 1000.0, callback)
        timer.daemon = True
        timer.start()


class ManualScheduler(Scheduler):
    """
    Fake clock for tests and the terminal driver.

    Nothing runs until the clock is advanced; due callbacks then run in the
    order they were scheduled.
    """

    def __init__(self) -> None:
        self.now = 0
        self._seq = itertools.count()
        self._queue: List[Tuple[int, int, Callback]] = []

    @property
    def pending(self) -> int:
        return len(self._queue)

    def schedule(self, delay_ms: int, callback: Callback) -> None:
        heapq.heappush(self._queue, (self.now + max(0, delay_ms), next(self._seq), callback))

    def advance(self, ms: int) -> int:
        """Moves the clock forward by `ms` and runs what became due. Returns how many ran."""
        deadline = self.now + ms
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, callback = heapq.heappop(self._queue)
            self.now = max(self.now, due)
            callback()
            ran += 1
        self.now = deadline
        return ran

    def run_pending(self) -> int:
        """Advances the clock until nothing is left waiting, including work scheduled meanwhile."""
        ran = 0
        while self._queue:
            ran += self.advance(self._queue[0][0] - self.now)
        return ran
