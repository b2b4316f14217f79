"""Externally clocked delayed-callback queue.

Nothing runs on its own: the event loop of the presentation layer (or a test)
calls tick() with the elapsed time and due callbacks run synchronously.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from typing import Callable

logger = logging.getLogger(__name__)


class ScheduledTask:
    """Handle for one pending callback; cancel() prevents it from running."""

    def __init__(self, deadline_ms: float, callback: Callable[[], None]) -> None:
        self.deadline_ms = deadline_ms
        self.callback = callback
        self.cancelled = False
        self.done = False

    def cancel(self) -> None:
        """Cancel if still pending; no effect after it ran."""
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.done)


class Scheduler:
    """Single-threaded timer queue driven by tick(elapsed_ms)."""

    def __init__(self) -> None:
        self.now_ms = 0.0
        self._queue: list[tuple[float, int, ScheduledTask]] = []
        self._counter = itertools.count()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> ScheduledTask:
        """Schedule callback to run once delay_ms from now.

        Raises:
            ValueError: Negative delay.
        """
        if delay_ms < 0:
            raise ValueError(f'delay_ms must be >= 0, got {delay_ms}')
        task = ScheduledTask(self.now_ms + delay_ms, callback)
        heapq.heappush(self._queue, (task.deadline_ms, next(self._counter), task))
        return task

    def tick(self, elapsed_ms: float) -> int:
        """Advance the clock and run every due task in deadline order.

        Tasks due at the same time run in scheduling order. Tasks scheduled by a
        callback run in the same tick if already due.

        Returns:
            Number of callbacks run.
        """
        if elapsed_ms < 0:
            raise ValueError(f'elapsed_ms must be >= 0, got {elapsed_ms}')
        self.now_ms += elapsed_ms
        ran = 0
        while self._queue and self._queue[0][0] <= self.now_ms:
            _, _, task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            task.done = True
            task.callback()
            ran += 1
        return ran

    def pending(self) -> int:
        """Number of tasks neither run nor cancelled."""
        return sum(1 for _, _, task in self._queue if task.pending)
