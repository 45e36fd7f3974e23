"""
Single-thread task queue.

All delayed work (reminders, fade animation frames) is expressed as callbacks
queued here and executed by whoever owns the UI loop via run_due(). Nothing
runs on a background thread and nothing sleeps.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class CancellationToken:
    """
    Shared flag tied to a lifetime (e.g. a dashboard session).
    Once cancelled, every task carrying it is skipped.
    """

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


@dataclass(order=True)
class ScheduledTask:
    when: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    token: Optional[CancellationToken] = field(default=None, compare=False)

    @property
    def cancelled(self) -> bool:
        return self.token is not None and self.token.cancelled


class Scheduler:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._queue: list[ScheduledTask] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._clock()

    def call_later(
        self,
        delay: float,
        callback: Callable[[], None],
        token: Optional[CancellationToken] = None,
    ) -> ScheduledTask:
        task = ScheduledTask(when=self._clock() + max(0.0, delay), seq=next(self._seq), callback=callback, token=token)
        heapq.heappush(self._queue, task)
        return task

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)

    @property
    def pending(self) -> int:
        return sum(1 for t in self._queue if not t.cancelled)

    def next_delay(self) -> Optional[float]:
        """
        Seconds until the next live task is due (0 if overdue),
        or None if nothing is queued.
        """
        self._drop_cancelled()
        if not self._queue:
            return None
        return max(0.0, self._queue[0].when - self._clock())

    def run_due(self) -> int:
        """
        Run every task whose deadline has passed, in deadline order.
        Tasks queued by a callback run in the same pass if they are already due.
        Returns the number of callbacks executed.
        """
        ran = 0
        now = self._clock()
        while self._queue and self._queue[0].when <= now:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                logger.debug("Skipping cancelled task #%d", task.seq)
                continue
            task.callback()
            ran += 1
        return ran
