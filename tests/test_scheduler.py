"""
Unit tests for the single-thread task queue.

A fake clock is injected, so nothing here sleeps.
"""

import unittest

from smartevent.scheduler import CancellationToken, Scheduler


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TestScheduler(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.scheduler = Scheduler(clock=self.clock)
        self.calls: list[str] = []

    def test_runs_only_due_tasks(self) -> None:
        self.scheduler.call_later(5, lambda: self.calls.append("a"))
        self.assertEqual(self.scheduler.run_due(), 0)

        self.clock.advance(4.9)
        self.assertEqual(self.scheduler.run_due(), 0)
        self.assertAlmostEqual(self.scheduler.next_delay(), 0.1)

        self.clock.advance(0.1)
        self.assertEqual(self.scheduler.run_due(), 1)
        self.assertEqual(self.calls, ["a"])
        self.assertIsNone(self.scheduler.next_delay())

    def test_deadline_then_fifo_order(self) -> None:
        self.scheduler.call_later(2, lambda: self.calls.append("late"))
        self.scheduler.call_later(1, lambda: self.calls.append("first"))
        self.scheduler.call_later(1, lambda: self.calls.append("second"))

        self.clock.advance(3)
        self.scheduler.run_due()
        self.assertEqual(self.calls, ["first", "second", "late"])

    def test_cancelled_tasks_are_skipped(self) -> None:
        token = CancellationToken()
        self.scheduler.call_later(1, lambda: self.calls.append("cancelled"), token)
        self.scheduler.call_later(1, lambda: self.calls.append("kept"))
        self.assertEqual(self.scheduler.pending, 2)

        token.cancel()
        self.assertEqual(self.scheduler.pending, 1)

        self.clock.advance(1)
        self.assertEqual(self.scheduler.run_due(), 1)
        self.assertEqual(self.calls, ["kept"])

    def test_next_delay_ignores_cancelled_head(self) -> None:
        token = CancellationToken()
        self.scheduler.call_later(1, lambda: None, token)
        self.scheduler.call_later(3, lambda: None)
        token.cancel()
        self.assertEqual(self.scheduler.next_delay(), 3)

    def test_callbacks_can_queue_due_work(self) -> None:
        def chain() -> None:
            self.calls.append("outer")
            self.scheduler.call_later(0, lambda: self.calls.append("inner"))

        self.scheduler.call_later(1, chain)
        self.clock.advance(1)
        self.assertEqual(self.scheduler.run_due(), 2)
        self.assertEqual(self.calls, ["outer", "inner"])


if __name__ == "__main__":
    unittest.main()
