"""
Unit tests for the post-registration reminder.

Lifecycle: delay -> fade in -> hold -> fade out -> dismissed,
all driven by scheduler callbacks on a fake clock.
"""

import unittest
from datetime import date

from smartevent.config import ReminderTiming
from smartevent.model import Event, Role, User
from smartevent.reminders import Phase, Reminder, schedule_reminder
from smartevent.scheduler import CancellationToken, Scheduler

TIMING = ReminderTiming(delay=5.0, hold=6.0, fade_steps=4, fade_interval=0.5)


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingPresenter:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Phase, float]] = []

    def show(self, toast) -> None:
        self.calls.append(("show", toast.phase, toast.opacity))

    def update(self, toast) -> None:
        self.calls.append(("update", toast.phase, toast.opacity))

    def dismiss(self, toast) -> None:
        self.calls.append(("dismiss", toast.phase, toast.opacity))


def _event() -> Event:
    return Event("EV0002", "AI Workshop", "Innovation Lab", date(2025, 11, 12), 50)


class TestReminderText(unittest.TestCase):
    def test_uses_full_name(self) -> None:
        user = User("s1", "pw", Role.STUDENT, "Sam One", "Physics")
        greeting, details = Reminder.for_registration(user, _event()).lines()
        self.assertEqual(greeting, "Hi Sam One, you registered for:")
        self.assertEqual(details, "AI Workshop  •  2025-11-12  •  Innovation Lab")

    def test_falls_back_to_username(self) -> None:
        user = User("s2", "pw", Role.STUDENT, "  ", "Physics")
        greeting, _ = Reminder.for_registration(user, _event()).lines()
        self.assertEqual(greeting, "Hi s2, you registered for:")


class TestReminderLifecycle(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.scheduler = Scheduler(clock=self.clock)
        self.presenter = RecordingPresenter()
        self.reminder = Reminder("Sam One", "AI Workshop", date(2025, 11, 12), "Innovation Lab")

    def run_until(self, t: float) -> None:
        while self.clock.now < t:
            self.clock.advance(0.5)
            self.scheduler.run_due()

    def test_nothing_before_delay(self) -> None:
        toast = schedule_reminder(self.scheduler, self.reminder, self.presenter, TIMING)
        self.run_until(4.5)
        self.assertEqual(self.presenter.calls, [])
        self.assertEqual(toast.phase, Phase.PENDING)
        self.assertFalse(toast.active)

    def test_full_lifecycle(self) -> None:
        toast = schedule_reminder(self.scheduler, self.reminder, self.presenter, TIMING)

        self.run_until(5.0)
        self.assertEqual(self.presenter.calls, [("show", Phase.FADING_IN, 0.0)])
        self.assertTrue(toast.active)

        self.run_until(7.0)
        self.assertEqual(toast.phase, Phase.VISIBLE)
        self.assertEqual(toast.opacity, 1.0)

        # hold: nothing happens until the fade-out starts
        count = len(self.presenter.calls)
        self.run_until(12.5)
        self.assertEqual(len(self.presenter.calls), count)

        self.run_until(14.5)
        self.assertEqual(toast.phase, Phase.DISMISSED)
        self.assertEqual(toast.opacity, 0.0)
        self.assertEqual(self.presenter.calls[-1], ("dismiss", Phase.DISMISSED, 0.0))
        self.assertIsNone(self.scheduler.next_delay())

        fade_in = [o for hook, phase, o in self.presenter.calls if phase is Phase.FADING_IN]
        fade_out = [o for hook, phase, o in self.presenter.calls if phase is Phase.FADING_OUT]
        self.assertEqual(fade_in, [0.0, 0.25, 0.5, 0.75, 1.0])
        self.assertEqual(fade_out, [0.75, 0.5, 0.25, 0.0])

    def test_cancel_before_delay_is_a_no_op(self) -> None:
        token = CancellationToken()
        toast = schedule_reminder(self.scheduler, self.reminder, self.presenter, TIMING, token)
        token.cancel()
        self.run_until(20)
        self.assertEqual(self.presenter.calls, [])
        self.assertEqual(toast.phase, Phase.PENDING)

    def test_cancel_mid_animation_stops_updates(self) -> None:
        token = CancellationToken()
        schedule_reminder(self.scheduler, self.reminder, self.presenter, TIMING, token)
        self.run_until(6.0)
        count = len(self.presenter.calls)

        token.cancel()
        self.run_until(20)
        self.assertEqual(len(self.presenter.calls), count)

    def test_two_reminders_are_independent(self) -> None:
        a = schedule_reminder(self.scheduler, self.reminder, self.presenter, TIMING)
        self.run_until(1.0)
        b = schedule_reminder(self.scheduler, self.reminder, self.presenter, TIMING)

        self.run_until(5.0)
        self.assertTrue(a.active)
        self.assertFalse(b.active)

        self.run_until(20)
        self.assertEqual(a.phase, Phase.DISMISSED)
        self.assertEqual(b.phase, Phase.DISMISSED)
        self.assertEqual(sum(1 for c in self.presenter.calls if c[0] == "dismiss"), 2)


if __name__ == "__main__":
    unittest.main()
