"""
Post-registration reminder.

After a student opts in, a reminder is scheduled on the UI scheduler:

    opt-in --delay--> fade in (N frames) --hold--> fade out (N frames) --> dismissed

The reminder never blocks: every phase is a scheduled callback. If the session
token is cancelled (logout), the remaining callbacks are skipped and the
presenter is never called again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Protocol

from smartevent.config import ReminderTiming
from smartevent.model import Event, User
from smartevent.scheduler import CancellationToken, Scheduler

logger = logging.getLogger(__name__)


class Phase(Enum):
    PENDING = "pending"
    FADING_IN = "fading-in"
    VISIBLE = "visible"
    FADING_OUT = "fading-out"
    DISMISSED = "dismissed"


@dataclass(frozen=True)
class Reminder:
    student_name: str
    event_name: str
    event_date: date
    location: str

    @classmethod
    def for_registration(cls, user: User, event: Event) -> "Reminder":
        return cls(
            student_name=user.display_name,
            event_name=event.name,
            event_date=event.date,
            location=event.location,
        )

    def lines(self) -> tuple[str, str]:
        return (
            f"Hi {self.student_name}, you registered for:",
            f"{self.event_name}  •  {self.event_date.isoformat()}  •  {self.location}",
        )


@dataclass
class ReminderToast:
    """
    Mutable presentation state of one reminder.
    opacity goes 0.0 -> 1.0 while fading in and back to 0.0 while fading out.
    """

    reminder: Reminder
    phase: Phase = Phase.PENDING
    opacity: float = 0.0

    @property
    def active(self) -> bool:
        return self.phase in (Phase.FADING_IN, Phase.VISIBLE, Phase.FADING_OUT)


class ReminderPresenter(Protocol):
    def show(self, toast: ReminderToast) -> None: ...

    def update(self, toast: ReminderToast) -> None: ...

    def dismiss(self, toast: ReminderToast) -> None: ...


def schedule_reminder(
    scheduler: Scheduler,
    reminder: Reminder,
    presenter: ReminderPresenter,
    timing: ReminderTiming = ReminderTiming(),
    token: Optional[CancellationToken] = None,
) -> ReminderToast:
    """
    Queue one reminder and return its toast (still PENDING).
    Each call produces an independent toast; reminders are not merged or queued.
    """
    toast = ReminderToast(reminder=reminder)
    steps = max(1, timing.fade_steps)

    def fade_in(step: int) -> None:
        toast.opacity = min(1.0, step / steps)
        if step == 0:
            toast.phase = Phase.FADING_IN
            logger.debug("Reminder for %r shown", reminder.event_name)
            presenter.show(toast)
        else:
            presenter.update(toast)

        if step < steps:
            scheduler.call_later(timing.fade_interval, lambda: fade_in(step + 1), token)
            return

        toast.phase = Phase.VISIBLE
        presenter.update(toast)
        scheduler.call_later(timing.hold, lambda: fade_out(steps), token)

    def fade_out(remaining: int) -> None:
        if remaining == steps:
            toast.phase = Phase.FADING_OUT
        remaining -= 1
        toast.opacity = max(0.0, remaining / steps)
        presenter.update(toast)

        if remaining > 0:
            scheduler.call_later(timing.fade_interval, lambda: fade_out(remaining), token)
            return

        toast.phase = Phase.DISMISSED
        logger.debug("Reminder for %r dismissed", reminder.event_name)
        presenter.dismiss(toast)

    scheduler.call_later(timing.delay, lambda: fade_in(0), token)
    logger.info("Reminder for %r scheduled in %.1fs", reminder.event_name, timing.delay)
    return toast
