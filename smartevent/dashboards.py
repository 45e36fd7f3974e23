"""
Role dashboards (controllers).

Each dashboard is a thin layer over the EventStore:
- actions return a confirmation message on success
- failures raise a SmartEventError whose message is shown to the user
- no printing, no prompting (that is the job of interactive.py)

A dashboard lives for one login session. close() cancels the session token,
so reminders still queued for that session never fire.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from smartevent.calendar_grid import MonthGrid, build_month_grid, describe_day
from smartevent.config import ReminderTiming
from smartevent.errors import EventFullError, ValidationError
from smartevent.forms import clean, parse_event_date, parse_seat_count
from smartevent.model import Event, Result, Role, User
from smartevent.reminders import Reminder, ReminderPresenter, ReminderToast, schedule_reminder
from smartevent.scheduler import CancellationToken, Scheduler
from smartevent.store import EventStore

logger = logging.getLogger(__name__)


def format_event_list(events: tuple[Event, ...] | list[Event]) -> str:
    lines = ["=== EVENTS ===", ""]
    for i, ev in enumerate(events, start=1):
        lines.append(f"{i}. {ev.label()}")
    return "\n".join(lines)


def format_user_list(users: tuple[User, ...] | list[User]) -> str:
    return "\n".join(["=== USERS ==="] + [u.label() for u in users])


def format_results(event: Event, results: list[Result]) -> str:
    lines = [f"Results for: {event.name}", ""]
    if not results:
        lines.append("No results published for this event yet.")
        return "\n".join(lines)

    for i, r in enumerate(results, start=1):
        lines.append(f"{i}. {r.student_name} | {r.department} | {r.position}")
    lines.append("")
    lines.append("Congratulations to all winners!")
    return "\n".join(lines)


class Dashboard:
    """
    Actions shared by every role: event list and calendar.
    """

    role: Role

    def __init__(self, store: EventStore, user: User) -> None:
        self.store = store
        self.user = user
        self.session = CancellationToken()

    @property
    def title(self) -> str:
        return f"{self.role.value} Dashboard"

    @property
    def closed(self) -> bool:
        return self.session.cancelled

    def close(self) -> None:
        self.session.cancel()
        logger.info("Session of %s closed", self.user.username)

    def list_events(self) -> str:
        return format_event_list(self.store.events)

    def require_events(self) -> tuple[Event, ...]:
        events = self.store.events
        if not events:
            raise ValidationError("No events available.")
        return events

    def month(self, year: int, month: int) -> MonthGrid:
        return build_month_grid(year, month, self.store.events)

    def day_details(self, day: date) -> str:
        return describe_day(self.store.events, day)


class StaffDashboard(Dashboard):
    """
    Admin and faculty: create events and publish results.
    """

    result_message = "Result saved for {event}"

    def add_event(self, name: str, location: str, date_text: str, seats_text: str) -> Event:
        # Parse everything before touching the store.
        day = parse_event_date(date_text)
        seats = parse_seat_count(seats_text)
        return self.store.add_event(clean(name), clean(location), day, seats)

    def add_result(self, event_id: str, student_name: str, department: str, position: str) -> str:
        self.require_events()
        event = self.store.get_event(event_id)
        self.store.add_result(event.event_id, clean(student_name), clean(department), clean(position))
        return self.result_message.format(event=event.name)


class AdminDashboard(StaffDashboard):
    role = Role.ADMIN
    result_message = "Result published for event: {event}"

    def list_users(self) -> str:
        return format_user_list(self.store.users)

    def add_student(self, username: str, password: str, full_name: str, department: str) -> str:
        self.store.add_user(
            User(
                username=clean(username),
                password=clean(password),
                role=Role.STUDENT,
                full_name=clean(full_name),
                department=clean(department),
            )
        )
        return "Student added successfully!"


class FacultyDashboard(StaffDashboard):
    role = Role.FACULTY


class StudentDashboard(Dashboard):
    role = Role.STUDENT

    def __init__(
        self,
        store: EventStore,
        user: User,
        scheduler: Scheduler,
        timing: ReminderTiming = ReminderTiming(),
    ) -> None:
        super().__init__(store, user)
        self.scheduler = scheduler
        self.timing = timing

    @property
    def title(self) -> str:
        return f"Student Dashboard - {self.user.display_name}"

    def register(self, event_id: str) -> Event:
        """
        Take a seat. Raises EventFullError if the event has no seat left.
        """
        self.require_events()
        event = self.store.get_event(event_id)
        if not self.store.register(event_id):
            raise EventFullError(event.name)
        logger.info("%s registered for %s", self.user.username, event.event_id)
        return event

    def remind(self, event: Event, presenter: ReminderPresenter) -> Optional[ReminderToast]:
        """
        Queue a reminder for a registration made in this session.
        Returns None if the session is already closed.
        """
        if self.closed:
            return None
        return schedule_reminder(
            self.scheduler,
            Reminder.for_registration(self.user, event),
            presenter,
            timing=self.timing,
            token=self.session,
        )

    def results_for(self, event_id: str) -> list[Result]:
        self.require_events()
        return self.store.results_for(self.store.get_event(event_id).event_id)

    def results_text(self, event_id: str) -> str:
        results = self.results_for(event_id)
        return format_results(self.store.get_event(event_id), results)


def open_dashboard(
    store: EventStore,
    user: User,
    scheduler: Scheduler,
    timing: ReminderTiming = ReminderTiming(),
) -> Dashboard:
    """
    Route a logged-in user to the dashboard of their role.
    """
    if user.role is Role.ADMIN:
        return AdminDashboard(store, user)
    if user.role is Role.FACULTY:
        return FacultyDashboard(store, user)
    if user.role is Role.STUDENT:
        return StudentDashboard(store, user, scheduler, timing)
    raise AssertionError(f"Unhandled role: {user.role!r}")
