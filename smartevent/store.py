"""
In-memory domain store.

The store is a plain object created by the application root and handed to
every controller. It only supports inserts plus seat registration; nothing is
ever edited or deleted, and nothing survives the process.
"""

from __future__ import annotations

import itertools
import logging
from datetime import date
from typing import Optional

from smartevent.errors import DuplicateUsernameError, UnknownEventError, ValidationError
from smartevent.model import Event, Result, User

logger = logging.getLogger(__name__)


class EventStore:
    def __init__(self) -> None:
        self._users: list[User] = []
        self._events: list[Event] = []
        self._results: list[Result] = []
        self._event_ids = itertools.count(1)

    # -----------------------------------------------------------------------
    # Read access (insertion order, read-only views)
    # -----------------------------------------------------------------------

    @property
    def users(self) -> tuple[User, ...]:
        return tuple(self._users)

    @property
    def events(self) -> tuple[Event, ...]:
        return tuple(self._events)

    @property
    def results(self) -> tuple[Result, ...]:
        return tuple(self._results)

    def find_user(self, username: str) -> Optional[User]:
        for u in self._users:
            if u.username == username:
                return u
        return None

    def get_event(self, event_id: str) -> Event:
        for ev in self._events:
            if ev.event_id == event_id:
                return ev
        raise UnknownEventError(event_id)

    def events_on(self, day: date) -> list[Event]:
        return [ev for ev in self._events if ev.date == day]

    def results_for(self, event_id: str) -> list[Result]:
        return [r for r in self._results if r.event_id == event_id]

    # -----------------------------------------------------------------------
    # Inserts
    # -----------------------------------------------------------------------

    def add_user(self, user: User) -> User:
        """
        Add a user. Usernames are unique; a duplicate raises
        DuplicateUsernameError and leaves the store unchanged.
        """
        if self.find_user(user.username) is not None:
            raise DuplicateUsernameError(user.username)
        self._users.append(user)
        logger.info("Added user %s (%s)", user.username, user.role.value)
        return user

    def add_event(self, name: str, location: str, day: date, total_seats: int) -> Event:
        """
        Create an event with a fresh identifier (EV0001, EV0002, ...).
        Capacity must be a positive integer.
        """
        if total_seats <= 0:
            raise ValidationError("Total seats must be a positive number.")

        event = Event(
            event_id=f"EV{next(self._event_ids):04d}",
            name=name,
            location=location,
            date=day,
            total_seats=total_seats,
        )
        self._events.append(event)
        logger.info("Added event %s %r on %s (%d seats)", event.event_id, name, day, total_seats)
        return event

    def add_result(self, event_id: str, student_name: str, department: str, position: str) -> Result:
        # Append-only; several results may point at the same event.
        result = Result(event_id=event_id, student_name=student_name, department=department, position=position)
        self._results.append(result)
        logger.info("Added result for %s: %s (%s)", event_id, student_name, position)
        return result

    # -----------------------------------------------------------------------
    # Registration
    # -----------------------------------------------------------------------

    def register(self, event_id: str) -> bool:
        """
        Take one seat of an event.

        Returns True and increments booked_seats by exactly one if a seat is
        left; returns False without touching the event when it is full.
        """
        event = self.get_event(event_id)
        if event.booked_seats >= event.total_seats:
            logger.info("Registration rejected, %s is full", event_id)
            return False
        event.booked_seats += 1
        logger.debug("Registered seat %d/%d for %s", event.booked_seats, event.total_seats, event_id)
        return True
