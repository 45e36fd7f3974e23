"""
Fixed start-up data.

Every run starts from the same state: one admin, one faculty account and
three November 2025 events. Students are created by the admin at runtime.
"""

from __future__ import annotations

from datetime import date

from smartevent.model import Role, User
from smartevent.store import EventStore

SEED_USERS = (
    ("admin", "admin", Role.ADMIN),
    ("faculty", "faculty", Role.FACULTY),
)

SEED_EVENTS = (
    ("Tech Symposium", "Auditorium", date(2025, 11, 8), 100),
    ("AI Workshop", "Innovation Lab", date(2025, 11, 12), 50),
    ("Cultural Fest", "Main Hall", date(2025, 11, 15), 200),
)


def seed_store(store: EventStore) -> EventStore:
    for username, password, role in SEED_USERS:
        store.add_user(User(username, password, role))
    for name, location, day, seats in SEED_EVENTS:
        store.add_event(name, location, day, seats)
    return store


def build_seeded_store() -> EventStore:
    return seed_store(EventStore())
