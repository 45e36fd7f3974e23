"""
Central data model definitions used across the project.

This module defines the canonical structure of User, Event and Result objects so that:
- the store, the controllers and the UI share the same field names
- relationships use explicit identifiers (Result -> Event via event_id)
- roles are a closed set, not free strings
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class Role(str, Enum):
    ADMIN = "Admin"
    FACULTY = "Faculty"
    STUDENT = "Student"

    @classmethod
    def parse(cls, text: str) -> "Role":
        """
        Exact, case-sensitive lookup by value ("Admin", "Faculty", "Student").
        Raises ValueError for anything else.
        """
        for role in cls:
            if role.value == text:
                return role
        raise ValueError(f"Unknown role: {text!r}")


@dataclass
class User:
    """
    One account. Students carry a full name and a department,
    staff accounts usually leave both empty.
    """

    username: str
    password: str
    role: Role
    full_name: str = ""
    department: str = ""

    @property
    def display_name(self) -> str:
        return self.full_name if self.full_name.strip() else self.username

    def label(self) -> str:
        if self.role is Role.STUDENT:
            return f"{self.full_name} ({self.username}) - {self.department}"
        return f"{self.username} ({self.role.value})"


@dataclass
class Event:
    """
    One schedulable event with a fixed capacity.

    Invariant: 0 <= booked_seats <= total_seats
    """

    event_id: str
    name: str
    location: str
    date: date
    total_seats: int
    booked_seats: int = 0

    @property
    def seats_left(self) -> int:
        return self.total_seats - self.booked_seats

    @property
    def is_full(self) -> bool:
        return self.booked_seats >= self.total_seats

    def label(self) -> str:
        return (
            f"{self.name} | {self.date.isoformat()} | {self.location} | "
            f"Seats: {self.booked_seats}/{self.total_seats}"
        )


@dataclass
class Result:
    """
    One published placement for one event.
    """

    event_id: str
    student_name: str
    department: str
    position: str
