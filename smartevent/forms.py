"""
Parsing of raw form input (strings typed by the user).

Rules:
- free-text fields are trimmed, never rejected
- dates are ISO 8601 calendar dates (YYYY-MM-DD)
- seat counts are positive integers
Anything else raises ValidationError and the caller keeps the store untouched.
"""

from __future__ import annotations

from datetime import date, datetime

from smartevent.errors import ValidationError
from smartevent.model import Role

# Menu numbers used by the login screen
ROLE_CHOICES = {"1": Role.ADMIN, "2": Role.FACULTY, "3": Role.STUDENT}


def clean(text: str | None) -> str:
    return "" if text is None else text.strip()


def parse_event_date(text: str | None) -> date:
    raw = clean(text)
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date: {raw!r} (expected YYYY-MM-DD)") from None


def parse_seat_count(text: str | None) -> int:
    raw = clean(text)
    try:
        seats = int(raw)
    except ValueError:
        raise ValidationError(f"Invalid seats: {raw!r} (expected a whole number)") from None
    if seats <= 0:
        raise ValidationError(f"Invalid seats: {seats} (must be at least 1)")
    return seats


def parse_role(text: str | None) -> Role:
    """
    Accept a menu number (1-3) or the exact role name.
    """
    raw = clean(text)
    if raw in ROLE_CHOICES:
        return ROLE_CHOICES[raw]
    try:
        return Role.parse(raw)
    except ValueError:
        raise ValidationError(f"Unknown role: {raw!r}") from None
