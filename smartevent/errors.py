"""
Exception hierarchy.

Every error a user can trigger from a dashboard derives from SmartEventError,
so the interactive layer can catch one type, show the message and return to
the same screen.
"""

from __future__ import annotations


class SmartEventError(Exception):
    """Base class for all user-facing errors."""


class ValidationError(SmartEventError):
    """Malformed or rejected input. The store is left unchanged."""


class DuplicateUsernameError(ValidationError):
    def __init__(self, username: str) -> None:
        super().__init__("Username already exists!")
        self.username = username


class UnknownEventError(ValidationError):
    def __init__(self, event_id: str) -> None:
        super().__init__(f"Unknown event: {event_id!r}")
        self.event_id = event_id


class EventFullError(SmartEventError):
    """Business-rule rejection: no seat left."""

    def __init__(self, event_name: str) -> None:
        super().__init__("Sorry, event is full.")
        self.event_name = event_name


class AuthenticationError(SmartEventError):
    """Credential/role triple not found. Deliberately generic."""
