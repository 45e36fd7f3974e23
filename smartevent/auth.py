"""
Login.

A login succeeds only if a user with exactly the submitted
(username, password, role) triple exists. Username and password are trimmed,
comparison is case-sensitive. Failures never say which part was wrong.
"""

from __future__ import annotations

import logging

from smartevent.errors import AuthenticationError
from smartevent.model import Role, User
from smartevent.store import EventStore

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Invalid credentials or role. If you're a student ask the admin to create an account."


def authenticate(store: EventStore, username: str, password: str, role: Role | str) -> User:
    username = username.strip()
    password = password.strip()

    if not isinstance(role, Role):
        try:
            role = Role.parse(role)
        except ValueError:
            logger.info("Login failed for %r", username)
            raise AuthenticationError(LOGIN_FAILED_MESSAGE) from None

    for u in store.users:
        if u.username == username and u.password == password and u.role is role:
            logger.info("Login %s as %s", username, role.value)
            return u

    logger.info("Login failed for %r", username)
    raise AuthenticationError(LOGIN_FAILED_MESSAGE)
