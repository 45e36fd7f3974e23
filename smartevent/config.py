"""
Runtime settings.

All values have defaults that reproduce the classic desktop behavior
(5 second reminder, 6 second hold, 20-step fades). The CLI can override
a few of them via flags.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ReminderTiming:
    """
    Timing of the post-registration reminder, in seconds.

    delay         wait between opt-in and the first fade-in frame
    hold          how long the reminder stays fully visible
    fade_steps    frames per fade (in and out)
    fade_interval seconds between two fade frames
    """

    delay: float = 5.0
    hold: float = 6.0
    fade_steps: int = 20
    fade_interval: float = 0.02


@dataclass(frozen=True)
class Settings:
    reminder: ReminderTiming = field(default_factory=ReminderTiming)
    log_level: str = "WARNING"
    organization: str = "Academia Montes Flora"


def settings_from_args(args: argparse.Namespace) -> Settings:
    """
    Build Settings from parsed CLI arguments.

    Missing attributes fall back to defaults, so sub-parsers
    do not need to declare every global flag.
    """
    defaults = Settings()

    delay = getattr(args, "reminder_delay", None)
    timing = ReminderTiming(delay=delay) if delay is not None else defaults.reminder

    level = getattr(args, "log_level", None) or defaults.log_level

    return Settings(reminder=timing, log_level=level.upper())
