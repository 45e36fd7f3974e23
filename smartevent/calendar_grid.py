"""
Month calendar grid.

Pure functions: (year, month, events) -> grid. The UI decides how to draw it.

Layout rules:
- 7 columns, Sunday first
- day 1 is preceded by (isoweekday(day 1) mod 7) blank cells
- every day cell carries the number of events on exactly that date
"""

from __future__ import annotations

import calendar
from collections import Counter
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from smartevent.model import Event

WEEKDAY_HEADERS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

SINGLE_EVENT_MARKER = "•"


@dataclass(frozen=True)
class DayCell:
    day: date
    count: int

    @property
    def marker(self) -> str:
        if self.count == 0:
            return ""
        if self.count == 1:
            return SINGLE_EVENT_MARKER
        return f"({self.count})"

    @property
    def label(self) -> str:
        return f"{self.day.day} {self.marker}".rstrip()


@dataclass(frozen=True)
class MonthGrid:
    year: int
    month: int
    padding: int
    days: tuple[DayCell, ...]

    @property
    def title(self) -> str:
        return f"{calendar.month_name[self.month].upper()} {self.year}"

    def rows(self) -> list[list]:
        """
        Header row followed by week rows of 7 cells.
        Blank cells (leading padding, trailing fill) are None.
        """
        cells: list[Optional[DayCell]] = [None] * self.padding + list(self.days)
        while len(cells) % 7:
            cells.append(None)

        out: list[list] = [list(WEEKDAY_HEADERS)]
        for i in range(0, len(cells), 7):
            out.append(cells[i : i + 7])
        return out

    def cell_for(self, day_of_month: int) -> DayCell:
        if not (1 <= day_of_month <= len(self.days)):
            raise ValueError(f"Day {day_of_month} is not in {self.title}")
        return self.days[day_of_month - 1]


def first_weekday_offset(year: int, month: int) -> int:
    # isoweekday: Monday=1 .. Sunday=7, so mod 7 puts Sunday at 0
    return date(year, month, 1).isoweekday() % 7


def build_month_grid(year: int, month: int, events: Iterable[Event]) -> MonthGrid:
    counts = Counter(ev.date for ev in events)
    length = calendar.monthrange(year, month)[1]

    days = tuple(DayCell(day=d, count=counts.get(d, 0)) for d in (date(year, month, i) for i in range(1, length + 1)))

    return MonthGrid(year=year, month=month, padding=first_weekday_offset(year, month), days=days)


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """
    Move by delta months, rolling the year over (January - 1 -> December of year - 1).
    """
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def events_on(events: Iterable[Event], day: date) -> list[Event]:
    return [ev for ev in events if ev.date == day]


def describe_day(events: Iterable[Event], day: date) -> str:
    matches = events_on(events, day)

    lines = [f"Events on {day.isoformat()}:", ""]
    if not matches:
        lines.append("No events scheduled on this date.")
        return "\n".join(lines)

    for ev in matches:
        lines.append(f"{ev.name} @ {ev.location}")
        lines.append(f"Seats: {ev.booked_seats}/{ev.total_seats}")
        lines.append("")
    return "\n".join(lines).rstrip("\n")
