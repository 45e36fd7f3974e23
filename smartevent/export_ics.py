"""
iCalendar (.ics) export.

Every event becomes one all-day entry that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable

from smartevent.model import Event


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def export_events_to_ics(events: Iterable[Event], out_path: str | Path) -> int:
    """
    Export events to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//SmartEvent//EN")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    count = 0
    for ev in events:
        # all-day: DTEND is exclusive, so it is the following day
        start = ev.date.strftime("%Y%m%d")
        end = (ev.date + timedelta(days=1)).strftime("%Y%m%d")

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{_ics_escape(ev.event_id)}@smartevent")
        lines.append(f"DTSTAMP:{dtstamp}")
        lines.append(f"DTSTART;VALUE=DATE:{start}")
        lines.append(f"DTEND;VALUE=DATE:{end}")
        lines.append(f"SUMMARY:{_ics_escape(ev.name or 'SmartEvent Event')}")
        if ev.location:
            lines.append(f"LOCATION:{_ics_escape(ev.location)}")
        lines.append(f"DESCRIPTION:{_ics_escape(f'Seats: {ev.booked_seats}/{ev.total_seats}')}")
        lines.append("END:VEVENT")
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
