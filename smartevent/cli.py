"""
CLI (Command Line Interface).

This module provides the entry point plus a few quick commands, e.g.:

    smartevent interactive
    smartevent events
    smartevent calendar --year 2025 --month 11
    smartevent export <file.ics>

Note:
- The interactive UI lives in smartevent/interactive.py
- Every command starts from the fixed seed data; nothing is persisted
"""

from __future__ import annotations

import argparse
import logging
from datetime import date

from smartevent.calendar_grid import build_month_grid
from smartevent.config import Settings, settings_from_args
from smartevent.dashboards import format_event_list
from smartevent.export_ics import export_events_to_ics
from smartevent.log import setup_logging
from smartevent.seed import build_seeded_store
from smartevent.store import EventStore

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _cmd_events(args: argparse.Namespace, store: EventStore) -> int:
    """
    Print the event list.
    """
    print(format_event_list(store.events))
    return 0


def _cmd_calendar(args: argparse.Namespace, store: EventStore) -> int:
    """
    Print one month as a plain 7-column grid.
    """
    today = date.today()
    year = args.year if args.year is not None else today.year
    month = args.month if args.month is not None else today.month

    if not (1 <= month <= 12):
        print(f"Invalid month: {month}")
        return 1

    grid = build_month_grid(year, month, store.events)
    rows = grid.rows()

    print(grid.title)
    print(" ".join(h.ljust(6) for h in rows[0]))
    for row in rows[1:]:
        print(" ".join((cell.label if cell else "").ljust(6) for cell in row).rstrip())
    return 0


def _cmd_export(args: argparse.Namespace, store: EventStore) -> int:
    """
    Export all events into an iCalendar (.ics) file.
    """
    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .ics path.")
        return 1

    n = export_events_to_ics(store.events, out_path)
    print(f"Exported {n} events to: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="smartevent", description="Smart Event Organizer")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--reminder-delay",
        type=float,
        default=None,
        help="Seconds between reminder opt-in and the reminder popup (default: 5)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("interactive", help="Interactive login + dashboards")
    sub.add_parser("events", help="List events")

    p_cal = sub.add_parser("calendar", help="Show a month calendar")
    p_cal.add_argument("--year", type=int, default=None, help="Year (default: current)")
    p_cal.add_argument("--month", type=int, default=None, help="Month 1-12 (default: current)")

    p_export = sub.add_parser("export", help="Export events to .ics")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings: Settings = settings_from_args(args)
    setup_logging(settings.log_level)

    store = build_seeded_store()

    if args.command == "events":
        raise SystemExit(_cmd_events(args, store))
    if args.command == "calendar":
        raise SystemExit(_cmd_calendar(args, store))
    if args.command == "export":
        raise SystemExit(_cmd_export(args, store))

    if args.command == "interactive":
        from smartevent.interactive import run_interactive
        from smartevent.scheduler import Scheduler

        try:
            run_interactive(store, Scheduler(), settings)
        except (EOFError, KeyboardInterrupt):
            logger.debug("Input closed, exiting")
        raise SystemExit(0)

    raise SystemExit(2)
