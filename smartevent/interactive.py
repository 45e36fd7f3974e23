from __future__ import annotations

import select
import sys

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from rich import box
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from smartevent.auth import authenticate
from smartevent.calendar_grid import WEEKDAY_HEADERS, DayCell, MonthGrid, shift_month
from smartevent.config import Settings
from smartevent.dashboards import (
    AdminDashboard,
    Dashboard,
    StaffDashboard,
    StudentDashboard,
    open_dashboard,
)
from smartevent.errors import SmartEventError, ValidationError
from smartevent.export_ics import export_events_to_ics
from smartevent.forms import parse_role
from smartevent.model import Event, Role, User
from smartevent.reminders import Phase, ReminderToast
from smartevent.scheduler import Scheduler
from smartevent.store import EventStore

console = Console()

EVENT_DAY_STYLE = "black on #ffecb3"


class ConsoleReminderPresenter:
    """
    Shows reminders in the terminal.

    A terminal cannot fade, so the panel is printed once the toast is fully
    visible; while the toast is active the dashboard header also lists it,
    styled by its current opacity.
    """

    def __init__(self) -> None:
        self.active: list[ReminderToast] = []
        self.dirty = False

    def show(self, toast: ReminderToast) -> None:
        self.active.append(toast)
        console.bell()

    def update(self, toast: ReminderToast) -> None:
        if toast.phase is Phase.VISIBLE:
            console.print()
            console.print(_toast_panel(toast))
            self.dirty = True

    def dismiss(self, toast: ReminderToast) -> None:
        if toast in self.active:
            self.active.remove(toast)

    def clear(self) -> None:
        self.active.clear()
        self.dirty = False


@dataclass
class UIContext:
    store: EventStore
    scheduler: Scheduler
    settings: Settings
    presenter: ConsoleReminderPresenter = field(default_factory=ConsoleReminderPresenter)


def _println(msg: str = "") -> None:
    console.print(msg)


def _error(msg: str) -> None:
    console.print(f"[bold red]{escape(msg)}[/]")


def _can_poll_stdin() -> bool:
    return sys.platform != "win32" and sys.stdin is not None and sys.stdin.isatty()


def _wait_for_input(ctx: UIContext, msg: str) -> None:
    """
    Block on stdin, but keep running due scheduler tasks while the user types.
    """
    while True:
        delay = ctx.scheduler.next_delay()
        if delay is None:
            return
        ready, _, _ = select.select([sys.stdin], [], [], delay)
        if ready:
            return
        ctx.scheduler.run_due()
        if ctx.presenter.dirty:
            # a reminder was printed over the prompt, show it again
            ctx.presenter.dirty = False
            console.print(msg, end="")


def _prompt(ctx: UIContext, msg: str, password: bool = False) -> str:
    ctx.scheduler.run_due()
    ctx.presenter.dirty = False

    if password or not _can_poll_stdin():
        return console.input(msg, password=password)

    console.print(msg, end="")
    _wait_for_input(ctx, msg)
    answer = input()
    ctx.scheduler.run_due()
    return answer


def _confirm(ctx: UIContext, msg: str, default: bool) -> bool:
    answer = _prompt(ctx, msg).strip().lower()
    if not answer:
        return default
    return answer in ("y", "yes")


def _toast_style(opacity: float) -> str:
    if opacity >= 1.0:
        return "bold yellow"
    if opacity >= 0.5:
        return "yellow"
    return "grey50"


def _toast_panel(toast: ReminderToast) -> Panel:
    greeting, details = toast.reminder.lines()
    body = Group(
        Text(greeting, style="white", justify="center"),
        Text(details, style="grey70", justify="center"),
    )
    return Panel(body, title="🔔 Reminder", border_style=_toast_style(toast.opacity), width=60)


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


def _print_login_header(ctx: UIContext) -> None:
    _println(f"\n[bold white on blue] {escape(ctx.settings.organization)} [/]")
    _println("[bold blue]Smart Event Organizer[/]")
    _println("[italic]Note: Admin should create student accounts in Admin Dashboard.[/]")


def _flow_login(ctx: UIContext) -> Optional[User]:
    """
    Ask for credentials until a login succeeds (returns the user)
    or the user chooses to exit (returns None).
    """
    while True:
        _print_login_header(ctx)
        choice = _prompt(ctx, "\n[1] Login\n[0] Exit\nSelect: ").strip()

        if choice == "0":
            return None
        if choice != "1":
            _println("Invalid choice.")
            continue

        username = _prompt(ctx, "Username: ")
        password = _prompt(ctx, "Password: ", password=True)
        role_in = _prompt(ctx, "Role ([1] Admin, [2] Faculty, [3] Student): ")

        role: Role | str
        try:
            role = parse_role(role_in)
        except ValidationError:
            # let authenticate() reject it with the generic message
            role = role_in.strip()

        try:
            return authenticate(ctx.store, username, password, role)
        except SmartEventError as e:
            _error(f"Login Failed: {e}")


# ---------------------------------------------------------------------------
# Shared flows
# ---------------------------------------------------------------------------


def _pick_event(ctx: UIContext, dashboard: Dashboard, title: str, with_date: bool = False) -> Optional[Event]:
    events = dashboard.require_events()

    table = Table(title=title, box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Event")
    for i, ev in enumerate(events, start=1):
        label = f"{ev.name} ({ev.date.isoformat()})" if with_date else ev.name
        table.add_row(str(i), escape(label))
    console.print(table)

    while True:
        pick = _prompt(ctx, "Enter number (blank = cancel): ").strip()
        if not pick:
            return None
        if not pick.isdigit():
            _println("Not a number.")
            continue
        i = int(pick)
        if not (1 <= i <= len(events)):
            _println("Out of range.")
            continue
        return events[i - 1]


def _flow_view_events(ctx: UIContext, dashboard: Dashboard) -> None:
    _println(escape(dashboard.list_events()))


def _day_cell(cell: Optional[DayCell]) -> Text:
    if cell is None:
        return Text("")
    if cell.count:
        return Text(cell.label, style=EVENT_DAY_STYLE)
    return Text(cell.label)


def _month_table(grid: MonthGrid) -> Table:
    table = Table(title=grid.title, box=box.SQUARE, show_lines=True, header_style="bold blue")
    for name in WEEKDAY_HEADERS:
        table.add_column(name, justify="center", min_width=6)
    for row in grid.rows()[1:]:
        table.add_row(*[_day_cell(c) for c in row])
    return table


def _flow_export(ctx: UIContext) -> None:
    downloads = Path.home() / "Downloads"
    default_name = "smartevent.ics"

    out_in = _prompt(ctx, f"File name (default: {default_name}): ").strip()
    out_path = downloads / (out_in or default_name)
    if out_path.suffix.lower() != ".ics":
        out_path = out_path.with_suffix(".ics")

    try:
        n = export_events_to_ics(ctx.store.events, out_path)
    except OSError as e:
        _error(f"Export failed: {e}")
        return
    _println(f"Exported {n} events to: {escape(str(out_path.resolve()))}")


def _flow_calendar(ctx: UIContext, dashboard: Dashboard) -> None:
    today = date.today()
    year, month = today.year, today.month

    while True:
        grid = dashboard.month(year, month)
        console.print(_month_table(grid))

        pick = (
            _prompt(ctx, "Day number = details | (p) previous | (n) next | (e) export .ics | blank = back: ")
            .strip()
            .lower()
        )
        if not pick:
            return
        if pick == "p":
            year, month = shift_month(year, month, -1)
            continue
        if pick == "n":
            year, month = shift_month(year, month, 1)
            continue
        if pick == "e":
            _flow_export(ctx)
            continue
        if not pick.isdigit():
            _println("Not a number.")
            continue

        try:
            cell = grid.cell_for(int(pick))
        except ValueError:
            _println("Out of range.")
            continue

        console.print(Panel(escape(dashboard.day_details(cell.day)), title="Events", box=box.ROUNDED))
        _prompt(ctx, "\nPress Enter to go back...")


def _flow_add_event(ctx: UIContext, dashboard: StaffDashboard) -> None:
    name = _prompt(ctx, "Event name: ")
    location = _prompt(ctx, "Location: ")

    today = date.today().isoformat()
    date_in = _prompt(ctx, f"Date (YYYY-MM-DD) [{today}]: ").strip() or today
    seats_in = _prompt(ctx, "Total seats [50]: ").strip() or "50"

    if not _confirm(ctx, "Save event? [Y/n]: ", default=True):
        return

    dashboard.add_event(name, location, date_in, seats_in)
    _println("[green]Event added![/]")


def _flow_add_result(ctx: UIContext, dashboard: StaffDashboard) -> None:
    event = _pick_event(ctx, dashboard, "Select Event")
    if event is None:
        return

    student = _prompt(ctx, "Student Name: ")
    dept = _prompt(ctx, "Department: ")
    pos = _prompt(ctx, "Position (e.g., 1st, 2nd): ")

    if not _confirm(ctx, "Save result? [Y/n]: ", default=True):
        return

    _println(f"[green]{escape(dashboard.add_result(event.event_id, student, dept, pos))}[/]")


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------


def _flow_view_users(ctx: UIContext, dashboard: AdminDashboard) -> None:
    _println(escape(dashboard.list_users()))


def _flow_add_student(ctx: UIContext, dashboard: AdminDashboard) -> None:
    username = _prompt(ctx, "Username: ")
    password = _prompt(ctx, "Password: ")
    full_name = _prompt(ctx, "Full name: ")
    department = _prompt(ctx, "Department: ")

    if not _confirm(ctx, "Save student? [Y/n]: ", default=True):
        return

    _println(f"[green]{dashboard.add_student(username, password, full_name, department)}[/]")


# ---------------------------------------------------------------------------
# Student
# ---------------------------------------------------------------------------


def _flow_register(ctx: UIContext, dashboard: StudentDashboard) -> None:
    event = _pick_event(ctx, dashboard, "Select event to register", with_date=True)
    if event is None:
        return

    dashboard.register(event.event_id)
    _println(f"[green]Registered for {escape(event.name)}![/]")

    delay = ctx.settings.reminder.delay
    if _confirm(ctx, f"Do you want a reminder for this event in {delay:g} seconds? (y/N): ", default=False):
        dashboard.remind(event, ctx.presenter)
        _println(f"Reminder set. It will pop up in {delay:g} seconds.")

    _println(escape(dashboard.list_events()))


def _flow_view_results(ctx: UIContext, dashboard: StudentDashboard) -> None:
    event = _pick_event(ctx, dashboard, "Select event to view results")
    if event is None:
        return
    _println(escape(dashboard.results_text(event.event_id)))


# ---------------------------------------------------------------------------
# Dashboard loop
# ---------------------------------------------------------------------------

Flow = Callable[[UIContext, Dashboard], None]


def _menu_for(dashboard: Dashboard) -> list[tuple[str, Flow]]:
    if dashboard.role is Role.ADMIN:
        return [
            ("View Users", _flow_view_users),
            ("View Events", _flow_view_events),
            ("Add Student", _flow_add_student),
            ("Add Event", _flow_add_event),
            ("Publish Results (per event)", _flow_add_result),
            ("View Calendar", _flow_calendar),
        ]
    if dashboard.role is Role.FACULTY:
        return [
            ("Add Event", _flow_add_event),
            ("View Events", _flow_view_events),
            ("Add Results", _flow_add_result),
            ("View Calendar", _flow_calendar),
        ]
    if dashboard.role is Role.STUDENT:
        return [
            ("View Events", _flow_view_events),
            ("Register", _flow_register),
            ("View Calendar", _flow_calendar),
            ("View Results by Event", _flow_view_results),
        ]
    raise AssertionError(f"Unhandled role: {dashboard.role!r}")


def _print_header(ctx: UIContext, dashboard: Dashboard) -> None:
    _println(f"\n[bold white on blue] {escape(dashboard.title)} [/]")
    _println(f"Events: {len(ctx.store.events)} | Users: {len(ctx.store.users)}")

    for toast in ctx.presenter.active:
        _, details = toast.reminder.lines()
        console.print(Text(f"🔔 {details}", style=_toast_style(toast.opacity)))


def _run_dashboard(ctx: UIContext, dashboard: Dashboard) -> None:
    menu = _menu_for(dashboard)
    text = "".join(f"[{i}] {label}\n" for i, (label, _) in enumerate(menu, start=1))

    while True:
        _print_header(ctx, dashboard)
        choice = _prompt(ctx, f"\n{text}[0] Logout\nSelect: ").strip()

        if choice == "0":
            _println("Logged out.")
            return

        if not choice.isdigit() or not (1 <= int(choice) <= len(menu)):
            _println("Invalid choice.")
            continue

        _, flow = menu[int(choice) - 1]
        try:
            flow(ctx, dashboard)
        except SmartEventError as e:
            _error(str(e))


def _end_session(ctx: UIContext, dashboard: Dashboard) -> None:
    """
    Close a dashboard session. Its queued reminders are cancelled and the
    toasts it left on screen are discarded, so the next login starts clean.
    """
    dashboard.close()
    ctx.presenter.clear()


def run_interactive(store: EventStore, scheduler: Scheduler, settings: Settings = Settings()) -> None:
    """
    Login -> dashboard -> logout loop until the user exits.
    """
    ctx = UIContext(store=store, scheduler=scheduler, settings=settings)

    while True:
        user = _flow_login(ctx)
        if user is None:
            _println("Bye.")
            return

        dashboard = open_dashboard(store, user, scheduler, settings.reminder)
        try:
            _run_dashboard(ctx, dashboard)
        finally:
            _end_session(ctx, dashboard)
