"""
Unit tests for the month grid.

Layout rules checked here:
- padding = isoweekday(day 1) mod 7 (Sunday = 0)
- one day cell per day of the month
- cell count = number of events on exactly that date
"""

import calendar
import unittest
from datetime import date

from smartevent.calendar_grid import (
    WEEKDAY_HEADERS,
    build_month_grid,
    describe_day,
    first_weekday_offset,
    shift_month,
)
from smartevent.seed import build_seeded_store


class TestMonthGrid(unittest.TestCase):
    def test_november_2025_seed(self) -> None:
        store = build_seeded_store()
        grid = build_month_grid(2025, 11, store.events)

        # Nov 1, 2025 is a Saturday
        self.assertEqual(grid.padding, 6)
        self.assertEqual(len(grid.days), 30)
        self.assertEqual(grid.title, "NOVEMBER 2025")

        marked = {c.day.day: c.marker for c in grid.days if c.count}
        self.assertEqual(marked, {8: "•", 12: "•", 15: "•"})
        self.assertTrue(all(c.marker == "" for c in grid.days if c.day.day not in marked))

    def test_padding_and_day_count_for_a_range_of_months(self) -> None:
        for year in (2023, 2024, 2025):
            for month in range(1, 13):
                grid = build_month_grid(year, month, [])
                self.assertEqual(grid.padding, (calendar.weekday(year, month, 1) + 1) % 7)
                self.assertEqual(len(grid.days), calendar.monthrange(year, month)[1])

    def test_rows_layout(self) -> None:
        grid = build_month_grid(2025, 11, [])
        rows = grid.rows()

        self.assertEqual(rows[0], list(WEEKDAY_HEADERS))
        self.assertTrue(all(len(r) == 7 for r in rows))

        cells = [c for r in rows[1:] for c in r]
        self.assertEqual(cells[:6], [None] * 6)
        self.assertEqual(cells[6].day, date(2025, 11, 1))
        self.assertEqual(sum(1 for c in cells if c is not None), 30)

    def test_multiple_events_show_count(self) -> None:
        store = build_seeded_store()
        store.add_event("Extra", "Lab", date(2025, 11, 8), 10)
        store.add_event("Another", "Lab", date(2025, 11, 8), 10)

        cell = build_month_grid(2025, 11, store.events).cell_for(8)
        self.assertEqual(cell.count, 3)
        self.assertEqual(cell.marker, "(3)")
        self.assertEqual(cell.label, "8 (3)")

    def test_cell_for_out_of_range(self) -> None:
        grid = build_month_grid(2025, 2, [])
        with self.assertRaises(ValueError):
            grid.cell_for(29)
        with self.assertRaises(ValueError):
            grid.cell_for(0)

    def test_first_weekday_offset_sunday_is_zero(self) -> None:
        # June 1, 2025 is a Sunday
        self.assertEqual(first_weekday_offset(2025, 6), 0)
        # September 1, 2025 is a Monday
        self.assertEqual(first_weekday_offset(2025, 9), 1)


class TestNavigation(unittest.TestCase):
    def test_shift_month_rolls_year(self) -> None:
        self.assertEqual(shift_month(2025, 1, -1), (2024, 12))
        self.assertEqual(shift_month(2025, 12, 1), (2026, 1))
        self.assertEqual(shift_month(2025, 6, 0), (2025, 6))
        self.assertEqual(shift_month(2025, 3, -15), (2023, 12))


class TestDayDetails(unittest.TestCase):
    def test_day_with_events(self) -> None:
        store = build_seeded_store()
        text = describe_day(store.events, date(2025, 11, 12))
        self.assertIn("Events on 2025-11-12:", text)
        self.assertIn("AI Workshop @ Innovation Lab", text)
        self.assertIn("Seats: 0/50", text)

    def test_day_without_events(self) -> None:
        store = build_seeded_store()
        text = describe_day(store.events, date(2025, 11, 13))
        self.assertTrue(text.endswith("No events scheduled on this date."))


if __name__ == "__main__":
    unittest.main()
