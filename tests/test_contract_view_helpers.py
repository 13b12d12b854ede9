from __future__ import annotations

import unittest

from calpick.config import EngineConfig
from calpick.engine import CalendarEngine
from calpick.model import CalendarDate, RangeSelection
from calpick.view import (
    days_in_month,
    is_date_disabled,
    is_date_highlighted,
    is_in_range,
    is_range_middle,
    month_grid,
    range_edge,
    week_number,
)


def D(s: str) -> CalendarDate:
    return CalendarDate.parse(s)


class TestDayPredicatesContract(unittest.TestCase):
    def test_disabled_bounds_and_list(self) -> None:
        lo, hi = D("2024-03-05"), D("2024-03-20")
        self.assertTrue(is_date_disabled(D("2024-03-04"), lo, hi))
        self.assertFalse(is_date_disabled(D("2024-03-05"), lo, hi))
        self.assertFalse(is_date_disabled(D("2024-03-20"), lo, hi))
        self.assertTrue(is_date_disabled(D("2024-03-21"), lo, hi))
        self.assertTrue(is_date_disabled(D("2024-03-10"), lo, hi, [D("2024-03-10")]))
        self.assertFalse(is_date_disabled(D("1990-01-01")))

    def test_highlighted(self) -> None:
        self.assertTrue(is_date_highlighted(D("2024-03-08"), [D("2024-03-08")]))
        self.assertFalse(is_date_highlighted(D("2024-03-09"), [D("2024-03-08")]))

    def test_range_edges(self) -> None:
        sel = RangeSelection(D("2024-03-23"), D("2024-03-26"))
        self.assertEqual(range_edge(D("2024-03-23"), sel), "start")
        self.assertEqual(range_edge(D("2024-03-24"), sel), "middle")
        self.assertEqual(range_edge(D("2024-03-26"), sel), "end")
        self.assertIsNone(range_edge(D("2024-03-27"), sel))
        self.assertTrue(is_in_range(D("2024-03-26"), sel))
        self.assertFalse(is_range_middle(D("2024-03-26"), sel))

        same = RangeSelection(D("2024-03-23"), D("2024-03-23"))
        self.assertEqual(range_edge(D("2024-03-23"), same), "single")

        partial = RangeSelection(D("2024-03-23"), None)
        self.assertEqual(range_edge(D("2024-03-23"), partial), "start")
        self.assertFalse(is_in_range(D("2024-03-24"), partial))
        self.assertFalse(is_range_middle(D("2024-03-24"), partial))
        self.assertFalse(is_in_range(D("2024-03-24"), RangeSelection()))


class TestMonthGridContract(unittest.TestCase):
    def test_march_2024_grid(self) -> None:
        grid = month_grid(2024, 3)
        self.assertEqual(len(grid), 6)
        self.assertTrue(all(len(w) == 7 for w in grid))
        self.assertEqual(grid[0][0], D("2024-02-25"))
        self.assertEqual(grid[0][5], D("2024-03-01"))
        self.assertEqual(grid[-1][-1], D("2024-04-06"))

    def test_month_starting_on_sunday_has_no_lead(self) -> None:
        grid = month_grid(2024, 9)
        self.assertEqual(grid[0][0], D("2024-09-01"))

    def test_days_in_month_handles_leap_years(self) -> None:
        self.assertEqual(len(days_in_month(2024, 2)), 29)
        self.assertEqual(len(days_in_month(2023, 2)), 28)

    def test_week_numbers(self) -> None:
        self.assertEqual(week_number(D("2024-01-01")), 1)
        self.assertEqual(week_number(D("2024-01-06")), 1)
        self.assertEqual(week_number(D("2024-01-07")), 2)
        self.assertEqual(week_number(D("2023-01-01")), 1)
        self.assertEqual(week_number(D("2023-01-08")), 2)


class TestNavigationContract(unittest.TestCase):
    def test_view_month_follows_initial_selection(self) -> None:
        eng = CalendarEngine(
            EngineConfig(mode="range", initial_range=RangeSelection(D("2024-03-26"), D("2024-03-23"))),
            clock=lambda: D("2030-01-01"),
        )
        self.assertEqual(eng.selection, RangeSelection(D("2024-03-23"), D("2024-03-26")))
        self.assertEqual(eng.view_month, D("2024-03-01"))
        self.assertEqual(eng.second_month, D("2024-04-01"))

    def test_shift_months_across_years(self) -> None:
        eng = CalendarEngine(EngineConfig(mode="multi-month"), clock=lambda: D("2024-12-15"))
        self.assertEqual(eng.second_month, D("2025-01-01"))
        eng.next_month()
        self.assertEqual(eng.view_month, D("2025-01-01"))
        eng.previous_month()
        eng.previous_month()
        self.assertEqual(eng.view_month, D("2024-11-01"))

    def test_navigation_never_touches_selection(self) -> None:
        eng = CalendarEngine(EngineConfig(mode="range"), clock=lambda: D("2024-03-26"))
        eng.handle_date_click(D("2024-03-10"))
        sel = eng.selection
        self.assertEqual(eng.next_month(), ())
        self.assertEqual(eng.go_to_today(), ())
        self.assertEqual(eng.selection, sel)

    def test_go_to_today_in_single_mode_picks_today(self) -> None:
        picked = []
        eng = CalendarEngine(EngineConfig(mode="single"), clock=lambda: D("2024-03-26"), on_change=picked.append)
        eng.next_month()
        eng.go_to_today()
        self.assertEqual(eng.view_month, D("2024-03-01"))
        self.assertEqual(picked, [D("2024-03-26")])

    def test_engine_gate_uses_config(self) -> None:
        eng = CalendarEngine(EngineConfig(min_date=D("2024-03-05"), disabled_dates=(D("2024-03-08"),)))
        self.assertTrue(eng.is_date_disabled(D("2024-03-01")))
        self.assertTrue(eng.is_date_disabled(D("2024-03-08")))
        self.assertFalse(eng.is_date_disabled(D("2024-03-09")))


if __name__ == "__main__":
    unittest.main(verbosity=2)
