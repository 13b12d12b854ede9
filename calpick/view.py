# calpick/view.py
"""Renderer-facing helpers: day predicates, month grids and month navigation.

Nothing here changes the selection except go_to_today in single mode, which
behaves like a click on today.
"""

from __future__ import annotations

import calendar
import datetime as dt
from dataclasses import replace
from typing import Iterable, List, Optional

from .events import Transition
from .model import MODE_SINGLE, CalendarDate, EngineState, RangeSelection
from .range_state import handle_date_click


def is_date_disabled(
    date: CalendarDate,
    min_date: Optional[CalendarDate] = None,
    max_date: Optional[CalendarDate] = None,
    disabled_dates: Iterable[CalendarDate] = (),
) -> bool:
    """Gate the renderer applies before forwarding a click."""
    if min_date is not None and date < min_date:
        return True
    if max_date is not None and date > max_date:
        return True
    return date in set(disabled_dates)


def is_date_highlighted(date: CalendarDate, highlighted_dates: Iterable[CalendarDate] = ()) -> bool:
    return date in set(highlighted_dates)


def is_range_start(date: CalendarDate, sel: RangeSelection) -> bool:
    return sel.start == date


def is_range_end(date: CalendarDate, sel: RangeSelection) -> bool:
    return sel.end == date


def is_in_range(date: CalendarDate, sel: RangeSelection) -> bool:
    start, end = sel.start, sel.end
    if start is None or end is None:
        return False
    return start <= date <= end


def is_range_middle(date: CalendarDate, sel: RangeSelection) -> bool:
    start, end = sel.start, sel.end
    if start is None or end is None:
        return False
    return start < date < end


def range_edge(date: CalendarDate, sel: RangeSelection) -> Optional[str]:
    """Shape of a day cell within the selection: "single" | "start" | "end" | "middle" | None."""
    start = is_range_start(date, sel)
    end = is_range_end(date, sel)
    if start and end:
        return "single"
    if start:
        return "start"
    if end:
        return "end"
    if is_range_middle(date, sel):
        return "middle"
    return None


def days_in_month(year: int, month: int) -> List[CalendarDate]:
    last = calendar.monthrange(year, month)[1]
    return [CalendarDate(year, month, d) for d in range(1, last + 1)]


def month_grid(year: int, month: int) -> List[List[CalendarDate]]:
    """Sunday-first weeks, padded with the tail of the previous and head of the next month."""
    days = days_in_month(year, month)
    first = days[0].to_date()
    lead = (first.weekday() + 1) % 7  # Sunday = 0
    cells = [CalendarDate.from_date(first - dt.timedelta(days=i)) for i in range(lead, 0, -1)]
    cells.extend(days)
    last = days[-1]
    while len(cells) % 7:
        last = last.add_days(1)
        cells.append(last)
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]


def week_number(date: CalendarDate) -> int:
    """Sunday-based week of year, week 1 containing January 1st."""
    d = date.to_date()
    jan1 = dt.date(d.year, 1, 1)
    past = (d - jan1).days
    return (past + (jan1.weekday() + 1) % 7) // 7 + 1


def shift_month(state: EngineState, delta: int) -> Transition:
    base = state.view_month
    if base is None:
        return Transition(state)
    idx = base.year * 12 + (base.month - 1) + int(delta)
    return Transition(replace(state, view_month=CalendarDate(idx // 12, idx % 12 + 1, 1)))


def go_to_today(state: EngineState, today: CalendarDate) -> Transition:
    state = replace(state, view_month=today.first_of_month())
    if state.mode != MODE_SINGLE:
        return Transition(state)
    return handle_date_click(state, today)


__all__ = [
    "days_in_month",
    "go_to_today",
    "is_date_disabled",
    "is_date_highlighted",
    "is_in_range",
    "is_range_end",
    "is_range_middle",
    "is_range_start",
    "month_grid",
    "range_edge",
    "shift_month",
    "week_number",
]
