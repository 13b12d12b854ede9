# calpick/timecombine.py
"""Date + time-of-day combination and the same-day end-after-start rule.

The end time of a same-day window is pushed forward to start + 1 minute
whenever it would not be strictly later than the start. The push stops at
23:59: there is no next-day instant, so a 23:59 start leaves the end at 23:59.
Only the end is ever moved.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import replace
from typing import Optional

from .events import RangeCommit, Transition
from .model import END_OF_DAY, CalendarDate, EffectiveInstant, EngineState, TimeOfDay


def combine(date: CalendarDate, time: TimeOfDay) -> dt.datetime:
    return dt.datetime(date.year, date.month, date.day, int(time.hours), int(time.minutes), 0, 0)


def effective(date: CalendarDate, time: TimeOfDay, time_tracking: bool) -> EffectiveInstant:
    if not time_tracking:
        return date
    return combine(date, time)


def advance_end(start: TimeOfDay, end: TimeOfDay) -> TimeOfDay:
    if end.total_minutes > start.total_minutes:
        return end
    return TimeOfDay.from_minutes(min(start.total_minutes + 1, END_OF_DAY.total_minutes))


def is_same_day_window(state: EngineState) -> bool:
    if not state.time_tracking:
        return False
    if state.selection.is_complete:
        return state.selection.is_same_day
    return state.is_window_mode


def normalize_times(state: EngineState) -> EngineState:
    if not is_same_day_window(state):
        return state
    end = advance_end(state.start_time, state.end_time)
    if end == state.end_time:
        return state
    return replace(state, end_time=end)


def commit_pair(state: EngineState, start: CalendarDate, end: CalendarDate) -> RangeCommit:
    return RangeCommit(
        start=effective(start, state.start_time, state.time_tracking),
        end=effective(end, state.end_time, state.time_tracking),
    )


def range_commit(state: EngineState) -> Optional[RangeCommit]:
    start, end = state.selection.start, state.selection.end
    if start is None or end is None:
        return None
    return commit_pair(state, start, end)


def _after_time_edit(state: EngineState) -> Transition:
    state = normalize_times(state)
    if not state.time_tracking:
        return Transition(state)
    # Recombine the dates already stored; presets are not resolved again.
    commit = range_commit(state)
    return Transition(state, (commit,) if commit is not None else ())


def set_start_time(state: EngineState, hours: int, minutes: int) -> Transition:
    return _after_time_edit(replace(state, start_time=TimeOfDay(hours, minutes)))


def set_end_time(state: EngineState, hours: int, minutes: int) -> Transition:
    return _after_time_edit(replace(state, end_time=TimeOfDay(hours, minutes)))
