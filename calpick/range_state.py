# calpick/range_state.py
from __future__ import annotations

from dataclasses import replace
from typing import Optional

from .events import ClearCommit, DateCommit, Transition
from .model import MANUAL_PRESETS, PRESET_NONE, CalendarDate, EngineState, RangeSelection
from .timecombine import commit_pair, normalize_times


def _active_month(date: CalendarDate, month: Optional[CalendarDate]):
    return month.month_key if month is not None else date.month_key


def _click_pair(state: EngineState, date: CalendarDate) -> Transition:
    sel = state.selection
    if sel.start is None or sel.is_complete:
        return Transition(replace(state, selection=RangeSelection(start=date, end=None)))

    start = sel.start
    if date < start:
        start, date = date, start
    state = normalize_times(replace(state, selection=RangeSelection(start=start, end=date)))
    return Transition(state, (commit_pair(state, start, date),))


def _click_window(state: EngineState, date: CalendarDate) -> Transition:
    state = normalize_times(replace(state, value=date, selection=RangeSelection(start=date, end=date)))
    return Transition(state, (commit_pair(state, date, date),))


def handle_date_click(state: EngineState, date: CalendarDate, month: Optional[CalendarDate] = None) -> Transition:
    """
    Central click transition.

      - pair modes (range, multi-month/custom): first click starts a partial
        range, second click completes it (swapping if it lands earlier) and commits.
      - window modes (time tracking outside pair modes, multi-month/singledate):
        commit a same-day (date@start_time, date@end_time) pair.
      - otherwise: plain single-date commit.

    Disabled/out-of-bounds dates are the renderer's concern; they are not re-checked here.
    """
    state = replace(state, active_month=_active_month(date, month))

    if state.is_pair_mode:
        return _click_pair(state, date)
    if state.is_window_mode:
        return _click_window(state, date)
    return Transition(replace(state, value=date), (DateCommit(date),))


def clear_selection(state: EngineState) -> Transition:
    """Drop the selection; manual sub-states survive, a named preset does not."""
    preset = state.preset if state.preset in MANUAL_PRESETS else PRESET_NONE
    state = replace(state, selection=RangeSelection(), value=None, preset=preset, active_month=None)
    return Transition(state, (ClearCommit(),))
