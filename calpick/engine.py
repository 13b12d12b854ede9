# calpick/engine.py
"""Selection engine: a pure transition function plus a thin stateful wrapper.

`reduce(state, event, presets, resolver)` returns the next state and the
commits the caller should hear about. `CalendarEngine` keeps the current
state and turns commits into the on_change / on_range_change / on_clear /
on_select callbacks.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from .config import EngineConfig
from .events import (
    Clear,
    ClearCommit,
    Commit,
    Confirm,
    ConfirmCommit,
    DateClick,
    DateCommit,
    Event,
    GoToToday,
    RangeCommit,
    SelectPreset,
    SetEndTime,
    SetMode,
    SetStartTime,
    ShiftMonth,
    Transition,
)
from .model import (
    MANUAL_PRESETS,
    MODE_MULTI_MONTH,
    MODE_SINGLE,
    PRESET_NONE,
    CalendarDate,
    EffectiveInstant,
    EngineState,
    RangeSelection,
    TimeOfDay,
    normalize_mode,
)
from .modes import select_predefined_range, set_mode
from .presets import ClockResolver, PresetTable, RangeResolver
from .range_state import clear_selection, handle_date_click
from .timecombine import effective, normalize_times, set_end_time, set_start_time
from .view import go_to_today, is_date_disabled, shift_month

log = logging.getLogger(__name__)

OnChange = Callable[[CalendarDate], None]
OnRangeChange = Callable[[EffectiveInstant, EffectiveInstant], None]
OnAction = Callable[[], None]


def reduce(state: EngineState, event: Event, presets: PresetTable, resolver: RangeResolver) -> Transition:
    if isinstance(event, DateClick):
        return handle_date_click(state, event.date, event.month)
    if isinstance(event, SelectPreset):
        return select_predefined_range(state, event.key, presets, resolver)
    if isinstance(event, SetStartTime):
        return set_start_time(state, event.hours, event.minutes)
    if isinstance(event, SetEndTime):
        return set_end_time(state, event.hours, event.minutes)
    if isinstance(event, SetMode):
        return Transition(set_mode(state, event.mode))
    if isinstance(event, Clear):
        return clear_selection(state)
    if isinstance(event, Confirm):
        return Transition(state, (ConfirmCommit(),))
    if isinstance(event, ShiftMonth):
        return shift_month(state, event.delta)
    if isinstance(event, GoToToday):
        return go_to_today(state, event.today)
    raise TypeError(f"Unsupported event: {type(event).__name__}")


def initial_state(cfg: EngineConfig, today: CalendarDate) -> EngineState:
    """State on mount, seeded from the config (manual presets only; see CalendarEngine)."""
    mode = normalize_mode(cfg.mode)

    selection = RangeSelection()
    value: Optional[CalendarDate] = None
    if mode == MODE_SINGLE:
        value = cfg.initial_value
        if value is not None and cfg.time_tracking:
            selection = RangeSelection(start=value, end=value)
    else:
        sel = cfg.initial_range
        if sel.start is None and sel.end is not None:
            # An end without a start is the first click of a range.
            sel = RangeSelection(start=sel.end, end=None)
        elif sel.start is not None and sel.end is not None and sel.end < sel.start:
            sel = RangeSelection(start=sel.end, end=sel.start)
        selection = sel

    preset = PRESET_NONE
    if mode == MODE_MULTI_MONTH and cfg.preset in MANUAL_PRESETS:
        preset = cfg.preset

    anchor = value or selection.start or today
    state = EngineState(
        mode=mode,
        preset=preset,
        selection=selection,
        value=value,
        start_time=cfg.start_time,
        end_time=cfg.end_time,
        time_tracking=bool(cfg.time_tracking),
        active_month=None,
        view_month=anchor.first_of_month(),
    )
    return normalize_times(state)


class CalendarEngine:
    """Stateful selection engine for one mounted calendar.

    Single-writer: every public call runs to completion and replaces the state
    before returning. Callbacks fire only for committed selections.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        *,
        resolver: Optional[RangeResolver] = None,
        clock: Optional[Callable[[], CalendarDate]] = None,
        on_change: Optional[OnChange] = None,
        on_range_change: Optional[OnRangeChange] = None,
        on_clear: Optional[OnAction] = None,
        on_select: Optional[OnAction] = None,
    ) -> None:
        self.config = config or EngineConfig()
        clock_resolver = ClockResolver(today=clock)
        self._clock = clock_resolver.today
        self.resolver: RangeResolver = resolver or clock_resolver
        self.presets = PresetTable(self.config.predefined_ranges)
        self.on_change = on_change
        self.on_range_change = on_range_change
        self.on_clear = on_clear
        self.on_select = on_select

        self._state = initial_state(self.config, self._clock())
        if self._state.mode == MODE_MULTI_MONTH and self.config.preset and self.config.preset not in MANUAL_PRESETS:
            # A named preset on mount seeds the selection; mounting is not a commit.
            self._state = select_predefined_range(self._state, self.config.preset, self.presets, self.resolver).state

    # --- state ----------------------------------------------------------------
    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def mode(self) -> str:
        return self._state.mode

    @property
    def preset(self) -> str:
        return self._state.preset

    @property
    def selection(self) -> RangeSelection:
        return self._state.selection

    @property
    def value(self) -> Optional[CalendarDate]:
        return self._state.value

    @property
    def start_time(self) -> TimeOfDay:
        return self._state.start_time

    @property
    def end_time(self) -> TimeOfDay:
        return self._state.end_time

    @property
    def view_month(self) -> Optional[CalendarDate]:
        return self._state.view_month

    @property
    def second_month(self) -> Optional[CalendarDate]:
        return self._state.second_month

    @property
    def effective_start(self) -> Optional[EffectiveInstant]:
        s = self._state
        if s.selection.start is None:
            return None
        return effective(s.selection.start, s.start_time, s.time_tracking)

    @property
    def effective_end(self) -> Optional[EffectiveInstant]:
        s = self._state
        if s.selection.end is None:
            return None
        return effective(s.selection.end, s.end_time, s.time_tracking)

    # --- dispatch -------------------------------------------------------------
    def dispatch(self, event: Event) -> Tuple[Commit, ...]:
        tr = reduce(self._state, event, self.presets, self.resolver)
        self._state = tr.state
        for c in tr.commits:
            self._emit(c)
        return tr.commits

    def _emit(self, c: Commit) -> None:
        log.debug("commit %r", c)
        if isinstance(c, DateCommit):
            if self.on_change is not None:
                self.on_change(c.value)
        elif isinstance(c, RangeCommit):
            if self.on_range_change is not None:
                self.on_range_change(c.start, c.end)
        elif isinstance(c, ClearCommit):
            if self.on_clear is not None:
                self.on_clear()
        elif isinstance(c, ConfirmCommit):
            if self.on_select is not None:
                self.on_select()

    # --- operations -----------------------------------------------------------
    def set_mode(self, mode: str) -> Tuple[Commit, ...]:
        return self.dispatch(SetMode(mode))

    def select_predefined_range(self, key: str) -> Tuple[Commit, ...]:
        return self.dispatch(SelectPreset(key))

    def handle_date_click(self, date: CalendarDate, month: Optional[CalendarDate] = None) -> Tuple[Commit, ...]:
        return self.dispatch(DateClick(date, month))

    def set_start_time(self, hours: int, minutes: int) -> Tuple[Commit, ...]:
        return self.dispatch(SetStartTime(hours, minutes))

    def set_end_time(self, hours: int, minutes: int) -> Tuple[Commit, ...]:
        return self.dispatch(SetEndTime(hours, minutes))

    def clear(self) -> Tuple[Commit, ...]:
        return self.dispatch(Clear())

    def select(self) -> Tuple[Commit, ...]:
        return self.dispatch(Confirm())

    def previous_month(self) -> Tuple[Commit, ...]:
        return self.dispatch(ShiftMonth(-1))

    def next_month(self) -> Tuple[Commit, ...]:
        return self.dispatch(ShiftMonth(1))

    def go_to_today(self) -> Tuple[Commit, ...]:
        return self.dispatch(GoToToday(self._clock()))

    # --- renderer gate ----------------------------------------------------------
    def is_date_disabled(self, date: CalendarDate) -> bool:
        cfg = self.config
        return is_date_disabled(date, cfg.min_date, cfg.max_date, cfg.disabled_dates)

