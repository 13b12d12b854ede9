# calpick/model.py
from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .util.timeparse import parse_date_yyyy_mm_dd, parse_hhmm

MODE_SINGLE = "single"
MODE_RANGE = "range"
MODE_MULTI_MONTH = "multi-month"

MODES = (MODE_SINGLE, MODE_RANGE, MODE_MULTI_MONTH)

# Multi-month sub-states that wait for manual clicks instead of resolving a preset.
PRESET_NONE = ""
PRESET_CUSTOM = "custom"
PRESET_SINGLEDATE = "singledate"

MANUAL_PRESETS = (PRESET_CUSTOM, PRESET_SINGLEDATE)


def normalize_mode(name: Optional[str]) -> str:
    """Canonical mode name; accepts "multi_month"/"multimonth" spellings."""
    s = str(name or "").strip().lower().replace("_", "-")
    if s == "multimonth":
        s = MODE_MULTI_MONTH
    if s not in MODES:
        raise ValueError(f"Unknown selection mode: {name!r} (want one of {', '.join(MODES)})")
    return s


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A day on the calendar, compared by (year, month, day) only."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        # Raises ValueError for impossible dates (Feb 30, month 13, ...).
        dt.date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, d: dt.date) -> "CalendarDate":
        return cls(d.year, d.month, d.day)

    @classmethod
    def parse(cls, s: str) -> "CalendarDate":
        return cls.from_date(parse_date_yyyy_mm_dd(s))

    def to_date(self) -> dt.date:
        return dt.date(self.year, self.month, self.day)

    def add_days(self, n: int) -> "CalendarDate":
        return CalendarDate.from_date(self.to_date() + dt.timedelta(days=int(n)))

    def first_of_month(self) -> "CalendarDate":
        return CalendarDate(self.year, self.month, 1)

    @property
    def month_key(self) -> Tuple[int, int]:
        return (self.year, self.month)

    def isoformat(self) -> str:
        return self.to_date().isoformat()

    def __str__(self) -> str:
        return self.isoformat()


@dataclass(frozen=True, order=True)
class TimeOfDay:
    hours: int
    minutes: int

    def __post_init__(self) -> None:
        if not (0 <= int(self.hours) <= 23 and 0 <= int(self.minutes) <= 59):
            raise ValueError(f"Invalid time of day: {self.hours:02d}:{self.minutes:02d}")

    @classmethod
    def parse(cls, s: str) -> "TimeOfDay":
        hh, mm = parse_hhmm(s)
        return cls(hh, mm)

    @classmethod
    def from_minutes(cls, total: int) -> "TimeOfDay":
        return cls(int(total) // 60, int(total) % 60)

    @property
    def total_minutes(self) -> int:
        return int(self.hours) * 60 + int(self.minutes)

    def isoformat(self) -> str:
        return f"{self.hours:02d}:{self.minutes:02d}"

    def __str__(self) -> str:
        return self.isoformat()


START_OF_DAY = TimeOfDay(0, 0)
END_OF_DAY = TimeOfDay(23, 59)

# What callers receive: a bare date, or a minute-precision datetime when time tracking is on.
EffectiveInstant = Union[CalendarDate, dt.datetime]


@dataclass(frozen=True)
class RangeSelection:
    start: Optional[CalendarDate] = None
    end: Optional[CalendarDate] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None

    @property
    def is_partial(self) -> bool:
        return self.start is not None and self.end is None

    @property
    def is_complete(self) -> bool:
        return self.start is not None and self.end is not None

    @property
    def is_same_day(self) -> bool:
        return self.is_complete and self.start == self.end


EMPTY_SELECTION = RangeSelection()


@dataclass(frozen=True)
class EngineState:
    """Everything a transition reads or writes. Replaced, never mutated."""

    mode: str = MODE_SINGLE
    preset: str = PRESET_NONE  # multi-month sub-state: "", a preset key, "custom" or "singledate"
    selection: RangeSelection = EMPTY_SELECTION
    value: Optional[CalendarDate] = None  # last single-date pick
    start_time: TimeOfDay = START_OF_DAY
    end_time: TimeOfDay = END_OF_DAY
    time_tracking: bool = False
    active_month: Optional[Tuple[int, int]] = None  # renderer highlight only
    view_month: Optional[CalendarDate] = None  # first day of the leftmost visible month

    @property
    def is_pair_mode(self) -> bool:
        """True when clicks accumulate a two-click range."""
        if self.mode == MODE_RANGE:
            return True
        return self.mode == MODE_MULTI_MONTH and self.preset == PRESET_CUSTOM

    @property
    def is_window_mode(self) -> bool:
        """True when a click yields a same-day (date@start, date@end) window."""
        if self.mode == MODE_MULTI_MONTH and self.preset == PRESET_SINGLEDATE:
            return True
        return self.time_tracking and not self.is_pair_mode

    @property
    def second_month(self) -> Optional[CalendarDate]:
        if self.view_month is None:
            return None
        y, m = self.view_month.year, self.view_month.month + 1
        if m > 12:
            y, m = y + 1, 1
        return CalendarDate(y, m, 1)


__all__ = [
    "CalendarDate",
    "EffectiveInstant",
    "EMPTY_SELECTION",
    "END_OF_DAY",
    "EngineState",
    "MANUAL_PRESETS",
    "MODES",
    "MODE_MULTI_MONTH",
    "MODE_RANGE",
    "MODE_SINGLE",
    "PRESET_CUSTOM",
    "PRESET_NONE",
    "PRESET_SINGLEDATE",
    "RangeSelection",
    "START_OF_DAY",
    "TimeOfDay",
    "normalize_mode",
]
