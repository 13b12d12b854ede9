"""Predefined ranges ("Last 7 days", "This month", ...).

A preset row carries a static descriptor; turning it into concrete dates is
the job of an injected RangeResolver. The engine only stores the active key
and the resolved dates, so it never needs to know what "last 7 days" means.
"""

from __future__ import annotations

import calendar
import datetime as dt
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Tuple, Union

from .model import MANUAL_PRESETS, CalendarDate
from .util.tz import resolve_tz, today_date

DatePair = Tuple[CalendarDate, CalendarDate]


class PresetValidationError(ValueError):
    """Raised when a preset table fails the integration-time contract."""


@dataclass(frozen=True)
class RelativeDays:
    """today + start_offset .. today + end_offset (offsets in days, inclusive)."""

    start_offset: int
    end_offset: int = 0


@dataclass(frozen=True)
class MonthPeriod:
    """The whole calendar month `offset` months from today's (0 = this month, -1 = previous)."""

    offset: int = 0


@dataclass(frozen=True)
class FixedRange:
    start: CalendarDate
    end: CalendarDate


RangeDescriptor = Union[RelativeDays, MonthPeriod, FixedRange]


def last_n_days(n: int) -> RelativeDays:
    """Last n days including today."""
    if int(n) < 1:
        raise ValueError(f"last_n_days needs n >= 1, got {n}")
    return RelativeDays(start_offset=-(int(n) - 1), end_offset=0)


@dataclass(frozen=True)
class PredefinedRange:
    key: str
    label: str = ""
    descriptor: Optional[RangeDescriptor] = None  # None only for the manual "custom"/"singledate" rows

    @property
    def is_manual(self) -> bool:
        return self.key in MANUAL_PRESETS


class RangeResolver(Protocol):
    def resolve(self, descriptor: RangeDescriptor) -> DatePair:
        """Return the concrete (start, end) dates for a descriptor."""


def _shift_month(year: int, month: int, offset: int) -> Tuple[int, int]:
    idx = year * 12 + (month - 1) + int(offset)
    return idx // 12, idx % 12 + 1


class ClockResolver:
    """Resolves descriptors against "today".

    `today` may be injected (tests, reproducible replays); otherwise the
    system clock is read in timezone `tz_name` on every call.
    """

    def __init__(self, today: Optional[Callable[[], CalendarDate]] = None, tz_name: Optional[str] = "local") -> None:
        self._today = today
        self._tz = resolve_tz(tz_name)

    def today(self) -> CalendarDate:
        if self._today is not None:
            return self._today()
        return CalendarDate.from_date(today_date(self._tz))

    def resolve(self, descriptor: RangeDescriptor) -> DatePair:
        if isinstance(descriptor, FixedRange):
            return descriptor.start, descriptor.end

        today = self.today()
        if isinstance(descriptor, RelativeDays):
            return today.add_days(descriptor.start_offset), today.add_days(descriptor.end_offset)

        if isinstance(descriptor, MonthPeriod):
            y, m = _shift_month(today.year, today.month, descriptor.offset)
            last_day = calendar.monthrange(y, m)[1]
            return CalendarDate(y, m, 1), CalendarDate(y, m, last_day)

        raise TypeError(f"Unsupported range descriptor: {type(descriptor).__name__}")


def fixed_today(d: Union[CalendarDate, dt.date]) -> ClockResolver:
    cd = d if isinstance(d, CalendarDate) else CalendarDate.from_date(d)
    return ClockResolver(today=lambda: cd)


class PresetTable:
    """Ordered key -> PredefinedRange lookup (first occurrence of a key wins)."""

    def __init__(self, presets: Iterable[PredefinedRange] = ()) -> None:
        self._rows: Dict[str, PredefinedRange] = {}
        for p in presets:
            self._rows.setdefault(p.key, p)

    def __contains__(self, key: object) -> bool:
        return key in self._rows

    def __iter__(self):
        return iter(self._rows.values())

    def __len__(self) -> int:
        return len(self._rows)

    def get(self, key: str) -> Optional[PredefinedRange]:
        return self._rows.get(key)

    def keys(self) -> List[str]:
        return list(self._rows.keys())

    def resolve(self, key: str, resolver: RangeResolver) -> Optional[DatePair]:
        """Concrete dates for a named key; None for unknown keys and manual rows."""
        row = self._rows.get(key)
        if row is None or row.descriptor is None:
            return None
        return resolver.resolve(row.descriptor)


def validate_presets(presets: Iterable[PredefinedRange], resolver: RangeResolver) -> List[str]:
    """Contract check for a preset table; returns human-readable errors (empty = ok)."""
    errs: List[str] = []
    seen: set[str] = set()

    for i, p in enumerate(presets):
        if not isinstance(p, PredefinedRange):
            errs.append(f"presets[{i}] must be PredefinedRange")
            continue
        if not isinstance(p.key, str) or not p.key.strip():
            errs.append(f"presets[{i}].key must be non-empty string")
            continue
        if p.key in seen:
            errs.append(f"presets[{i}]: duplicate key {p.key!r}")
            continue
        seen.add(p.key)

        if p.is_manual:
            continue
        if p.descriptor is None:
            errs.append(f"preset {p.key!r} has no descriptor")
            continue
        try:
            start, end = resolver.resolve(p.descriptor)
        except (TypeError, ValueError) as ex:
            errs.append(f"preset {p.key!r} does not resolve: {ex}")
            continue
        if end < start:
            errs.append(f"preset {p.key!r} resolves to inverted range {start}..{end}")

    return errs


def assert_valid_presets(presets: Iterable[PredefinedRange], resolver: RangeResolver) -> None:
    errs = validate_presets(list(presets), resolver)
    if errs:
        raise PresetValidationError(errs[0])


# Mirrors the preset panel shipped with the multi-month calendar.
def default_presets() -> Tuple[PredefinedRange, ...]:
    return (
        PredefinedRange("singledate", "Single Date"),
        PredefinedRange("last7days", "Last 7 days", last_n_days(7)),
        PredefinedRange("last15days", "Last 15 days", last_n_days(15)),
        PredefinedRange("last30days", "Last 30 days", last_n_days(30)),
        PredefinedRange("custom", "Custom Dates"),
    )


__all__ = [
    "ClockResolver",
    "DatePair",
    "FixedRange",
    "MonthPeriod",
    "PredefinedRange",
    "PresetTable",
    "PresetValidationError",
    "RangeDescriptor",
    "RangeResolver",
    "RelativeDays",
    "assert_valid_presets",
    "default_presets",
    "fixed_today",
    "last_n_days",
    "validate_presets",
]
