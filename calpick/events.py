"""Inbound events and outbound commits of the selection engine.

Events are what the renderer asks for; commits are what the caller is told.
Both are plain frozen records so transitions stay pure and comparable in tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .model import CalendarDate, EffectiveInstant, EngineState


@dataclass(frozen=True)
class SetMode:
    mode: str


@dataclass(frozen=True)
class SelectPreset:
    key: str


@dataclass(frozen=True)
class DateClick:
    date: CalendarDate
    month: Optional[CalendarDate] = None  # grid month the click came from, if not the date's own


@dataclass(frozen=True)
class SetStartTime:
    hours: int
    minutes: int


@dataclass(frozen=True)
class SetEndTime:
    hours: int
    minutes: int


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class ShiftMonth:
    delta: int


@dataclass(frozen=True)
class GoToToday:
    today: CalendarDate


Event = Union[SetMode, SelectPreset, DateClick, SetStartTime, SetEndTime, Clear, Confirm, ShiftMonth, GoToToday]


@dataclass(frozen=True)
class DateCommit:
    """on_change(date)"""

    value: CalendarDate


@dataclass(frozen=True)
class RangeCommit:
    """on_range_change(start, end)"""

    start: EffectiveInstant
    end: EffectiveInstant


@dataclass(frozen=True)
class ClearCommit:
    pass


@dataclass(frozen=True)
class ConfirmCommit:
    pass


Commit = Union[DateCommit, RangeCommit, ClearCommit, ConfirmCommit]


@dataclass(frozen=True)
class Transition:
    state: EngineState
    commits: Tuple[Commit, ...] = ()


__all__ = [
    "Clear",
    "ClearCommit",
    "Commit",
    "Confirm",
    "ConfirmCommit",
    "DateClick",
    "DateCommit",
    "Event",
    "GoToToday",
    "RangeCommit",
    "SelectPreset",
    "SetEndTime",
    "SetMode",
    "SetStartTime",
    "ShiftMonth",
    "Transition",
]
