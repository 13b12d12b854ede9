"""Load replay scripts and serialize commits/state to JSON."""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Any, Dict, List, Tuple

import orjson

from .config import EngineConfig, config_from_dict
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
)
from .model import CalendarDate, EffectiveInstant, EngineState
from .util.timeparse import parse_hhmm
from .validate import assert_valid_script


def event_from_dict(obj: Dict[str, Any], *, today: CalendarDate) -> Event:
    """Build an Event from a validated script entry; `today` feeds go_to_today."""
    kind = obj["type"]
    if kind == "click":
        month = obj.get("month")
        return DateClick(CalendarDate.parse(obj["date"]), CalendarDate.parse(month) if month else None)
    if kind == "set_mode":
        return SetMode(obj["mode"])
    if kind == "select_preset":
        return SelectPreset(obj["key"])
    if kind == "set_start_time":
        return SetStartTime(*parse_hhmm(obj["time"]))
    if kind == "set_end_time":
        return SetEndTime(*parse_hhmm(obj["time"]))
    if kind == "clear":
        return Clear()
    if kind == "select":
        return Confirm()
    if kind == "shift_month":
        return ShiftMonth(int(obj["delta"]))
    if kind == "go_to_today":
        return GoToToday(today)
    raise ValueError(f"Unknown event type: {kind!r}")


def parse_script(obj: Any, *, today: CalendarDate) -> Tuple[EngineConfig, List[Event]]:
    assert_valid_script(obj)
    cfg = config_from_dict(obj.get("config") or {})
    events = [event_from_dict(ev, today=today) for ev in obj["events"]]
    return cfg, events


def load_script(path: Path, *, today: CalendarDate) -> Tuple[EngineConfig, List[Event]]:
    obj = orjson.loads(path.read_bytes())
    return parse_script(obj, today=today)


def instant_to_str(v: EffectiveInstant) -> str:
    if isinstance(v, dt.datetime):
        return v.strftime("%Y-%m-%dT%H:%M")
    return v.isoformat()


def commit_to_dict(c: Commit) -> Dict[str, Any]:
    if isinstance(c, DateCommit):
        return {"kind": "change", "date": c.value.isoformat()}
    if isinstance(c, RangeCommit):
        return {"kind": "range", "start": instant_to_str(c.start), "end": instant_to_str(c.end)}
    if isinstance(c, ClearCommit):
        return {"kind": "clear"}
    if isinstance(c, ConfirmCommit):
        return {"kind": "select"}
    raise TypeError(f"Unsupported commit: {type(c).__name__}")


def state_to_dict(s: EngineState) -> Dict[str, Any]:
    sel = s.selection
    return {
        "mode": s.mode,
        "preset": s.preset,
        "start": sel.start.isoformat() if sel.start else None,
        "end": sel.end.isoformat() if sel.end else None,
        "value": s.value.isoformat() if s.value else None,
        "start_time": s.start_time.isoformat(),
        "end_time": s.end_time.isoformat(),
        "time_tracking": s.time_tracking,
        "active_month": "%04d-%02d" % s.active_month if s.active_month else None,
        "view_month": s.view_month.isoformat() if s.view_month else None,
    }


def dumps(obj: Any) -> bytes:
    return orjson.dumps(obj, option=orjson.OPT_INDENT_2)
