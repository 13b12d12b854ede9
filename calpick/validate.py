"""Replay script validation helpers (library-facing)."""

from __future__ import annotations

from typing import Any, Dict, List

from .model import MODES
from .util.timeparse import parse_date_yyyy_mm_dd, parse_hhmm


class ScriptValidationError(ValueError):
    """Raised when a replay script fails validation."""


# Event "type" values accepted in a replay script.
EVENT_TYPES = (
    "click",
    "clear",
    "go_to_today",
    "select",
    "select_preset",
    "set_end_time",
    "set_mode",
    "set_start_time",
    "shift_month",
)


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _is_date(v: Any) -> bool:
    if not isinstance(v, str):
        return False
    try:
        parse_date_yyyy_mm_dd(v)
    except ValueError:
        return False
    return True


def _is_hhmm(v: Any) -> bool:
    if not isinstance(v, str):
        return False
    try:
        parse_hhmm(v)
    except ValueError:
        return False
    return True


def _validate_event(ev: Any, label: str) -> List[str]:
    errs: List[str] = []
    if not isinstance(ev, dict):
        return [f"{label} must be an object"]

    kind = ev.get("type")
    if kind not in EVENT_TYPES:
        return [f"{label}.type must be one of {', '.join(EVENT_TYPES)} (got {kind!r})"]

    if kind == "click":
        _require(_is_date(ev.get("date")), f"{label}.date must be YYYY-MM-DD", errs)
        if ev.get("month") is not None:
            _require(_is_date(ev.get("month")), f"{label}.month must be YYYY-MM-DD", errs)
    elif kind == "set_mode":
        mode = str(ev.get("mode") or "").strip().lower().replace("_", "-")
        _require(mode in MODES or mode == "multimonth", f"{label}.mode must be one of {', '.join(MODES)}", errs)
    elif kind == "select_preset":
        key = ev.get("key")
        _require(isinstance(key, str) and bool(key.strip()), f"{label}.key must be non-empty string", errs)
    elif kind in ("set_start_time", "set_end_time"):
        _require(_is_hhmm(ev.get("time")), f"{label}.time must be HH:MM", errs)
    elif kind == "shift_month":
        delta = ev.get("delta")
        _require(isinstance(delta, int) and not isinstance(delta, bool), f"{label}.delta must be int", errs)

    return errs


def validate_script(script: Dict[str, Any], *, label: str = "script") -> List[str]:
    if not isinstance(script, dict):
        return [f"{label}: script must be a dict/object"]

    errs: List[str] = []
    cfg = script.get("config", {})
    events = script.get("events")

    _require(isinstance(cfg, dict), f"{label}: config must be dict", errs)
    _require(isinstance(events, list), f"{label}: events must be list", errs)

    if isinstance(events, list):
        for i, ev in enumerate(events):
            errs.extend(_validate_event(ev, f"{label}: events[{i}]"))

    return errs


def assert_valid_script(script: Dict[str, Any]) -> None:
    if not isinstance(script, dict):
        raise ScriptValidationError("script must be a JSON object")
    errs = validate_script(script, label="script")
    if errs:
        raise ScriptValidationError(errs[0])


__all__ = [
    "EVENT_TYPES",
    "ScriptValidationError",
    "assert_valid_script",
    "validate_script",
]
