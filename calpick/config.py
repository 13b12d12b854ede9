"""Engine configuration.

`EngineConfig` is what the renderer hands the engine on mount. It can be
built directly or from a JSON object with `config_from_dict`:

    {
      "mode": "multi-month",
      "time_tracking": true,
      "start_time": "09:00", "end_time": "17:30",
      "min_date": "2024-01-01", "max_date": "2024-12-31",
      "disabled_dates": ["2024-03-25"],
      "initial_range": {"start": "2024-03-23", "end": "2024-03-26"},
      "predefined_ranges": [
        {"key": "last7days", "label": "Last 7 days", "range": {"kind": "last_days", "days": 7}},
        {"key": "custom", "label": "Custom Dates"}
      ]
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .model import (
    END_OF_DAY,
    MODE_SINGLE,
    PRESET_NONE,
    START_OF_DAY,
    CalendarDate,
    RangeSelection,
    TimeOfDay,
    normalize_mode,
)
from .presets import FixedRange, MonthPeriod, PredefinedRange, RangeDescriptor, RelativeDays, last_n_days


class ConfigError(ValueError):
    """Raised when an engine configuration object is malformed."""


@dataclass(frozen=True)
class EngineConfig:
    mode: str = MODE_SINGLE
    time_tracking: bool = False
    start_time: TimeOfDay = START_OF_DAY
    end_time: TimeOfDay = END_OF_DAY
    min_date: Optional[CalendarDate] = None
    max_date: Optional[CalendarDate] = None
    disabled_dates: Tuple[CalendarDate, ...] = ()
    highlighted_dates: Tuple[CalendarDate, ...] = ()
    initial_value: Optional[CalendarDate] = None
    initial_range: RangeSelection = RangeSelection()
    predefined_ranges: Tuple[PredefinedRange, ...] = ()
    preset: str = PRESET_NONE


def _date(v: Any, where: str) -> CalendarDate:
    if not isinstance(v, str):
        raise ConfigError(f"{where} must be a YYYY-MM-DD string")
    try:
        return CalendarDate.parse(v)
    except ValueError as ex:
        raise ConfigError(f"{where}: {ex}") from ex


def _opt_date(v: Any, where: str) -> Optional[CalendarDate]:
    if v is None:
        return None
    return _date(v, where)


def _time(v: Any, where: str, default: TimeOfDay) -> TimeOfDay:
    if v is None:
        return default
    if not isinstance(v, str):
        raise ConfigError(f"{where} must be an HH:MM string")
    try:
        return TimeOfDay.parse(v)
    except ValueError as ex:
        raise ConfigError(f"{where}: {ex}") from ex


def _int(v: Any, where: str) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ConfigError(f"{where} must be an int")
    return v


def _date_list(v: Any, where: str) -> Tuple[CalendarDate, ...]:
    if v is None:
        return ()
    if not isinstance(v, list):
        raise ConfigError(f"{where} must be a list")
    return tuple(_date(x, f"{where}[{i}]") for i, x in enumerate(v))


def descriptor_from_dict(obj: Any, where: str = "range") -> RangeDescriptor:
    if not isinstance(obj, dict):
        raise ConfigError(f"{where} must be an object")
    kind = obj.get("kind")
    if kind == "relative":
        return RelativeDays(
            start_offset=_int(obj.get("start_offset"), f"{where}.start_offset"),
            end_offset=_int(obj.get("end_offset", 0), f"{where}.end_offset"),
        )
    if kind == "last_days":
        days = _int(obj.get("days"), f"{where}.days")
        try:
            return last_n_days(days)
        except ValueError as ex:
            raise ConfigError(f"{where}: {ex}") from ex
    if kind == "month":
        return MonthPeriod(offset=_int(obj.get("offset", 0), f"{where}.offset"))
    if kind == "fixed":
        return FixedRange(start=_date(obj.get("start"), f"{where}.start"), end=_date(obj.get("end"), f"{where}.end"))
    raise ConfigError(f"{where}.kind must be one of relative, last_days, month, fixed (got {kind!r})")


def preset_from_dict(obj: Any, where: str = "preset") -> PredefinedRange:
    if not isinstance(obj, dict):
        raise ConfigError(f"{where} must be an object")
    key = obj.get("key")
    if not isinstance(key, str) or not key.strip():
        raise ConfigError(f"{where}.key must be non-empty string")
    label = obj.get("label") or key
    if not isinstance(label, str):
        raise ConfigError(f"{where}.label must be a string")
    raw = obj.get("range")
    descriptor = descriptor_from_dict(raw, f"{where}.range") if raw is not None else None
    return PredefinedRange(key=key, label=label, descriptor=descriptor)


def config_from_dict(obj: Any) -> EngineConfig:
    if not isinstance(obj, dict):
        raise ConfigError("config must be a JSON object")

    try:
        mode = normalize_mode(obj.get("mode", MODE_SINGLE))
    except ValueError as ex:
        raise ConfigError(str(ex)) from ex

    tracking = obj.get("time_tracking", False)
    if not isinstance(tracking, bool):
        raise ConfigError("time_tracking must be a bool")

    rng = obj.get("initial_range")
    initial_range = RangeSelection()
    if rng is not None:
        if not isinstance(rng, dict):
            raise ConfigError("initial_range must be an object")
        initial_range = RangeSelection(
            start=_opt_date(rng.get("start"), "initial_range.start"),
            end=_opt_date(rng.get("end"), "initial_range.end"),
        )
        if initial_range.start is None and initial_range.end is not None:
            raise ConfigError("initial_range.end requires initial_range.start")

    raw_presets = obj.get("predefined_ranges") or []
    if not isinstance(raw_presets, list):
        raise ConfigError("predefined_ranges must be a list")
    presets: List[PredefinedRange] = [
        preset_from_dict(p, f"predefined_ranges[{i}]") for i, p in enumerate(raw_presets)
    ]

    preset = obj.get("preset", PRESET_NONE)
    if not isinstance(preset, str):
        raise ConfigError("preset must be a string")

    return EngineConfig(
        mode=mode,
        time_tracking=tracking,
        start_time=_time(obj.get("start_time"), "start_time", START_OF_DAY),
        end_time=_time(obj.get("end_time"), "end_time", END_OF_DAY),
        min_date=_opt_date(obj.get("min_date"), "min_date"),
        max_date=_opt_date(obj.get("max_date"), "max_date"),
        disabled_dates=_date_list(obj.get("disabled_dates"), "disabled_dates"),
        highlighted_dates=_date_list(obj.get("highlighted_dates"), "highlighted_dates"),
        initial_value=_opt_date(obj.get("initial_value"), "initial_value"),
        initial_range=initial_range,
        predefined_ranges=tuple(presets),
        preset=preset,
    )

