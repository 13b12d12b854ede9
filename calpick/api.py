"""calpick.api

Stable *library* entrypoint for calpick.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from calpick.config import ConfigError, EngineConfig, config_from_dict
from calpick.engine import CalendarEngine, initial_state, reduce
from calpick.events import (
    Clear,
    Confirm,
    DateClick,
    DateCommit,
    GoToToday,
    RangeCommit,
    SelectPreset,
    SetEndTime,
    SetMode,
    SetStartTime,
    ShiftMonth,
)
from calpick.model import (
    MODE_MULTI_MONTH,
    MODE_RANGE,
    MODE_SINGLE,
    PRESET_CUSTOM,
    PRESET_SINGLEDATE,
    CalendarDate,
    EngineState,
    RangeSelection,
    TimeOfDay,
)
from calpick.presets import (
    ClockResolver,
    FixedRange,
    MonthPeriod,
    PredefinedRange,
    PresetValidationError,
    RangeResolver,
    RelativeDays,
    assert_valid_presets,
    default_presets,
    last_n_days,
    validate_presets,
)
from calpick.timecombine import combine
from calpick.validate import ScriptValidationError, assert_valid_script, validate_script
from calpick.view import (
    days_in_month,
    is_date_disabled,
    is_date_highlighted,
    is_in_range,
    month_grid,
    range_edge,
    week_number,
)


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
_PUBLIC_EXPORTS = (
    "CalendarDate",
    "CalendarEngine",
    "Clear",
    "ClockResolver",
    "ConfigError",
    "Confirm",
    "DateClick",
    "DateCommit",
    "EngineConfig",
    "EngineState",
    "FixedRange",
    "GoToToday",
    "MODE_MULTI_MONTH",
    "MODE_RANGE",
    "MODE_SINGLE",
    "MonthPeriod",
    "PRESET_CUSTOM",
    "PRESET_SINGLEDATE",
    "PredefinedRange",
    "PresetValidationError",
    "RangeCommit",
    "RangeResolver",
    "RangeSelection",
    "RelativeDays",
    "ScriptValidationError",
    "SelectPreset",
    "SetEndTime",
    "SetMode",
    "SetStartTime",
    "ShiftMonth",
    "TimeOfDay",
    "assert_valid_presets",
    "assert_valid_script",
    "combine",
    "config_from_dict",
    "days_in_month",
    "default_presets",
    "initial_state",
    "is_date_disabled",
    "is_date_highlighted",
    "is_in_range",
    "last_n_days",
    "month_grid",
    "range_edge",
    "reduce",
    "validate_presets",
    "validate_script",
    "week_number",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
