# calpick/modes.py
from __future__ import annotations

import logging
from dataclasses import replace

from .events import Transition
from .model import (
    EMPTY_SELECTION,
    END_OF_DAY,
    MANUAL_PRESETS,
    MODE_MULTI_MONTH,
    MODE_RANGE,
    MODE_SINGLE,
    PRESET_CUSTOM,
    PRESET_NONE,
    START_OF_DAY,
    EngineState,
    RangeSelection,
    normalize_mode,
)
from .presets import PresetTable, RangeResolver
from .timecombine import commit_pair, normalize_times

log = logging.getLogger(__name__)


def set_mode(state: EngineState, mode: str) -> EngineState:
    """Switch selection mode.

    Single <-> pair modes do not share a meaningful selection, so crossing that
    boundary clears it. Range <-> multi-month keeps the pair; a pair carried
    into multi-month is a manual ("custom") one.
    """
    new_mode = normalize_mode(mode)
    old_mode = state.mode
    if new_mode == old_mode:
        return state

    crosses_single = MODE_SINGLE in (old_mode, new_mode)
    if crosses_single:
        state = replace(state, selection=EMPTY_SELECTION, value=None, active_month=None)

    preset = PRESET_NONE
    if new_mode == MODE_MULTI_MONTH and old_mode == MODE_RANGE:
        preset = PRESET_CUSTOM

    return normalize_times(replace(state, mode=new_mode, preset=preset))


def select_predefined_range(
    state: EngineState,
    key: str,
    presets: PresetTable,
    resolver: RangeResolver,
) -> Transition:
    if state.mode != MODE_MULTI_MONTH:
        log.debug("preset %r ignored outside multi-month mode (mode=%s)", key, state.mode)
        return Transition(state)

    if key in MANUAL_PRESETS:
        state = replace(
            state,
            preset=key,
            selection=EMPTY_SELECTION,
            value=None,
            start_time=START_OF_DAY,
            end_time=END_OF_DAY,
            active_month=None,
        )
        return Transition(state)

    pair = presets.resolve(key, resolver)
    if pair is None:
        log.debug("unknown preset key %r; state unchanged", key)
        return Transition(state)

    start, end = pair
    state = replace(
        state,
        preset=key,
        selection=RangeSelection(start=start, end=end),
        value=None,
        active_month=start.month_key,
    )
    state = normalize_times(state)
    return Transition(state, (commit_pair(state, start, end),))
