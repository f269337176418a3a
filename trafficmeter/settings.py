"""General options and the value rules applied by the settings dialogs."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field

__all__ = [
    "Language",
    "TrafficTipUnit",
    "GeneralSettings",
    "MONITOR_SPAN_STEP",
    "DEFAULT_MONITOR_SPAN",
    "spin_monitor_span",
    "normalize_monitor_span",
    "clamp_traffic_tip_value",
    "clamp_memory_tip_value",
    "style_to_combo_index",
    "combo_index_to_style",
    "valid_icon_index",
    "uses_light_preview",
]

MONITOR_SPAN_STEP = 100
DEFAULT_MONITOR_SPAN = 1000

TRAFFIC_TIP_MIN = 1
TRAFFIC_TIP_MAX = 32767
MEMORY_TIP_MIN = 1
MEMORY_TIP_MAX = 100

_LIGHT_PREVIEW_ICONS = (4, 5)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class Language(enum.IntEnum):
    """Interface language, in the order the language list shows them."""

    FOLLOWING_SYSTEM = 0
    ENGLISH = 1
    SIMPLIFIED_CHINESE = 2
    TRADITIONAL_CHINESE = 3


class TrafficTipUnit(enum.IntEnum):
    MB = 0
    GB = 1


@dataclass
class GeneralSettings:
    """General options; remembers the monitor interval it started with."""

    check_update_when_start: bool = True
    allow_skin_cover_font: bool = True
    allow_skin_cover_text: bool = True
    auto_run: bool = False
    portable_mode: bool = False
    traffic_tip_enable: bool = False
    traffic_tip_value: int = 200
    traffic_tip_unit: TrafficTipUnit = TrafficTipUnit.MB
    memory_usage_tip_enable: bool = False
    memory_tip_value: int = 80
    language: Language = Language.FOLLOWING_SYSTEM
    show_all_interface: bool = False
    get_cpu_usage_by_cpu_times: bool = True
    monitor_time_span: int = DEFAULT_MONITOR_SPAN
    _monitor_time_span_original: int = field(default=0, init=False, repr=False, compare=False)

    def __post_init__(self):
        self._monitor_time_span_original = self.monitor_time_span
        self.traffic_tip_value = clamp_traffic_tip_value(self.traffic_tip_value)
        self.memory_tip_value = clamp_memory_tip_value(self.memory_tip_value)

    def is_monitor_time_span_modified(self):
        return self.monitor_time_span != self._monitor_time_span_original


def _trunc_div(value, step):
    """Integer division rounding toward zero."""
    quotient = abs(value) // step
    return quotient if value >= 0 else -quotient


def _round_to_step(value):
    return _trunc_div(value, MONITOR_SPAN_STEP) * MONITOR_SPAN_STEP


def spin_monitor_span(value, delta):
    """Step the monitor interval up (delta 1) or down (delta -1) to a multiple of 100."""
    if delta == -1:
        return _round_to_step(value - MONITOR_SPAN_STEP)
    if delta == 1:
        return _round_to_step(value + MONITOR_SPAN_STEP)
    return value


def _leading_int(text):
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def normalize_monitor_span(text, minimum, maximum):
    """Parse typed interval text into a multiple of 100.

    Commas are ignored; a value outside [minimum, maximum] becomes 1000.
    """
    value = _leading_int(text.replace(",", ""))
    if value < minimum or value > maximum:
        return DEFAULT_MONITOR_SPAN
    return _round_to_step(value)


def clamp_traffic_tip_value(value):
    return max(TRAFFIC_TIP_MIN, min(TRAFFIC_TIP_MAX, value))


def clamp_memory_tip_value(value):
    return max(MEMORY_TIP_MIN, min(MEMORY_TIP_MAX, value))


def style_to_combo_index(style_sel, style_num, light_index):
    """Position in the style list: 0 is light mode, presets follow from 1."""
    if style_sel == light_index:
        return 0
    if 0 <= style_sel < style_num:
        return style_sel + 1
    return 1


def combo_index_to_style(sel, style_num, light_index):
    """Style chosen at a position of the style list."""
    if sel == 0:
        return light_index
    if 1 <= sel < style_num + 1:
        return sel - 1
    return 1


def valid_icon_index(index, max_icon):
    """The icon index, or 0 when it is outside [0, max_icon)."""
    if index < 0 or index >= max_icon:
        return 0
    return index


def uses_light_preview(index):
    """Whether the icon is previewed on a light background."""
    return index in _LIGHT_PREVIEW_ICONS