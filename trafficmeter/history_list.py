"""Rows of the history traffic list, by day, month, quarter or year."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .calendar_helper import weekday
from .common import kbytes_to_string

__all__ = [
    "ViewType",
    "ListRow",
    "ENGLISH_WEEKDAYS",
    "traffic_color",
    "bar_range",
    "day_label",
    "build_rows",
    "column_widths",
]

ENGLISH_WEEKDAYS = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday",
)

_GB = 1024 * 1024
_COLUMN_COUNT = 5


class ViewType(enum.IntEnum):
    DAY = 0
    MONTH = 1
    QUARTER = 2
    YEAR = 3


@dataclass
class ListRow:
    """One row of the list: a period label and its traffic in kilobytes.

    bar (0..1000 relative to the maximum), color and the text cells are
    filled in by build_rows.
    """

    label: str
    up_kbytes: int = 0
    down_kbytes: int = 0
    mixed: bool = False
    bar: float = 0.0
    color: str = ""
    cells: tuple = ()

    def total(self):
        return self.up_kbytes + self.down_kbytes


def traffic_color(total_kbytes):
    """Colour name of the bar for a given amount of traffic."""
    if total_kbytes < _GB:
        return "blue"
    if total_kbytes < 10 * _GB:
        return "green"
    if total_kbytes < 100 * _GB:
        return "yellow"
    if total_kbytes < 1024 * _GB:
        return "red"
    return "dark_red"


def bar_range(total_kbytes, max_traffic):
    """Length of the bar on a 0..1000 scale; 0 when there is no maximum."""
    if max_traffic == 0:
        return 0.0
    return float(total_kbytes) * 1000 / max_traffic


def day_label(traffic, weekday_names=None):
    """Label such as "2020/01/05 (Sunday)" for one day's record."""
    names = weekday_names or ENGLISH_WEEKDAYS
    label = "%.4d/%.2d/%.2d (" % (traffic.year, traffic.month, traffic.day)
    return label + names[weekday(traffic.year, traffic.month, traffic.day)] + ")"


def _period_label(traffic, view_type):
    if view_type == ViewType.MONTH:
        return "%.4d/%.2d" % (traffic.year, traffic.month)
    if view_type == ViewType.QUARTER:
        return "%.4d/Q%d" % (traffic.year, (traffic.month - 1) // 3 + 1)
    return "%.4d" % traffic.year


def _finish(row, max_traffic):
    total = row.total()
    if row.mixed:
        up_text = down_text = "-"
    else:
        up_text = kbytes_to_string(row.up_kbytes)
        down_text = kbytes_to_string(row.down_kbytes)
    row.cells = (row.label, up_text, down_text, kbytes_to_string(total))
    row.bar = bar_range(total, max_traffic)
    row.color = traffic_color(total)
    return row


def build_rows(traffics, view_type=ViewType.DAY, weekday_names=None):
    """Rows for the list in the given view, in the order of traffics.

    In grouped views consecutive records with the same period label are
    summed; the bar maximum is taken over every group but the last.
    """
    if view_type == ViewType.DAY:
        max_traffic = max((t.kbytes() for t in traffics), default=0)
        rows = [
            ListRow(day_label(t, weekday_names), t.up_kbytes, t.down_kbytes, t.mixed)
            for t in traffics
        ]
    else:
        rows = []
        max_traffic = 0
        for traffic in traffics:
            label = _period_label(traffic, view_type)
            if rows and rows[-1].label == label:
                rows[-1].up_kbytes += traffic.up_kbytes
                rows[-1].down_kbytes += traffic.down_kbytes
                continue
            if rows:
                max_traffic = max(max_traffic, rows[-1].total())
            rows.append(ListRow(label, traffic.up_kbytes, traffic.down_kbytes))
    return [_finish(row, max_traffic) for row in rows]


def column_widths(width, dpi_scale=1.0):
    """Widths of the date, upload, download, total and bar columns.

    Raises ValueError when the list has no width.
    """
    if width <= 0:
        raise ValueError("list width must be positive")

    def dpi(value):
        return int(value * dpi_scale)

    width_date = min(width * 3 // 11, dpi(150))
    width0 = min(width * 2 // 11, dpi(120))
    width1 = width - (_COLUMN_COUNT - 2) * width0 - width_date - dpi(20) - 1
    return [width_date, width0, width0, width0, width1]