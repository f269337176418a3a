"""Month calendar of daily traffic, with paging between months."""

from __future__ import annotations

from .calendar_helper import CALENDAR_HEIGHT, CALENDAR_WIDTH, month_calendar
from .common import kbytes_to_string
from .history import find_by_date
from .history_list import ENGLISH_WEEKDAYS, traffic_color

__all__ = ["CalendarView"]


class CalendarView:
    """Calendar of one month built from traffic records sorted newest first.

    The first record is taken as today; paging is limited to the years
    between the oldest and the newest record.
    """

    def __init__(self, traffics, sunday_first=True):
        if not traffics:
            raise ValueError("traffic history is empty")
        self.traffics = traffics
        self.sunday_first = sunday_first
        self.year_max = traffics[0].year
        self.year_min = traffics[-1].year
        self.year = traffics[0].year
        self.month = traffics[0].month
        self.calendar = []
        self.month_total_upload = 0
        self.month_total_download = 0
        self._refresh()

    def _refresh(self):
        self.calendar = month_calendar(self.year, self.month, self.sunday_first)
        for cell in self._cells():
            if cell.day <= 0:
                continue
            record = find_by_date(self.traffics, self.year, self.month, cell.day)
            if record is not None:
                cell.up_traffic = record.up_kbytes
                cell.down_traffic = record.down_kbytes
                cell.mixed = record.mixed
        cells = list(self._cells())
        self.month_total_upload = sum(c.up_traffic for c in cells)
        self.month_total_download = sum(c.down_traffic for c in cells)

    def _cells(self):
        for row in self.calendar:
            yield from row

    def _cell_for_day(self, day):
        if day <= 0:
            return None
        return next((c for c in self._cells() if c.day == day), None)

    def set_month(self, year, month):
        """Show the given month; the year must lie within the recorded years."""
        if not 1 <= month <= 12:
            raise ValueError(f"month out of range: {month}")
        if not self.year_min <= year <= self.year_max:
            raise ValueError(f"year out of range: {year}")
        self.year = year
        self.month = month
        self._refresh()

    def set_sunday_first(self, sunday_first):
        """Start weeks on Sunday (True) or Monday (False)."""
        self.sunday_first = sunday_first
        self._refresh()

    def previous_month(self):
        """Go back one month; False if already at the first month."""
        if self.year == self.year_min and self.month == 1:
            return False
        self.month -= 1
        if self.month <= 0:
            self.month = 12
            self.year -= 1
        self._refresh()
        return True

    def next_month(self):
        """Go forward one month; False if already at the last month."""
        if self.year == self.year_max and self.month == 12:
            return False
        self.month += 1
        if self.month > 12:
            self.month = 1
            self.year += 1
        self._refresh()
        return True

    def scroll(self, delta):
        """Page by a wheel delta: positive goes back, negative forward."""
        if delta > 0:
            return self.previous_month()
        if delta < 0:
            return self.next_month()
        return False

    def jump_to_today(self):
        """Show the month of the newest record."""
        self.year = self.traffics[0].year
        self.month = self.traffics[0].month
        self._refresh()

    def is_weekend(self, index):
        """Whether column index (0..6) falls on a weekend."""
        if self.sunday_first:
            return index in (0, 6)
        return index in (5, 6)

    def weekday_name(self, index):
        """Name of the weekday shown in column index (0..6)."""
        if not 0 <= index < CALENDAR_WIDTH:
            raise IndexError(f"column out of range: {index}")
        if not self.sunday_first:
            index = (index + 1) % CALENDAR_WIDTH
        return ENGLISH_WEEKDAYS[index]

    def is_today(self, day):
        """Whether day of the shown month is the date of the newest record."""
        today = self.traffics[0]
        return (self.year == today.year and self.month == today.month
                and day == today.day)

    def cell_color(self, day):
        """Colour name of the traffic marker for a day, None if it has none."""
        cell = self._cell_for_day(day)
        if cell is None or cell.traffic() <= 0:
            return None
        return traffic_color(cell.traffic())

    def day_tooltip(self, day):
        """Tooltip text for a day of the shown month, None for an empty cell."""
        cell = self._cell_for_day(day)
        if cell is None:
            return None
        lines = [
            f"{self.year}/{self.month}/{day}",
            "Traffic used: " + kbytes_to_string(cell.traffic()),
        ]
        if not cell.mixed and cell.traffic() > 0:
            lines.append("Upload: " + kbytes_to_string(cell.up_traffic))
            lines.append("Download: " + kbytes_to_string(cell.down_traffic))
        return "\n".join(lines)

    def summary(self):
        """Total traffic of the shown month, with upload and download."""
        total = self.month_total_upload + self.month_total_download
        return (
            f"Current month total traffic: {kbytes_to_string(total)} "
            f"(Upload: {kbytes_to_string(self.month_total_upload)}, "
            f"Download: {kbytes_to_string(self.month_total_download)})"
        )

    @property
    def shape(self):
        return CALENDAR_HEIGHT, CALENDAR_WIDTH