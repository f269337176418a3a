"""Calendar arithmetic used by the history calendar view."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "CALENDAR_WIDTH",
    "CALENDAR_HEIGHT",
    "DayTraffic",
    "is_leap_year",
    "weekday",
    "days_in_month",
    "month_calendar",
]

CALENDAR_WIDTH = 7
CALENDAR_HEIGHT = 6


@dataclass
class DayTraffic:
    """Traffic of one calendar cell; day 0 marks an empty cell."""

    day: int = 0
    up_traffic: int = 0
    down_traffic: int = 0
    mixed: bool = False

    def traffic(self):
        return self.up_traffic + self.down_traffic


def is_leap_year(year):
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def weekday(year, month, day):
    """Day of the week, 0 for Sunday through 6 for Saturday."""
    if month <= 2:
        month += 12
        year -= 1
    return (day + 2 * month + 3 * (month + 1) // 5 + year + year // 4
            - year // 100 + year // 400 + 1) % 7


def days_in_month(year, month):
    if month == 2:
        return 29 if is_leap_year(year) else 28
    if month in (4, 6, 9, 11):
        return 30
    return 31


def month_calendar(year, month, sunday_first=True):
    """Return a 6x7 grid of DayTraffic cells for the given month.

    Weeks start on Sunday when sunday_first is true, otherwise on Monday.
    """
    grid = [[DayTraffic() for _ in range(CALENDAR_WIDTH)] for _ in range(CALENDAR_HEIGHT)]
    days = days_in_month(year, month)
    first = weekday(year, month, 1)
    if not sunday_first:
        first = first - 1 if first > 0 else 6
    for n in range(37):
        row, col = divmod(n, CALENDAR_WIDTH)
        if n >= first:
            day = n - first + 1
            if day <= days:
                grid[row][col].day = day
    return grid