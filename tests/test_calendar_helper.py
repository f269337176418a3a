import calendar
import datetime

import pytest

from trafficmeter.calendar_helper import (
    CALENDAR_HEIGHT,
    CALENDAR_WIDTH,
    DayTraffic,
    days_in_month,
    is_leap_year,
    month_calendar,
    weekday,
)


def test_leap_years_agree_with_stdlib():
    for year in range(1890, 2110):
        assert is_leap_year(year) == calendar.isleap(year)


def test_weekday_agrees_with_datetime():
    start = datetime.date(1999, 12, 1)
    for offset in range(0, 900, 7):
        d = start + datetime.timedelta(days=offset + offset % 5)
        assert weekday(d.year, d.month, d.day) == d.isoweekday() % 7


def test_days_in_month_agrees_with_stdlib():
    for year in (1900, 2000, 2023, 2024):
        for month in range(1, 13):
            assert days_in_month(year, month) == calendar.monthrange(year, month)[1]


@pytest.mark.parametrize("year,month", [(2024, 2), (2023, 9), (2021, 8), (2015, 2)])
@pytest.mark.parametrize("sunday_first", [True, False])
def test_month_calendar_layout(year, month, sunday_first):
    grid = month_calendar(year, month, sunday_first)
    assert len(grid) == CALENDAR_HEIGHT
    assert all(len(row) == CALENDAR_WIDTH for row in grid)

    flat = [cell.day for row in grid for cell in row]
    days = [d for d in flat if d]
    assert days == list(range(1, days_in_month(year, month) + 1))

    first = datetime.date(year, month, 1)
    expected_start = first.isoweekday() % 7 if sunday_first else first.weekday()
    assert flat.index(1) == expected_start


def test_month_calendar_cells_have_no_traffic():
    grid = month_calendar(2022, 5)
    assert all(cell.traffic() == 0 and not cell.mixed for row in grid for cell in row)


def test_day_traffic_total():
    cell = DayTraffic(day=3, up_traffic=100, down_traffic=250)
    assert cell.traffic() == 350