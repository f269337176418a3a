# trafficmeter

Building blocks for a network-traffic monitor: speed and size formatting,
network connection matching, CPU usage sampling, a plain-text store of
daily traffic history, and the logic behind list and calendar views of
that history.

## Modules

| Module | Purpose |
| --- | --- |
| `trafficmeter.variant` | `Variant`, a value holder that renders ints, unsigned 32-bit ints, floats (`%g`) and strings |
| `trafficmeter.common` | `speed_to_string` with `SpeedFormat`/`SpeedUnit`, `data_size_to_string`, `kbytes_to_string`, `string_format`, `int_to_string`, `string_similarity`, `normalize_font_name`, colour helpers (`rgb`, `transparent_color_convert`, `is_color_similar`), `time_of_day_diff`, `file_time_diff`, `write_log`, `list_files`, `move_file` |
| `trafficmeter.calendar_helper` | `is_leap_year`, `weekday`, `days_in_month`, and `month_calendar`, a 6 × 7 grid of `DayTraffic` cells |
| `trafficmeter.netinfo` | `fetch_url` (raises `FetchError`), `json_value_simple`, `parse_ip_page`, `get_internet_ip`, `get_internet_ip2` |
| `trafficmeter.adapters` | `NetworkConnection`, `IfEntry`, `get_adapter_info`, `refresh_ip_address`, and exact or fuzzy matching against an interface table |
| `trafficmeter.cpu_usage` | `CpuUsage`, a sampler reporting whole-percent CPU utilisation between calls, and `usage_from_times` |
| `trafficmeter.history` | `HistoryTraffic`, `find_by_date` and `HistoryTrafficFile`, which loads, merges, normalises and saves daily records |
| `trafficmeter.history_list` | `build_rows` for the day, month, quarter and year views (`ViewType`), bar lengths, colours and column widths |
| `trafficmeter.calendar_view` | `CalendarView`: month paging, weekend columns, weekday names, tooltips and monthly totals |
| `trafficmeter.settings` | `GeneralSettings` and the clamping, rounding and index rules applied to the options |

## Formatting sizes

```python
from trafficmeter.common import data_size_to_string, int_to_string, kbytes_to_string, string_format

data_size_to_string(2048)                 # '2.00 KB'
kbytes_to_string(512)                     # '512 KB'
int_to_string(1234567, True, False)       # '1,234,567'
string_format("<%1%> of <%2%>", 3, 10)    # '3 of 10'
```

Speeds are formatted with `speed_to_string(size, cfg)`, where `cfg` is a
`SpeedFormat` choosing the unit (`SpeedUnit.AUTO`, `KBPS`, `MBPS`), short
mode, bits versus bytes, hiding the unit and separating it with a space.

## Calendar arithmetic

```python
from trafficmeter.calendar_helper import days_in_month, is_leap_year, weekday

is_leap_year(2024)       # True
days_in_month(2023, 2)   # 28
weekday(2024, 1, 1)      # 1  (0 is Sunday, 6 is Saturday)
```

`month_calendar(year, month, sunday_first)` returns six weeks of seven
`DayTraffic` cells; cells outside the month have day `0`.

## Traffic history

The history file holds a header line `lines: "N"`, then one line per day:
`YYYY/MM/DD up/down` in kilobytes, or `YYYY/MM/DD total` for days where
upload and download were not recorded separately. At most 10000 records
are read.

```python
import datetime

from trafficmeter.history import HistoryTrafficFile

history = HistoryTrafficFile("history_traffic.dat", datetime.date.today())
history.load()       # reads, sorts newest first, merges duplicate dates
print(len(history))  # number of days, today included
history.save()
```

After `load` or `merge` the first record is always today's.
`merge(other, ignore_same_data)` either adds traffic of dates both hold
or skips records whose date is already present. `load_size()` reads only
the count from the header line.

`CalendarView(history.traffics, sunday_first)` and
`build_rows(history.traffics, ViewType.MONTH)` present these records.

## CPU usage

```python
from trafficmeter.cpu_usage import CpuUsage

sampler = CpuUsage(True)
sampler.get_cpu_usage()   # percentage since the previous call
```

With `False` the sampler uses `psutil.cpu_percent`; the first reading
after switching methods is 0.

## Network information

`get_adapter_info()` lists interfaces from `psutil` with their IPv4
address and mask; the default gateway is read from `/proc/net/route`
where that file exists. The interface counter table given to
`fill_if_table_info` and `all_if_table_info` is a list of `IfEntry`
supplied by the caller. `get_internet_ip2()` asks a public JSON service
and returns empty strings when it cannot be reached.

## What this package does not do

It has no command, window or tray icon, and it does not poll traffic
counters on its own: it provides the formatting, history storage and view
logic that such a program would use. Settings held in `GeneralSettings`
are not written to or read from any configuration file.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.