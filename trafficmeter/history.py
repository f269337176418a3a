"""Daily traffic history and its plain-text storage file."""

from __future__ import annotations

import bisect
import dataclasses
import datetime
import re
from dataclasses import dataclass
from pathlib import Path

__all__ = ["HistoryTraffic", "find_by_date", "HistoryTrafficFile"]

_MAX_RECORDS = 10000
_MIN_LINE_LEN = 12
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


@dataclass
class HistoryTraffic:
    """Traffic of one day in kilobytes.

    A mixed entry only knows the total, which is kept in down_kbytes.
    """

    year: int = 0
    month: int = 0
    day: int = 0
    up_kbytes: int = 0
    down_kbytes: int = 0
    mixed: bool = False

    def kbytes(self):
        return self.up_kbytes + self.down_kbytes

    def same_date(self, other):
        return _date_key(self) == _date_key(other)


def _date_key(traffic):
    return traffic.year, traffic.month, traffic.day


def _descending_key(traffic):
    return -traffic.year, -traffic.month, -traffic.day


def find_by_date(traffics, year, month, day):
    """Find the entry for a date in a list sorted newest first, or None."""
    target = (-year, -month, -day)
    index = bisect.bisect_left(traffics, target, key=_descending_key)
    if index < len(traffics) and _descending_key(traffics[index]) == target:
        return traffics[index]
    return None


def _atoi(text):
    """Leading integer of text, 0 if there is none."""
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _parse_line(line):
    if len(line) < _MIN_LINE_LEN:
        return None
    year = _atoi(line[0:4])
    if not 1900 <= year <= 3000:
        return None
    month = _atoi(line[5:7])
    if not 1 <= month <= 12:
        return None
    day = _atoi(line[8:10])
    if not 1 <= day <= 31:
        return None
    slash = line.find("/", 11)
    if slash < 0:
        return HistoryTraffic(year, month, day, 0, _atoi(line[11:]), True)
    return HistoryTraffic(
        year, month, day, _atoi(line[11:slash]), _atoi(line[slash + 1:]), False
    )


def _format_line(traffic):
    date = "%.4d/%.2d/%.2d" % (traffic.year, traffic.month, traffic.day)
    if traffic.mixed:
        return f"{date} {traffic.down_kbytes}"
    return f"{date} {traffic.up_kbytes}/{traffic.down_kbytes}"


class HistoryTrafficFile:
    """Daily traffic records kept newest first, backed by a text file.

    After every load or merge the first record is the one for today.
    """

    def __init__(self, file_path, today=None):
        self.file_path = file_path
        self.traffics = []
        self.today_up_traffic = 0
        self.today_down_traffic = 0
        self._size = 0
        self._today = today

    def save(self):
        """Write the record count followed by one line per day."""
        with open(self.file_path, "w", encoding="utf-8", newline="\n") as file:
            file.write(f'lines: "{len(self.traffics)}"\n')
            for traffic in self.traffics:
                file.write(_format_line(traffic) + "\n")

    def load(self):
        """Read records from the file (at most 10000) and normalize them."""
        path = Path(self.file_path)
        if path.exists():
            with path.open(encoding="utf-8", errors="replace") as file:
                for raw in file:
                    if len(self.traffics) >= _MAX_RECORDS:
                        break
                    traffic = _parse_line(raw.rstrip("\r\n"))
                    if traffic is not None and traffic.kbytes() > 0:
                        self.traffics.append(traffic)
        self._normalize()

    def load_size(self):
        """Read only the record count stored on the first line of the file."""
        path = Path(self.file_path)
        if not path.exists():
            return
        with path.open(encoding="utf-8", errors="replace") as file:
            first = file.readline().rstrip("\r\n")
        index = first.find("lines:")
        if index < 0:
            return
        start = first.find('"', index + 6)
        if start < 0:
            return
        end = first.find('"', start + 1)
        if end < 0:
            end = len(first)
        self._size = _atoi(first[start + 1:end])

    def merge(self, other, ignore_same_data=False):
        """Add the records of other.

        With ignore_same_data, records whose date is already present are
        skipped; otherwise traffic of the same date is added together.
        """
        seen = {_date_key(t) for t in self.traffics} if ignore_same_data else None
        for traffic in other.traffics:
            if seen is not None:
                key = _date_key(traffic)
                if key in seen:
                    continue
                seen.add(key)
            self.traffics.append(dataclasses.replace(traffic))
        self._normalize()

    def __len__(self):
        return self._size

    def _normalize(self):
        today = self._today or datetime.date.today()
        current = HistoryTraffic(today.year, today.month, today.day)
        if not self.traffics:
            self.traffics.insert(0, current)
        if len(self.traffics) >= 2:
            self.traffics.sort(key=_date_key, reverse=True)
            i = 0
            while i < len(self.traffics) - 1:
                first, second = self.traffics[i], self.traffics[i + 1]
                if first.same_date(second):
                    first.up_kbytes += second.up_kbytes
                    first.down_kbytes += second.down_kbytes
                    del self.traffics[i + 1]
                i += 1
        head = self.traffics[0]
        if head.same_date(current):
            self.today_up_traffic = head.up_kbytes * 1024
            self.today_down_traffic = head.down_kbytes * 1024
            head.mixed = False
        else:
            self.traffics.insert(0, current)
        self._size = len(self.traffics)