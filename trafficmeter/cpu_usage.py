"""CPU utilisation sampling."""

from __future__ import annotations

from collections import namedtuple

import psutil

__all__ = ["CpuTimes", "CpuUsage", "usage_from_times"]

CpuTimes = namedtuple("CpuTimes", "idle kernel user")
"""Cumulative idle, kernel and user time; kernel time includes idle time."""

_USER_FIELDS = ("user", "nice")


def usage_from_times(prev, current):
    """Percentage of busy time between two CpuTimes samples."""
    idle = current[0] - prev[0]
    kernel = current[1] - prev[1]
    user = current[2] - prev[2]
    total = kernel + user
    if total == 0:
        return 0
    return abs((total - idle) * 100) // abs(total)


def _system_times():
    fields = psutil.cpu_times()._asdict()
    total = sum(fields.values())
    user = sum(fields.get(name, 0.0) for name in _USER_FIELDS)
    return CpuTimes(fields.get("idle", 0.0), total - user, user)


class CpuUsage:
    """Samples CPU usage either from cumulative CPU times or from a rate counter."""

    def __init__(self, use_system_times=True):
        self._use_system_times = use_system_times
        self._first_sample = True
        self._prev_times = CpuTimes(0, 0, 0)

    def set_use_cpu_times(self, use_system_times):
        """Choose the sampling method; switching restarts the rate counter."""
        if self._use_system_times != use_system_times:
            self._use_system_times = use_system_times
            self._first_sample = True

    def get_cpu_usage(self):
        """CPU usage in percent since the previous call, 0 to 100."""
        if self._use_system_times:
            current = _system_times()
            usage = usage_from_times(self._prev_times, current)
            self._prev_times = current
            return int(usage)
        value = psutil.cpu_percent(interval=None)
        if self._first_sample:
            self._first_sample = False
            return 0
        return min(int(value), 100)