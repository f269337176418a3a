"""Formatting and small utility helpers shared across the package."""

from __future__ import annotations

import datetime
import enum
import os
import struct
from dataclasses import dataclass

from .variant import Variant

__all__ = [
    "SpeedUnit",
    "SpeedFormat",
    "string_normalize",
    "speed_to_string",
    "data_size_to_string",
    "kbytes_to_string",
    "file_time_diff",
    "time_of_day_diff",
    "write_log",
    "list_files",
    "move_file",
    "string_format",
    "int_to_string",
    "normalize_font_name",
    "string_similarity",
    "rgb",
    "transparent_color_convert",
    "is_color_similar",
]

FW_LIGHT = 300
FW_SEMILIGHT = 350
FW_SEMIBOLD = 600
FW_BOLD = 700
FW_BLACK = 900

_FONT_STYLES = {
    "Light": FW_LIGHT,
    "Semilight": FW_SEMILIGHT,
    "Semibold": FW_SEMIBOLD,
    "Bold": FW_BOLD,
    "Black": FW_BLACK,
}
_FACE_NAME_MAX = 31


class SpeedUnit(enum.IntEnum):
    AUTO = 0
    KBPS = 1
    MBPS = 2


@dataclass
class SpeedFormat:
    """Options controlling how a transfer speed is rendered."""

    unit_byte: bool = True
    speed_unit: SpeedUnit = SpeedUnit.AUTO
    speed_short_mode: bool = False
    hide_unit: bool = False
    separate_value_unit_with_space: bool = True


def _f32(value):
    return struct.unpack("<f", struct.pack("<f", value))[0]


def string_normalize(text):
    """Strip spaces and control characters (code points 0..32) from both ends."""
    return text.strip("".join(chr(c) for c in range(33)))


def speed_to_string(size, cfg):
    """Render a per-second byte count according to cfg."""
    size &= 0xFFFFFFFF
    if not cfg.unit_byte:
        size = (size * 8) & 0xFFFFFFFF
    value = _f32(float(size))
    kb = value / 1024.0
    mb = kb / 1024.0
    gb = mb / 1024.0
    short = cfg.speed_short_mode
    value_str = ""
    unit_str = ""

    if cfg.speed_unit == SpeedUnit.AUTO:
        if size < 1024 * 10:
            value_str, unit_str = ("%.1f" if short else "%.2f") % kb, "K" if short else "KB"
        elif size < 1024 * 1000:
            value_str, unit_str = ("%.0f" if short else "%.1f") % kb, "K" if short else "KB"
        elif size < 1024 * 1024 * 1000:
            value_str, unit_str = ("%.1f" if short else "%.2f") % mb, "M" if short else "MB"
        else:
            value_str, unit_str = "%.2f" % gb, "G" if short else "GB"
    elif cfg.speed_unit == SpeedUnit.KBPS:
        if short:
            value_str = ("%.1f" if size < 1024 * 10 else "%.0f") % kb
        else:
            value_str = ("%.2f" if size < 1024 * 10 else "%.1f") % kb
        if not cfg.hide_unit:
            unit_str = "K" if short else "KB"
    elif cfg.speed_unit == SpeedUnit.MBPS:
        value_str = ("%.1f" if short else "%.2f") % mb
        if not cfg.hide_unit:
            unit_str = "M" if short else "MB"

    if cfg.separate_value_unit_with_space and not cfg.hide_unit:
        result = f"{value_str} {unit_str}"
    else:
        result = value_str + unit_str
    if not cfg.unit_byte:
        if short and not cfg.hide_unit:
            result += "b"
        else:
            result = result.replace("B", "b")
    return result


def data_size_to_string(size):
    """Render a byte count in KB, MB, GB or TB."""
    if size < 1024 * 10:
        return "%.2f KB" % (size / 1024.0)
    if size < 1024 * 1024:
        return "%.1f KB" % (size / 1024.0)
    if size < 1024 * 1024 * 1024:
        return "%.2f MB" % (size / 1024.0 / 1024.0)
    if size < 1024 ** 4:
        return "%.2f GB" % (size / 1024.0 / 1024.0 / 1024.0)
    return "%.2f TB" % (size / 1024.0 / 1024.0 / 1024.0 / 1024.0)


def kbytes_to_string(kb_size):
    """Render a count of kilobytes in KB, MB, GB or TB."""
    if kb_size < 1024:
        return "%d KB" % kb_size
    if kb_size < 1024 * 1024:
        return "%.2f MB" % (kb_size / 1024.0)
    if kb_size < 1024 * 1024 * 1024:
        return "%.2f GB" % (kb_size / 1024.0 / 1024.0)
    return "%.2f TB" % (kb_size / 1024.0 / 1024.0 / 1024.0)


def file_time_diff(time1, time2):
    """Difference time2 - time1 of two 64-bit file-time counters."""
    return int(time2) - int(time1)


def time_of_day_diff(a, b):
    """a - b keeping only hours, minutes and seconds, wrapped into one day."""
    hour = a.hour - b.hour
    minute = a.minute - b.minute
    second = a.second - b.second
    if second < 0:
        second += 60
        minute -= 1
    if minute < 0:
        minute += 60
        hour -= 1
    if hour < 0:
        hour += 24
    return datetime.time(hour, minute, second)


def write_log(text, file_path):
    """Append a timestamped line to the log file."""
    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")
    now = datetime.datetime.now()
    stamp = (f"{now.year}/{now.month:02d}/{now.day:02d} "
             f"{now.hour:02d}:{now.minute:02d}:{now.second:02d}."
             f"{now.microsecond // 1000:03d}: ")
    with open(file_path, "a", encoding="utf-8") as log:
        log.write(f"{stamp}{text}\n")


def list_files(path):
    """Names of the files and folders directly inside path."""
    try:
        return [name for name in os.listdir(path) if name not in (".", "..")]
    except OSError:
        return []


def move_file(src, dst):
    """Move src to dst; False if src is missing, dst exists or the move fails."""
    if not os.path.exists(src) or os.path.exists(dst):
        return False
    try:
        os.rename(src, dst)
    except OSError:
        return False
    return True


def string_format(template, *args):
    """Replace <%1%>, <%2%>, ... in template with the rendered arguments."""
    result = template
    for index, arg in enumerate(args, start=1):
        result = result.replace(f"<%{index}%>", Variant(arg).to_string())
    return result


def int_to_string(n, thousand_separation=False, is_unsigned=False):
    """Render an int, optionally as unsigned 32-bit and with thousands commas."""
    text = "%d" % ((n & 0xFFFFFFFF) if is_unsigned else n)
    if thousand_separation:
        count = 0
        for i in range(len(text) - 1, 0, -1):
            count += 1
            if count % 3 == 0:
                text = text[:i] + "," + text[i:]
    return text


def normalize_font_name(name):
    """Split a weight suffix such as "Bold" off a font face name.

    Returns (face name, weight) where weight is None if no suffix was found.
    """
    if not name:
        return name, None
    trimmed = name[:-1] if name.endswith(" ") else name
    index = trimmed.rfind(" ")
    if index < 0:
        return name, None
    weight = _FONT_STYLES.get(trimmed[index + 1:])
    if weight is not None:
        trimmed = trimmed[:index]
    return trimmed[:_FACE_NAME_MAX], weight


def string_similarity(src, match):
    """Similarity in [0, 1] based on edit distance; 0 if either string is empty."""
    n, m = len(src), len(match)
    if n == 0 or m == 0:
        return 0.0
    previous = list(range(m + 1))
    for i, src_char in enumerate(src, start=1):
        current = [i]
        for j, match_char in enumerate(match, start=1):
            cost = 0 if src_char == match_char else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return 1 - previous[m] / max(n, m)


def rgb(r, g, b):
    """Pack colour components into a COLORREF-style integer (0x00BBGGRR)."""
    return (r & 0xFF) | ((g & 0xFF) << 8) | ((b & 0xFF) << 16)


def _components(color):
    return color & 0xFF, (color >> 8) & 0xFF, (color >> 16) & 0xFF


def transparent_color_convert(color):
    """Nudge the blue channel by one when red equals blue; 0 is left as is."""
    if color == 0:
        return color
    r, g, b = _components(color)
    if r == b:
        b = b - 1 if b >= 255 else b + 1
        return rgb(r, g, b)
    return color


def is_color_similar(color1, color2):
    """True when every channel differs by less than 24."""
    return all(abs(x - y) < 24 for x, y in zip(_components(color1), _components(color2)))