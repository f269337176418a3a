"""A small tagged value used when filling numbered placeholders in text."""

from __future__ import annotations

import enum

__all__ = ["Variant"]


class _Kind(enum.Enum):
    INT = "int"
    UINT = "uint"
    DOUBLE = "double"
    STRING = "string"


class Variant:
    """Holds an int, an unsigned int, a float or a string and renders it as text."""

    __slots__ = ("_kind", "_value")

    def __init__(self, value, unsigned=False):
        if isinstance(value, Variant):
            self._kind = value._kind
            self._value = value._value
        elif isinstance(value, str):
            self._kind = _Kind.STRING
            self._value = value
        elif isinstance(value, float):
            self._kind = _Kind.DOUBLE
            self._value = value
        elif isinstance(value, int):
            if unsigned:
                self._kind = _Kind.UINT
                self._value = int(value) & 0xFFFFFFFF
            else:
                self._kind = _Kind.INT
                self._value = int(value)
        else:
            raise TypeError(f"unsupported variant value: {type(value).__name__}")

    def to_string(self):
        """Render the value the way printf's %d, %u or %g would."""
        if self._kind is _Kind.DOUBLE:
            return "%g" % self._value
        if self._kind is _Kind.STRING:
            return self._value
        return "%d" % self._value

    def __str__(self):
        return self.to_string()

    def __repr__(self):
        return f"Variant({self._value!r}, kind={self._kind.value})"