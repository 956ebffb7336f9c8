"""
Raw value formatting at the import boundary.

Spreadsheet loaders hand over loosely typed values (str, int, float, bool or
None). The grid only ever holds text, so every raw value passes through a
formatter on its way in. ``to_text`` is the default; ``format_time_of_day``
is the pluggable formatter for columns holding times stored as day fractions.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from typing import Any

ValueFormatter = Callable[[Any], str]

SECONDS_PER_DAY = 86400

_TIME_STRING = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")


def to_text(value: Any, placeholder: str = "") -> str:
    """Convert a raw cell value to its canonical text form.

    None and empty strings become ``placeholder``. Integral floats lose their
    trailing ".0" so 3.0 reads as "3".
    """
    if value is None or value == "":
        return placeholder
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_time_of_day(value: Any, placeholder: str = "") -> str:
    """Format a time-of-day value as "HH:MM".

    Numbers are fractions of a 24-hour day (0.5 -> "12:00"). Strings already
    shaped like H:MM or HH:MM:SS are cut to zero-padded HH:MM. Anything else
    passes through as stripped text.

    Examples:
        0.5 -> "12:00", 0.0 -> "00:00", "9:05:30" -> "09:05", "" -> placeholder
    """
    if value is None or value == "":
        return placeholder

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if not math.isfinite(value):
            return placeholder
        total_seconds = round(value * SECONDS_PER_DAY)
        hours = (total_seconds // 3600) % 24
        minutes = (total_seconds % 3600) // 60
        return f"{hours:02d}:{minutes:02d}"

    text = str(value).strip()
    match = _TIME_STRING.match(text)
    if match:
        hours_str, minutes_str = match.groups()
        return f"{int(hours_str):02d}:{minutes_str}"

    return text or placeholder


def time_formatter(placeholder: str = "") -> ValueFormatter:
    """Return a one-argument time formatter bound to ``placeholder``.

    The agent dashboard shows missing shift times as "--:--" while the grid
    leaves them blank; each caller picks its own placeholder.
    """

    def _format(value: Any) -> str:
        return format_time_of_day(value, placeholder)

    return _format
