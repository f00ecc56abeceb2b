"""Formatting and conversion utilities.

Clock formatting, duration formatting, percentages.
"""

from __future__ import annotations

import math


def format_time_12h(hour: int, minute: int) -> str:
    """Format a clock reading as ``8:05 am``."""
    h = hour % 24
    display = h % 12 or 12
    suffix = "pm" if h >= 12 else "am"
    return f"{display}:{minute:02d} {suffix}"


def format_time_24h(hour: int, minute: int) -> str:
    """Format a clock reading as ``08:05``."""
    return f"{hour % 24:02d}:{minute:02d}"


def format_duration(minutes: float) -> str:
    """Format a duration in game minutes."""
    m = max(0.0, minutes)
    if m < 1:
        return "< 1m"
    hours = int(m // 60)
    mins = math.ceil(m % 60)
    if hours > 0:
        return f"{hours}h {mins}m" if mins > 0 else f"{hours}h"
    return f"{mins}m"


def format_percent(value: float) -> str:
    """Format a float as percentage."""
    return f"{value * 100:.0f}%"


def is_night_time(hour: int) -> bool:
    h = hour % 24
    return h >= 21 or h < 5
