"""Clock model — simulated hour/minute counters and daypart classification."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from citycore.util.constants import DEFAULT_START_HOUR


class TimeOfDay(Enum):
    """Coarse daypart derived from the hour."""

    MORNING = "morning"
    DAY = "day"
    EVENING = "evening"
    NIGHT = "night"


def time_of_day_for_hour(hour: int) -> TimeOfDay:
    """Classify an hour: morning [5,10), day [10,17), evening [17,21), else night."""
    h = hour % 24
    if 5 <= h < 10:
        return TimeOfDay.MORNING
    if 10 <= h < 17:
        return TimeOfDay.DAY
    if 17 <= h < 21:
        return TimeOfDay.EVENING
    return TimeOfDay.NIGHT


@dataclass
class ClockState:
    """Simulated time of a city.

    Attributes:
        hour: Current hour, 0-23.
        minute: Current minute, 0-59.
        paused: When set, ticks are ignored.
    """

    hour: int = DEFAULT_START_HOUR
    minute: int = 0
    paused: bool = False

    @property
    def time_of_day(self) -> TimeOfDay:
        return time_of_day_for_hour(self.hour)

    @property
    def total_minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute
