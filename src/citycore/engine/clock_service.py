"""Clock service — advances simulated time one minute per tick.

Responsibilities:
- Minute/hour counters with rollover
- Pause handling
- Time-of-day classification on every hour advance
- Day rollover signal when the hour reaches the day start hour

All methods operate on the ClockState of a CityState. No I/O.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from citycore.models.clock import ClockState, time_of_day_for_hour
from citycore.util.constants import DAY_START_HOUR, HOURS_PER_DAY, MINUTES_PER_HOUR
from citycore.util.events import DayRolledOver, HourAdvanced, TimeOfDayChanged

if TYPE_CHECKING:
    from citycore.loaders.game_config_loader import GameConfig
    from citycore.util.events import EventBus

log = logging.getLogger(__name__)


class ClockService:
    """Drives a city's clock.

    Args:
        clock: The clock state to advance (shared with the CityState).
        event_bus: Receives HourAdvanced, TimeOfDayChanged and DayRolledOver.
    """

    def __init__(self, clock: ClockState, event_bus: EventBus,
                 game_config: GameConfig | None = None) -> None:
        self._clock = clock
        self._events = event_bus
        self._day_start_hour = game_config.day_start_hour if game_config else DAY_START_HOUR

    @property
    def clock(self) -> ClockState:
        return self._clock

    # -- Tick ------------------------------------------------------------

    def tick(self) -> None:
        """Advance one simulated minute. No-op while paused."""
        if self._clock.paused:
            return

        if self._clock.minute + 1 < MINUTES_PER_HOUR:
            self._clock.minute += 1
            return

        self._clock.minute = 0
        self._clock.hour = (self._clock.hour + 1) % HOURS_PER_DAY
        self._advance_hour(self._clock.hour)

    def _advance_hour(self, hour: int) -> None:
        self._events.emit(HourAdvanced(hour=hour))
        self._events.emit(TimeOfDayChanged(hour=hour, time_of_day=time_of_day_for_hour(hour)))
        if hour == self._day_start_hour:
            log.info("Clock reached %02d:00 — day rolls over", hour)
            self._events.emit(DayRolledOver(hour=hour))

    # -- Controls --------------------------------------------------------

    def pause(self) -> None:
        self._clock.paused = True

    def resume(self) -> None:
        self._clock.paused = False

    def toggle_pause(self) -> bool:
        """Flip the pause flag and return the new value."""
        self._clock.paused = not self._clock.paused
        return self._clock.paused

    def set_time(self, hour: int, minute: int = 0) -> None:
        """Jump to a clock reading.

        Negative inputs are treated as zero and values wrap into range.
        Emits TimeOfDayChanged but never DayRolledOver.
        """
        self._clock.hour = max(0, hour) % HOURS_PER_DAY
        self._clock.minute = max(0, minute) % MINUTES_PER_HOUR
        self._events.emit(TimeOfDayChanged(
            hour=self._clock.hour,
            time_of_day=time_of_day_for_hour(self._clock.hour),
        ))
