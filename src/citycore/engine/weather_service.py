"""Weather service — time-of-day-correlated weather and rolling forecast.

Live weather is re-sampled on every hour advance.  The forecast holds one
sample per future 4-hour slot and rolls forward whenever the hour is a
multiple of the slot length.  Both draw from the same WEATHER_WEIGHTS
table and the same injected random source.
"""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, Sequence

from citycore.models.clock import TimeOfDay, time_of_day_for_hour
from citycore.models.weather import WeatherState
from citycore.util.constants import FORECAST_LENGTH, FORECAST_SLOT_HOURS, HOURS_PER_DAY
from citycore.util.events import ForecastUpdated, HourAdvanced, WeatherChanged

if TYPE_CHECKING:
    from citycore.loaders.game_config_loader import GameConfig
    from citycore.models.city import CityState
    from citycore.util.events import EventBus

log = logging.getLogger(__name__)

# Row order matters: sampling walks each row front to back.
WEATHER_WEIGHTS: dict[TimeOfDay, tuple[tuple[WeatherState, float], ...]] = {
    TimeOfDay.MORNING: (
        (WeatherState.SUNNY, 0.60),
        (WeatherState.CLOUDY, 0.25),
        (WeatherState.RAINY, 0.12),
        (WeatherState.STORMY, 0.03),
        (WeatherState.SNOWY, 0.0),
    ),
    TimeOfDay.DAY: (
        (WeatherState.SUNNY, 0.70),
        (WeatherState.CLOUDY, 0.20),
        (WeatherState.RAINY, 0.08),
        (WeatherState.STORMY, 0.02),
        (WeatherState.SNOWY, 0.0),
    ),
    TimeOfDay.EVENING: (
        (WeatherState.SUNNY, 0.50),
        (WeatherState.CLOUDY, 0.30),
        (WeatherState.RAINY, 0.15),
        (WeatherState.STORMY, 0.05),
        (WeatherState.SNOWY, 0.0),
    ),
    TimeOfDay.NIGHT: (
        (WeatherState.SUNNY, 0.10),
        (WeatherState.CLOUDY, 0.60),
        (WeatherState.RAINY, 0.20),
        (WeatherState.STORMY, 0.05),
        (WeatherState.SNOWY, 0.05),
    ),
}

FALLBACK_WEATHER = WeatherState.CLOUDY
"""Returned if rounding leaves the cumulative sum at or below the draw."""


def sample_weather(hour: int, rng: random.Random) -> WeatherState:
    """Draw a weather state for ``hour`` by inverse-CDF over its daypart row."""
    r = rng.random()
    cumulative = 0.0
    for state, weight in WEATHER_WEIGHTS[time_of_day_for_hour(hour)]:
        cumulative += weight
        if r < cumulative:
            return state
    return FALLBACK_WEATHER


def generate_forecast(
    current_hour: int,
    existing: Sequence[WeatherState],
    rng: random.Random,
    length: int = FORECAST_LENGTH,
    slot_hours: int = FORECAST_SLOT_HOURS,
) -> list[WeatherState]:
    """Build or roll the forecast.

    An empty (or malformed) forecast is filled with independent samples
    for hours ``current_hour + slot_hours * i``.  A full one drops its
    first slot and appends a sample for the slot after the previous last.

    Returns:
        A new list of exactly ``length`` states.
    """
    if len(existing) != length:
        return [
            sample_weather((current_hour + i * slot_hours) % HOURS_PER_DAY, rng)
            for i in range(length)
        ]
    forecast = list(existing[1:])
    last_hour = (current_hour + (length - 1) * slot_hours) % HOURS_PER_DAY
    forecast.append(sample_weather(last_hour, rng))
    return forecast


class WeatherService:
    """Keeps a city's weather and forecast in step with its clock.

    Args:
        city: City whose ``weather`` and ``weather_forecast`` are updated.
        event_bus: Source of HourAdvanced; receives WeatherChanged and
            ForecastUpdated.
        rng: Random source. Pass a seeded ``random.Random`` for
            reproducible weather.
    """

    def __init__(self, city: CityState, event_bus: EventBus,
                 rng: random.Random | None = None,
                 game_config: GameConfig | None = None) -> None:
        self._city = city
        self._events = event_bus
        self._rng = rng if rng is not None else random.Random()
        if game_config is not None:
            self._length = game_config.forecast_length
            self._slot_hours = game_config.forecast_slot_hours
        else:
            self._length = FORECAST_LENGTH
            self._slot_hours = FORECAST_SLOT_HOURS

    def attach(self) -> None:
        """Subscribe to the clock's hour events."""
        self._events.on(HourAdvanced, self.on_hour_advanced)

    def detach(self) -> None:
        self._events.off(HourAdvanced, self.on_hour_advanced)

    # -- Event handlers --------------------------------------------------

    def on_hour_advanced(self, event: HourAdvanced) -> None:
        self.update_weather(event.hour)
        if event.hour % self._slot_hours == 0:
            self.update_forecast(event.hour)

    # -- Operations ------------------------------------------------------

    def update_weather(self, hour: int) -> WeatherState:
        """Re-sample the live weather for ``hour``."""
        weather = sample_weather(hour, self._rng)
        self._city.weather = weather
        log.debug("Weather at %02d:00 → %s", hour, weather.value)
        self._events.emit(WeatherChanged(hour=hour, weather=weather))
        return weather

    def update_forecast(self, hour: int) -> list[WeatherState]:
        """Roll (or build) the forecast from ``hour``."""
        forecast = generate_forecast(hour, self._city.weather_forecast, self._rng,
                                     self._length, self._slot_hours)
        self._city.weather_forecast = forecast
        self._events.emit(ForecastUpdated(hour=hour, forecast=tuple(forecast)))
        return forecast

    def ensure_forecast(self) -> None:
        """Build the initial forecast for a city that has none."""
        if not self._city.weather_forecast:
            self.update_forecast(self._city.clock.hour)
