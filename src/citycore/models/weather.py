"""Weather states."""

from __future__ import annotations

from enum import Enum


class WeatherState(Enum):
    SUNNY = "sunny"
    CLOUDY = "cloudy"
    RAINY = "rainy"
    STORMY = "stormy"
    SNOWY = "snowy"
