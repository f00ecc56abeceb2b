"""Typed event bus — decoupled inter-service communication.

The clock publishes time events; weather and the day cycle subscribe.
Ledgers never emit events: budget snapshots are pulled on demand.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, TypeVar, Type

from citycore.models.clock import TimeOfDay
from citycore.models.weather import WeatherState

T = TypeVar("T")


# -- Clock events --------------------------------------------------------

@dataclass(frozen=True)
class HourAdvanced:
    """The minute counter rolled over; ``hour`` is the new hour."""
    hour: int


@dataclass(frozen=True)
class TimeOfDayChanged:
    """Emitted on every hour advance with the recomputed daypart."""
    hour: int
    time_of_day: TimeOfDay


@dataclass(frozen=True)
class DayRolledOver:
    """The hour transitioned to the day start hour."""
    hour: int


# -- Day cycle events ----------------------------------------------------

@dataclass(frozen=True)
class DayEnded:
    """The game day counter advanced."""
    new_day: int
    income: float


@dataclass(frozen=True)
class BillGenerated:
    bill_id: str
    amount: float
    day_due: int


@dataclass(frozen=True)
class BillPaid:
    bill_id: str
    amount: float


# -- Weather events ------------------------------------------------------

@dataclass(frozen=True)
class WeatherChanged:
    hour: int
    weather: WeatherState


@dataclass(frozen=True)
class ForecastUpdated:
    hour: int
    forecast: tuple[WeatherState, ...]


# -- Upgrade events ------------------------------------------------------

@dataclass(frozen=True)
class UpgradePurchased:
    upgrade_id: str
    cost: float


# -- Event Bus -----------------------------------------------------------

class EventBus:
    """Simple synchronous event bus with typed events.

    Usage:
        bus = EventBus()
        bus.on(HourAdvanced, lambda e: print(e.hour))
        bus.emit(HourAdvanced(hour=9))
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[Callable[[Any], None]]] = defaultdict(list)

    def on(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Register a handler for an event type."""
        self._handlers[event_type].append(handler)

    def off(self, event_type: Type[T], handler: Callable[[T], None]) -> None:
        """Unregister a handler."""
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event: object) -> None:
        """Emit an event to all registered handlers."""
        for handler in list(self._handlers.get(type(event), [])):
            handler(event)

    def clear(self) -> None:
        """Remove all handlers."""
        self._handlers.clear()
