"""Placed building, as handed over by the grid owner. Read-only here."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Building:
    """A building on the city grid.

    Attributes:
        id: Catalog id of the building kind (``house``, ``cafe``, ...).
        type: Broad building type (``factory`` marks industry).
        income: Coins earned per day.
        cost: Purchase price; expensive homes count as luxury.
        name: Display name.
        energy_usage: Energy units drawn per day (negative for producers).
    """

    id: str
    type: str = ""
    income: float = 0.0
    cost: float = 0.0
    name: str = ""
    energy_usage: float = 0.0
