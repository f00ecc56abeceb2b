"""Infrastructure upgrade definitions.

Loaded from config/infrastructure.yaml via the catalog loader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class InfrastructureUpgrade:
    """A one-time city upgrade with permanent effects.

    Attributes:
        id: Unique upgrade identifier.
        name: Human-readable display name.
        category: Infrastructure area (power, water, telecom, waste, ...).
        cost: One-time purchase price in coins.
        maintenance_cost: Coins added to daily expenses once owned.
        effects: Permanent effects granted. {effect_key: value}
        prerequisite: Upgrade id that must be owned first.
        unlock_level: Minimum player level.
        build_time: Build duration in days (informational).
        description: Extended description.
    """

    id: str = ""
    name: str = ""
    category: str = ""
    cost: float = 0.0
    maintenance_cost: float = 0.0
    effects: dict[str, float] = field(default_factory=dict)
    prerequisite: Optional[str] = None
    unlock_level: int = 1
    build_time: int = 0
    description: str = ""
