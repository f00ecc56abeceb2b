"""Municipal service budget model."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ServiceBudget:
    """Funding state of one municipal service.

    Frozen: a budget change produces a new record so that ``current_budget``,
    ``efficiency``, ``effects["happiness"]`` and both multipliers are always
    replaced together.

    Attributes:
        id: Unique service identifier.
        name: Display name.
        category: Service group (utilities, services, environment, ...).
        base_cost: Daily cost at 100% funding.
        current_budget: Funding percentage, 50-200.
        efficiency: Service efficiency score, 0-100.
        coverage: Share of the city served (informational).
        effects: Declared secondary effects {effect_key: magnitude}.
        maintenance_multiplier: Funding multiplier applied to upkeep.
        quality_multiplier: Funding multiplier applied to quality.
        description: Extended description.
    """

    id: str
    name: str = ""
    category: str = ""
    base_cost: float = 0.0
    current_budget: float = 100.0
    efficiency: float = 0.0
    coverage: float = 0.0
    effects: dict[str, float] = field(default_factory=dict)
    maintenance_multiplier: float = 1.0
    quality_multiplier: float = 1.0
    description: str = ""

    @property
    def daily_cost(self) -> float:
        """Coins spent per day at the current funding level."""
        return self.base_cost * self.current_budget / 100
