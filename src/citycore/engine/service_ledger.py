"""Service budget ledger — funding levels, efficiency, cost and effects.

Funding is a percentage of baseline (100%) clamped to [50, 200].
Efficiency is linear in funding; secondary effects scale with
``(funding / 100) ** 0.7`` so over-funding has diminishing returns and
modest under-funding is penalized gently.

A budget change replaces the whole ServiceBudget record, so readers see
either the old or the new funding state, never a mix.
"""

from __future__ import annotations

import dataclasses
import logging
import math
from typing import Iterable

from citycore.models.services import ServiceBudget
from citycore.util import constants as c
from citycore.util.effects import HAPPINESS, SERVICE_EFFECT_KEYS

log = logging.getLogger(__name__)


def clamp_budget(percent: float) -> float:
    return max(c.MIN_BUDGET_PERCENT, min(c.MAX_BUDGET_PERCENT, percent))


def efficiency_for(percent: float) -> float:
    """Efficiency score for a funding percentage, clamped to [0, 100]."""
    multiplier = percent / 100
    raw = c.BASE_EFFICIENCY + (multiplier - 0.5) * c.EFFICIENCY_SLOPE
    return min(c.MAX_EFFICIENCY, max(0.0, raw))


def happiness_delta_for(percent: float) -> int:
    """Happiness penalty below 80%, bonus above 120%, zero in between."""
    if percent < c.UNDERFUND_THRESHOLD:
        return -c.UNDERFUND_PENALTY * math.floor((c.UNDERFUND_THRESHOLD - percent) / c.UNDERFUND_STEP)
    if percent > c.OVERFUND_THRESHOLD:
        return c.OVERFUND_BONUS * math.floor((percent - c.OVERFUND_THRESHOLD) / c.OVERFUND_STEP)
    return 0


def quality_factor(percent: float) -> float:
    return (percent / 100) ** c.QUALITY_EXPONENT


def with_budget(service: ServiceBudget, new_percent: float) -> ServiceBudget:
    """Return a copy of ``service`` funded at ``new_percent`` (clamped)."""
    percent = clamp_budget(new_percent)
    multiplier = percent / 100
    effects = dict(service.effects)
    effects[HAPPINESS] = float(happiness_delta_for(percent))
    return dataclasses.replace(
        service,
        current_budget=percent,
        efficiency=efficiency_for(percent),
        effects=effects,
        maintenance_multiplier=multiplier,
        quality_multiplier=multiplier,
    )


def compute_service_effects(services: Iterable[ServiceBudget]) -> dict[str, float]:
    """Quality-weighted sum of declared effects across services.

    Every key of SERVICE_EFFECT_KEYS is present in the result.
    """
    totals = {key: 0.0 for key in SERVICE_EFFECT_KEYS}
    for service in services:
        factor = quality_factor(service.current_budget)
        for key in SERVICE_EFFECT_KEYS:
            magnitude = service.effects.get(key)
            if magnitude:
                totals[key] += magnitude * factor
    return totals


class ServiceBudgetLedger:
    """Mutations and queries over a city's service budgets.

    Args:
        services: The city's service list; entries are replaced in place.
    """

    def __init__(self, services: list[ServiceBudget]) -> None:
        self._services = services

    @property
    def services(self) -> list[ServiceBudget]:
        return self._services

    def get(self, service_id: str) -> ServiceBudget | None:
        for service in self._services:
            if service.id == service_id:
                return service
        return None

    def update_budget(self, service_id: str, new_percent: float) -> ServiceBudget | None:
        """Refund a service. Returns the new record, or None for an unknown id."""
        for index, service in enumerate(self._services):
            if service.id == service_id:
                updated = with_budget(service, new_percent)
                self._services[index] = updated
                log.info("Service %s funded at %.0f%% (efficiency %.1f)",
                         service_id, updated.current_budget, updated.efficiency)
                return updated
        log.debug("update_budget: unknown service %r ignored", service_id)
        return None

    def daily_cost(self, service_id: str) -> float:
        service = self.get(service_id)
        return service.daily_cost if service else 0.0

    def total_cost(self) -> float:
        """Daily cost of all services at their current funding."""
        return sum(s.daily_cost for s in self._services)

    def compute_effects(self) -> dict[str, float]:
        return compute_service_effects(self._services)
