"""Tax policy ledger — policy configuration and tax revenue.

Rates are clamped to [0, 30]; unknown policy ids are ignored so stale
references from the presentation layer never fail.
"""

from __future__ import annotations

import logging
from typing import Iterable

from citycore.models.building import Building
from citycore.models.tax import TaxCategory, TaxPolicy
from citycore.util.constants import LUXURY_COST_THRESHOLD, MAX_TAX_RATE, MIN_TAX_RATE

log = logging.getLogger(__name__)

RESIDENTIAL_IDS = frozenset({"house", "apartment", "condo"})
COMMERCIAL_IDS = frozenset({"cafe", "fancy_restaurant", "shopping_mall", "tech_hub", "office_tower"})
INDUSTRIAL_TYPE = "factory"


def clamp_rate(rate: float) -> float:
    return max(MIN_TAX_RATE, min(MAX_TAX_RATE, rate))


def count_building_categories(buildings: Iterable[Building]) -> dict[TaxCategory, int]:
    """Count buildings per tax category.

    A building falls into at most one of residential, commercial and
    industrial.  Residential buildings costing more than the luxury
    threshold are counted as luxury as well.
    """
    counts = {category: 0 for category in TaxCategory}
    for building in buildings:
        if building.id in RESIDENTIAL_IDS:
            counts[TaxCategory.RESIDENTIAL] += 1
            if building.cost > LUXURY_COST_THRESHOLD:
                counts[TaxCategory.LUXURY] += 1
        elif building.id in COMMERCIAL_IDS:
            counts[TaxCategory.COMMERCIAL] += 1
        elif building.type == INDUSTRIAL_TYPE:
            counts[TaxCategory.INDUSTRIAL] += 1
    return counts


def compute_tax_revenue(buildings: Iterable[Building], policies: Iterable[TaxPolicy]) -> float:
    """Sum count(category) * rate * revenue_multiplier over enabled policies."""
    counts = count_building_categories(buildings)
    return sum(
        counts[policy.category] * policy.rate * policy.revenue_multiplier
        for policy in policies
        if policy.enabled
    )


class TaxLedger:
    """Mutations and queries over a city's tax policies.

    Args:
        policies: The city's policy list; updated in place.
    """

    def __init__(self, policies: list[TaxPolicy]) -> None:
        self._policies = policies

    @property
    def policies(self) -> list[TaxPolicy]:
        return self._policies

    def get(self, policy_id: str) -> TaxPolicy | None:
        for policy in self._policies:
            if policy.id == policy_id:
                return policy
        return None

    def update_rate(self, policy_id: str, new_rate: float) -> None:
        """Set a policy's rate, clamped to [0, 30]."""
        policy = self.get(policy_id)
        if policy is None:
            log.debug("update_rate: unknown tax policy %r ignored", policy_id)
            return
        policy.rate = clamp_rate(new_rate)

    def toggle(self, policy_id: str) -> None:
        """Flip a policy's enabled flag."""
        policy = self.get(policy_id)
        if policy is None:
            log.debug("toggle: unknown tax policy %r ignored", policy_id)
            return
        policy.enabled = not policy.enabled
        log.info("Tax policy %s %s", policy_id, "enabled" if policy.enabled else "disabled")

    def compute_revenue(self, buildings: Iterable[Building]) -> float:
        return compute_tax_revenue(buildings, self._policies)

    def total_happiness_impact(self) -> float:
        """Sum of happiness impacts of enabled policies."""
        return sum(p.happiness_impact for p in self._policies if p.enabled)
