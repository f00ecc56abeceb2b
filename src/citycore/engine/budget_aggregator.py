"""Budget aggregator — one consistent budget snapshot per request.

Combines building income, tax revenue, service costs and upgrade upkeep.
Nothing here is cached: every call recomputes from the ledgers, so a
snapshot can never drift from the state it describes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

from citycore.engine.tax_ledger import compute_tax_revenue
from citycore.models.budget import BudgetHealth, CityBudget, CityBudgetSystem
from citycore.util import constants as c

if TYPE_CHECKING:
    from citycore.engine.upgrade_catalog import UpgradeCatalog
    from citycore.models.building import Building
    from citycore.models.city import CityState
    from citycore.models.services import ServiceBudget
    from citycore.models.tax import TaxPolicy


def classify_budget_health(daily_balance: float) -> BudgetHealth:
    if daily_balance >= 100:
        return BudgetHealth.EXCELLENT
    if daily_balance >= 50:
        return BudgetHealth.GOOD
    if daily_balance >= 0:
        return BudgetHealth.FAIR
    if daily_balance >= -50:
        return BudgetHealth.POOR
    return BudgetHealth.CRITICAL


def emergency_fund(balance: float) -> float:
    return max(0.0, balance * c.EMERGENCY_FUND_DAYS)


def building_income(buildings: Iterable[Building]) -> float:
    return sum(b.income for b in buildings)


def calculate_city_budget(
    buildings: Sequence[Building],
    policies: Iterable[TaxPolicy],
    maintenance_costs: float = 0.0,
) -> CityBudget:
    """Revenue-side budget with health tier and emergency fund."""
    income = building_income(buildings)
    taxes = compute_tax_revenue(buildings, policies)
    total_revenue = income + taxes
    balance = total_revenue - maintenance_costs
    return CityBudget(
        total_revenue=total_revenue,
        total_expenses=maintenance_costs,
        maintenance_costs=maintenance_costs,
        tax_revenue=taxes,
        building_income=income,
        balance=balance,
        daily_balance=balance,
        emergency_fund=emergency_fund(balance),
        budget_health=classify_budget_health(balance),
    )


def citizen_satisfaction(services: Sequence[ServiceBudget]) -> float:
    """Mean service efficiency capped at 100; 0 for a city without services."""
    if not services:
        return 0.0
    average = sum(s.efficiency for s in services) / len(services)
    return min(c.MAX_SATISFACTION, average)


def infrastructure_health(owned_count: int) -> float:
    return min(c.MAX_INFRASTRUCTURE_HEALTH,
               c.BASE_INFRASTRUCTURE_HEALTH + c.HEALTH_PER_UPGRADE * owned_count)


def calculate_city_budget_system(
    buildings: Sequence[Building],
    policies: Iterable[TaxPolicy],
    services: Sequence[ServiceBudget],
    owned_upgrades: Iterable[str],
    catalog: UpgradeCatalog,
) -> CityBudgetSystem:
    """Full budget snapshot from buildings, policies, services and upgrades."""
    owned = list(owned_upgrades)
    base = calculate_city_budget(buildings, policies)

    service_costs = sum(s.daily_cost for s in services)
    infrastructure_costs = catalog.maintenance_cost(owned)
    total_expenses = service_costs + infrastructure_costs
    surplus = base.total_revenue - total_expenses

    return CityBudgetSystem(
        total_budget=base.total_revenue,
        allocated_budget=total_expenses,
        unallocated_budget=max(0.0, surplus),
        tax_revenue=base.tax_revenue,
        building_income=base.building_income,
        total_expenses=total_expenses,
        budget_surplus=surplus,
        citizen_satisfaction=citizen_satisfaction(services),
        infrastructure_health=infrastructure_health(len(owned)),
    )


class BudgetAggregator:
    """Computes budget snapshots for a city.

    Args:
        catalog: Upgrade definitions used to price owned upgrades.
    """

    def __init__(self, catalog: UpgradeCatalog) -> None:
        self._catalog = catalog

    def snapshot(self, city: CityState) -> CityBudgetSystem:
        return calculate_city_budget_system(
            city.buildings,
            city.tax_policies,
            city.service_budgets,
            city.owned_upgrades,
            self._catalog,
        )

    def base_budget(self, city: CityState) -> CityBudget:
        """Revenue-side budget, with service and upgrade costs as expenses."""
        expenses = (sum(s.daily_cost for s in city.service_budgets)
                    + self._catalog.maintenance_cost(city.owned_upgrades))
        return calculate_city_budget(city.buildings, city.tax_policies, expenses)
