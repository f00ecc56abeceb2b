"""Derived budget snapshots.

Both classes are recomputed from the ledgers on every request and are
never stored on the city.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BudgetHealth(Enum):
    """Informational tier of the daily balance."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    CRITICAL = "critical"


@dataclass(frozen=True)
class CityBudget:
    """Revenue side of the budget: building income plus taxes.

    Attributes:
        total_revenue: building_income + tax_revenue.
        total_expenses: The maintenance costs passed in.
        maintenance_costs: Same as total_expenses.
        tax_revenue: Revenue from enabled tax policies.
        building_income: Sum of building incomes.
        balance: total_revenue - total_expenses.
        daily_balance: Same as balance.
        emergency_fund: max(0, balance * 5).
        budget_health: Tier of ``daily_balance``.
    """

    total_revenue: float
    total_expenses: float
    maintenance_costs: float
    tax_revenue: float
    building_income: float
    balance: float
    daily_balance: float
    emergency_fund: float
    budget_health: BudgetHealth


@dataclass(frozen=True)
class CityBudgetSystem:
    """Full budget snapshot for presentation.

    Attributes:
        total_budget: Building income plus tax revenue.
        allocated_budget: Money committed to services and upkeep.
        unallocated_budget: Positive part of the surplus.
        tax_revenue: Revenue from enabled tax policies.
        building_income: Sum of building incomes.
        total_expenses: Service costs plus upgrade maintenance.
        budget_surplus: total_budget - total_expenses (negative = deficit).
        citizen_satisfaction: Mean service efficiency, capped at 100.
        infrastructure_health: 60 + 8 per owned upgrade, capped at 100.
    """

    total_budget: float
    allocated_budget: float
    unallocated_budget: float
    tax_revenue: float
    building_income: float
    total_expenses: float
    budget_surplus: float
    citizen_satisfaction: float
    infrastructure_health: float
