"""State save — serializes a city into the game snapshot shape.

The snapshot is the plain-dict document exchanged with the persistence
layer (camelCase keys).  ``save_city`` additionally writes it as YAML.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

import yaml

from citycore.models.bill import Bill
from citycore.models.building import Building
from citycore.models.city import CityState
from citycore.models.services import ServiceBudget
from citycore.models.tax import TaxPolicy
from citycore.models.upgrades import InfrastructureUpgrade

log = logging.getLogger(__name__)

# Default path for the state file (relative to working directory)
DEFAULT_STATE_PATH = "city.yaml"

SNAPSHOT_VERSION = 1


# ===================================================================
# Effect keys
# ===================================================================

def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def _camel_effects(effects: dict[str, float]) -> dict[str, float]:
    return {_camel(k): v for k, v in effects.items()}


# ===================================================================
# Public API
# ===================================================================


def serialize_city(city: CityState) -> dict[str, Any]:
    """Convert a city into the snapshot dict."""
    return {
        "day": city.day,
        "level": city.level,
        "coins": city.coins,
        "gameTime": city.clock.hour,
        "gameMinutes": city.clock.minute,
        "timePaused": city.clock.paused,
        "timeOfDay": city.time_of_day.value,
        "weather": city.weather.value,
        "weatherForecast": [w.value for w in city.weather_forecast],
        "taxPolicies": [_serialize_policy(p) for p in city.tax_policies],
        "serviceBudgets": [_serialize_service(s) for s in city.service_budgets],
        "infrastructureUpgrades": sorted(city.owned_upgrades),
        "buildings": [_serialize_building(b) for b in city.buildings],
        "bills": [_serialize_bill(b) for b in city.bills],
        "energyRate": city.energy_rate,
        "totalEnergyUsage": city.total_energy_usage,
        "lastBillDay": city.last_bill_day,
        "daysUntilBill": city.days_until_bill,
    }


async def save_city(city: CityState, path: str | Path = DEFAULT_STATE_PATH) -> None:
    """Write the city snapshot to a YAML file.

    The file is written to a temporary sibling first and then moved into
    place, so a crash never leaves a half-written snapshot.
    """
    state = {
        "meta": _serialize_meta(),
        "city": serialize_city(city),
    }

    out = Path(path)
    tmp = out.with_suffix(".yaml.tmp")
    try:
        tmp.write_text(
            yaml.dump(state, default_flow_style=False, allow_unicode=True, sort_keys=False),
            encoding="utf-8",
        )
        tmp.replace(out)
        log.info("City saved to %s (day %d)", path, city.day)
    except Exception:
        log.exception("Failed to save city to %s", path)
        if tmp.exists():
            tmp.unlink(missing_ok=True)
        raise


# ===================================================================
# Meta
# ===================================================================

def _serialize_meta() -> dict[str, Any]:
    return {
        "version": SNAPSHOT_VERSION,
        "saved_at": time.strftime("%Y-%m-%dT%H:%M:%S"),
        "saved_at_unix": time.time(),
    }


# ===================================================================
# Ledgers & sub-models
# ===================================================================

def _serialize_policy(p: TaxPolicy) -> dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "rate": p.rate,
        "category": p.category.value,
        "description": p.description,
        "happinessImpact": p.happiness_impact,
        "revenueMultiplier": p.revenue_multiplier,
        "enabled": p.enabled,
    }


def _serialize_service(s: ServiceBudget) -> dict[str, Any]:
    return {
        "id": s.id,
        "name": s.name,
        "category": s.category,
        "baseCost": s.base_cost,
        "currentBudget": s.current_budget,
        "efficiency": s.efficiency,
        "coverage": s.coverage,
        "description": s.description,
        "effects": _camel_effects(s.effects),
        "maintenanceMultiplier": s.maintenance_multiplier,
        "qualityMultiplier": s.quality_multiplier,
    }


def serialize_upgrade(u: InfrastructureUpgrade) -> dict[str, Any]:
    """Catalog entry in snapshot shape, for presentation cards."""
    d: dict[str, Any] = {
        "id": u.id,
        "name": u.name,
        "category": u.category,
        "cost": u.cost,
        "maintenanceCost": u.maintenance_cost,
        "description": u.description,
        "effects": _camel_effects(u.effects),
        "unlockLevel": u.unlock_level,
        "buildTime": u.build_time,
    }
    if u.prerequisite is not None:
        d["prerequisite"] = u.prerequisite
    return d


def _serialize_building(b: Building) -> dict[str, Any]:
    return {
        "id": b.id,
        "type": b.type,
        "name": b.name,
        "income": b.income,
        "cost": b.cost,
        "energyUsage": b.energy_usage,
    }


def _serialize_bill(b: Bill) -> dict[str, Any]:
    return {
        "id": b.id,
        "name": b.name,
        "amount": b.amount,
        "dayDue": b.day_due,
        "isPaid": b.is_paid,
        "icon": b.icon,
    }
