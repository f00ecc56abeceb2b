"""State load — restores a city from a game snapshot.

Missing fields fall back to documented defaults (``energyRate = 2``,
``daysUntilBill = 5``, empty forecast, catalog policies and services);
a stored energy rate of 0 also gets the default.  Out-of-range rates and
budgets are clamped rather than rejected, and a clamped budget re-derives
the service fields that depend on it.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Type, TypeVar

import yaml

from citycore.engine.service_ledger import clamp_budget, with_budget
from citycore.engine.tax_ledger import clamp_rate
from citycore.loaders.catalog_loader import Catalogs
from citycore.loaders.game_config_loader import GameConfig
from citycore.models.bill import Bill
from citycore.models.building import Building
from citycore.models.city import CityState
from citycore.models.clock import ClockState
from citycore.models.services import ServiceBudget
from citycore.models.tax import TaxCategory, TaxPolicy
from citycore.models.weather import WeatherState
from citycore.persistence.state_save import DEFAULT_STATE_PATH
from citycore.util.constants import MAX_EFFICIENCY

log = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _enum(enum_cls: Type[E], value: Any, default: E) -> E:
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        log.warning("Unknown %s %r — using %s", enum_cls.__name__, value, default.value)
        return default


# ===================================================================
# Public API
# ===================================================================


def deserialize_city(
    d: dict[str, Any],
    catalogs: Catalogs | None = None,
    game_config: GameConfig | None = None,
) -> CityState:
    """Build a city from a snapshot dict.

    Args:
        d: Snapshot in the shape produced by ``serialize_city``.
        catalogs: Seeds tax policies and service budgets absent from ``d``.
        game_config: Supplies defaults for missing scalar fields.
    """
    cfg = game_config or GameConfig()
    catalogs = catalogs or Catalogs()

    hour = int(d.get("gameTime", cfg.starting_hour)) % 24
    minute = int(d.get("gameMinutes", 0)) % 60
    clock = ClockState(hour=hour, minute=minute, paused=bool(d.get("timePaused", False)))

    # timeOfDay is derived from the hour; a stored value is not trusted
    stored_tod = d.get("timeOfDay")
    if stored_tod is not None and stored_tod != clock.time_of_day.value:
        log.debug("Snapshot timeOfDay %r disagrees with hour %d — recomputed", stored_tod, hour)

    forecast: list[WeatherState] = []
    for value in d.get("weatherForecast") or []:
        try:
            forecast.append(WeatherState(value))
        except ValueError:
            log.warning("Dropping unknown forecast entry %r", value)

    if "taxPolicies" in d:
        policies = [_deserialize_policy(p) for p in d["taxPolicies"] or []]
    else:
        policies = catalogs.new_tax_policies()

    if "serviceBudgets" in d:
        services = [_deserialize_service(s) for s in d["serviceBudgets"] or []]
    else:
        services = catalogs.new_service_budgets()

    return CityState(
        day=int(d.get("day", 1)),
        level=int(d.get("level", 1)),
        coins=float(d.get("coins", cfg.starting_coins)),
        clock=clock,
        weather=_enum(WeatherState, d.get("weather"), WeatherState.SUNNY),
        weather_forecast=forecast,
        tax_policies=policies,
        service_budgets=services,
        owned_upgrades=set(d.get("infrastructureUpgrades") or []),
        buildings=[_deserialize_building(b) for b in d.get("buildings") or []],
        bills=[_deserialize_bill(b) for b in d.get("bills") or []],
        # a zero rate is treated as unset
        energy_rate=float(d.get("energyRate") or cfg.default_energy_rate),
        total_energy_usage=float(d.get("totalEnergyUsage", 0.0)),
        last_bill_day=int(d.get("lastBillDay", 0)),
        days_until_bill=int(d.get("daysUntilBill", cfg.default_days_until_bill)),
    )


async def load_city(
    path: str | Path = DEFAULT_STATE_PATH,
    catalogs: Catalogs | None = None,
    game_config: GameConfig | None = None,
) -> Optional[CityState]:
    """Load a city from a YAML file written by ``save_city``.

    Returns None if the file does not exist, cannot be parsed, or holds
    fields that cannot be converted.
    """
    state_file = Path(path)
    if not state_file.exists():
        log.info("No city file found at %s", path)
        return None

    try:
        raw = yaml.safe_load(state_file.read_text(encoding="utf-8"))
    except Exception:
        log.exception("Failed to parse city file %s", path)
        return None

    if not isinstance(raw, dict) or not isinstance(raw.get("city"), dict):
        log.warning("City file %s has unexpected format", path)
        return None

    meta = raw.get("meta", {})
    log.info("Restoring city from %s (saved at %s, version %s)",
             path, meta.get("saved_at", "?"), meta.get("version", "?"))
    try:
        return deserialize_city(raw["city"], catalogs, game_config)
    except Exception:
        log.exception("City file %s has malformed fields", path)
        return None


# ===================================================================
# Ledgers & sub-models
# ===================================================================

def _deserialize_policy(d: dict[str, Any]) -> TaxPolicy:
    return TaxPolicy(
        id=d["id"],
        name=d.get("name", d["id"]),
        rate=clamp_rate(float(d.get("rate", 0))),
        category=_enum(TaxCategory, d.get("category"), TaxCategory.RESIDENTIAL),
        happiness_impact=float(d.get("happinessImpact", 0)),
        revenue_multiplier=float(d.get("revenueMultiplier", 1.0)),
        enabled=bool(d.get("enabled", True)),
        description=d.get("description", ""),
    )


def _deserialize_service(d: dict[str, Any]) -> ServiceBudget:
    stored = float(d.get("currentBudget", 100))
    service = ServiceBudget(
        id=d["id"],
        name=d.get("name", d["id"]),
        category=d.get("category", ""),
        base_cost=float(d.get("baseCost", 0)),
        current_budget=stored,
        efficiency=min(MAX_EFFICIENCY, max(0.0, float(d.get("efficiency", 0)))),
        coverage=float(d.get("coverage", 0)),
        effects={_snake(k): float(v) for k, v in (d.get("effects") or {}).items()},
        maintenance_multiplier=float(d.get("maintenanceMultiplier", 1.0)),
        quality_multiplier=float(d.get("qualityMultiplier", 1.0)),
        description=d.get("description", ""),
    )
    # an out-of-range budget invalidates every field derived from it
    if clamp_budget(stored) != stored:
        log.warning("Service %s budget %.0f%% out of range — re-derived", service.id, stored)
        return with_budget(service, stored)
    return service


def _deserialize_building(d: dict[str, Any]) -> Building:
    return Building(
        id=d["id"],
        type=d.get("type", ""),
        income=float(d.get("income") or 0),
        cost=float(d.get("cost") or 0),
        name=d.get("name", ""),
        energy_usage=float(d.get("energyUsage") or 0),
    )


def _deserialize_bill(d: dict[str, Any]) -> Bill:
    return Bill(
        id=d["id"],
        name=d.get("name", ""),
        amount=float(d.get("amount", 0)),
        day_due=int(d.get("dayDue", 0)),
        is_paid=bool(d.get("isPaid", False)),
        icon=d.get("icon", ""),
    )
