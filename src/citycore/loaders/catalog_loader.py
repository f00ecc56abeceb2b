"""Catalog loader — parses the fixed city catalogs from YAML.

Supports two modes:
  1. Directory with per-catalog files: tax_policies.yaml,
     service_budgets.yaml, infrastructure.yaml
  2. Single file with all three sections as top-level keys

Each file maps an id to its attributes.  Policies and services are the
starting state of a new city; upgrades are immutable definitions.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from citycore.models.services import ServiceBudget
from citycore.models.tax import TaxCategory, TaxPolicy
from citycore.models.upgrades import InfrastructureUpgrade

log = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = "config"

# Section keys and the file stems they map to.
_SECTIONS = ("tax_policies", "service_budgets", "infrastructure")


@dataclass
class Catalogs:
    """Everything a new city is seeded from."""

    tax_policies: list[TaxPolicy] = field(default_factory=list)
    service_budgets: list[ServiceBudget] = field(default_factory=list)
    upgrades: list[InfrastructureUpgrade] = field(default_factory=list)

    def new_tax_policies(self) -> list[TaxPolicy]:
        """Independent copies of the catalog policies for a new city."""
        return [dataclasses.replace(p) for p in self.tax_policies]

    def new_service_budgets(self) -> list[ServiceBudget]:
        """Independent copies of the catalog services for a new city."""
        return [dataclasses.replace(s, effects=dict(s.effects)) for s in self.service_budgets]


def _parse_tax_policies(section: dict) -> list[TaxPolicy]:
    policies: list[TaxPolicy] = []
    for pid, attrs in (section or {}).items():
        if not isinstance(attrs, dict):
            continue
        policies.append(TaxPolicy(
            id=pid,
            name=attrs.get("name", pid),
            rate=float(attrs.get("rate", 0)),
            category=TaxCategory(attrs.get("category", "residential")),
            happiness_impact=float(attrs.get("happiness_impact", 0)),
            revenue_multiplier=float(attrs.get("revenue_multiplier", 1.0)),
            enabled=bool(attrs.get("enabled", True)),
            description=attrs.get("description", ""),
        ))
    return policies


def _parse_service_budgets(section: dict) -> list[ServiceBudget]:
    services: list[ServiceBudget] = []
    for sid, attrs in (section or {}).items():
        if not isinstance(attrs, dict):
            continue
        services.append(ServiceBudget(
            id=sid,
            name=attrs.get("name", sid),
            category=attrs.get("category", ""),
            base_cost=float(attrs.get("base_cost", 0)),
            current_budget=float(attrs.get("current_budget", 100)),
            efficiency=float(attrs.get("efficiency", 0)),
            coverage=float(attrs.get("coverage", 0)),
            effects={k: float(v) for k, v in (attrs.get("effects") or {}).items()},
            maintenance_multiplier=float(attrs.get("maintenance_multiplier", 1.0)),
            quality_multiplier=float(attrs.get("quality_multiplier", 1.0)),
            description=attrs.get("description", ""),
        ))
    return services


def _parse_upgrades(section: dict) -> list[InfrastructureUpgrade]:
    upgrades: list[InfrastructureUpgrade] = []
    for uid, attrs in (section or {}).items():
        if not isinstance(attrs, dict):
            continue
        upgrades.append(InfrastructureUpgrade(
            id=uid,
            name=attrs.get("name", uid),
            category=attrs.get("category", ""),
            cost=float(attrs.get("cost", 0)),
            maintenance_cost=float(attrs.get("maintenance_cost", 0)),
            effects={k: float(v) for k, v in (attrs.get("effects") or {}).items()},
            prerequisite=attrs.get("prerequisite"),
            unlock_level=int(attrs.get("unlock_level", 1)),
            build_time=int(attrs.get("build_time", 0)),
            description=attrs.get("description", ""),
        ))
    return upgrades


def load_catalogs(path: str | Path = DEFAULT_CATALOG_PATH) -> Catalogs:
    """Load all catalogs from YAML file(s).

    Args:
        path: Either a directory containing per-catalog YAML files or a
              single YAML file with all sections.

    Returns:
        A :class:`Catalogs` container.
    """
    path = Path(path)
    sections: dict[str, dict] = {}

    if path.is_dir():
        for key in _SECTIONS:
            section_file = path / f"{key}.yaml"
            if not section_file.exists():
                log.warning("Catalog file %s missing — section left empty", section_file)
                continue
            with section_file.open() as f:
                sections[key] = yaml.safe_load(f) or {}
    else:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
        for key in _SECTIONS:
            sections[key] = data.get(key, {}) or {}

    catalogs = Catalogs(
        tax_policies=_parse_tax_policies(sections.get("tax_policies", {})),
        service_budgets=_parse_service_budgets(sections.get("service_budgets", {})),
        upgrades=_parse_upgrades(sections.get("infrastructure", {})),
    )
    log.info("Loaded catalogs from %s: %d tax policies, %d services, %d upgrades",
             path, len(catalogs.tax_policies), len(catalogs.service_budgets),
             len(catalogs.upgrades))
    return catalogs
