"""Upgrade catalog — infrastructure upgrade database.

Loads upgrade definitions from config and provides lookup, availability
gating, purchasing and maintenance totals.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from citycore.models.upgrades import InfrastructureUpgrade
from citycore.util.errors import (
    AlreadyOwned,
    InsufficientFunds,
    LevelTooLow,
    PrerequisiteNotMet,
    UnknownUpgrade,
)
from citycore.util.events import UpgradePurchased

if TYPE_CHECKING:
    from citycore.util.events import EventBus

log = logging.getLogger(__name__)


def is_available(upgrade: InfrastructureUpgrade, owned: set[str], level: int) -> bool:
    """Not yet owned, level reached, and prerequisite (if any) owned."""
    if upgrade.id in owned:
        return False
    if level < upgrade.unlock_level:
        return False
    return upgrade.prerequisite is None or upgrade.prerequisite in owned


class UpgradeCatalog:
    """Infrastructure upgrade database — read-only after initialization.

    Attributes:
        upgrades: All upgrade definitions keyed by id.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        self.upgrades: dict[str, InfrastructureUpgrade] = {}
        self._events = event_bus

    def load(self, upgrades: list[InfrastructureUpgrade]) -> None:
        """Load upgrade definitions into the catalog."""
        self.upgrades = {u.id: u for u in upgrades}

    def get(self, upgrade_id: str) -> InfrastructureUpgrade | None:
        """Look up an upgrade by id."""
        return self.upgrades.get(upgrade_id)

    def get_by_category(self, category: str) -> list[InfrastructureUpgrade]:
        return [u for u in self.upgrades.values() if u.category == category]

    def available_upgrades(self, owned: set[str], level: int) -> list[InfrastructureUpgrade]:
        """Return all upgrades that could be purchased right now (ignoring price)."""
        return [u for u in self.upgrades.values() if is_available(u, owned, level)]

    def owned_upgrades(self, owned: Iterable[str]) -> list[InfrastructureUpgrade]:
        """Definitions of the owned upgrades; unknown ids are skipped."""
        return [self.upgrades[uid] for uid in owned if uid in self.upgrades]

    def maintenance_cost(self, owned: Iterable[str]) -> float:
        """Daily upkeep of all owned upgrades."""
        return sum(u.maintenance_cost for u in self.owned_upgrades(owned))

    def get_effects(self, owned: Iterable[str]) -> dict[str, float]:
        """Accumulated permanent effects of the owned upgrades."""
        effects: dict[str, float] = {}
        for upgrade in self.owned_upgrades(owned):
            for key, value in upgrade.effects.items():
                effects[key] = effects.get(key, 0.0) + value
        return effects

    def purchase(self, upgrade_id: str, owned: set[str], coins: float, level: int) -> float:
        """Buy an upgrade.

        Adds ``upgrade_id`` to ``owned`` and returns the coins left over.
        Build time is informational; scheduling completion is up to the
        caller.

        Raises:
            UnknownUpgrade, AlreadyOwned, LevelTooLow, PrerequisiteNotMet,
            InsufficientFunds: ``owned`` is left unchanged.
        """
        upgrade = self.upgrades.get(upgrade_id)
        if upgrade is None:
            raise UnknownUpgrade(upgrade_id)
        if upgrade_id in owned:
            raise AlreadyOwned(upgrade_id)
        if level < upgrade.unlock_level:
            raise LevelTooLow(upgrade_id, upgrade.unlock_level, level)
        if upgrade.prerequisite is not None and upgrade.prerequisite not in owned:
            raise PrerequisiteNotMet(upgrade_id, upgrade.prerequisite)
        if coins < upgrade.cost:
            raise InsufficientFunds(upgrade.cost, coins)

        owned.add(upgrade_id)
        log.info("Purchased upgrade %s for %s coins (build time %d days)",
                 upgrade_id, upgrade.cost, upgrade.build_time)
        if self._events is not None:
            self._events.emit(UpgradePurchased(upgrade_id=upgrade_id, cost=upgrade.cost))
        return coins - upgrade.cost
