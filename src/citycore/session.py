"""City session — one player's city plus the services that act on it.

Wiring order:
1. Load configuration (game constants, catalogs)
2. Build or restore the CityState
3. Create engine services bound to that city
4. Wire the event bus (clock → weather, clock → day cycle)
5. Seed the weather forecast

Nothing here is global: run as many sessions side by side as needed.

Usage:
    config = load_configuration("config")
    session = create_session(config=config, rng=random.Random(7))
    session.clock.tick()
    print(session.budget())
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Optional

from citycore.engine.budget_aggregator import BudgetAggregator
from citycore.engine.clock_service import ClockService
from citycore.engine.day_cycle import DayCycleService
from citycore.engine.game_loop import GameLoop
from citycore.engine.service_ledger import ServiceBudgetLedger
from citycore.engine.tax_ledger import TaxLedger
from citycore.engine.upgrade_catalog import UpgradeCatalog
from citycore.engine.weather_service import WeatherService
from citycore.loaders.catalog_loader import Catalogs, load_catalogs
from citycore.loaders.game_config_loader import GameConfig, load_game_config
from citycore.models.budget import CityBudget, CityBudgetSystem
from citycore.models.city import CityState
from citycore.models.clock import ClockState
from citycore.models.services import ServiceBudget
from citycore.persistence.state_load import deserialize_city
from citycore.persistence.state_save import serialize_city
from citycore.util.events import EventBus

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Container for all loaded configuration
# ---------------------------------------------------------------------------


@dataclass
class Configuration:
    """Holds all data loaded from config files."""

    game: GameConfig = field(default_factory=GameConfig)
    catalogs: Catalogs = field(default_factory=Catalogs)


def load_configuration(config_dir: str = "config") -> Configuration:
    """Load game constants and catalogs from ``config_dir``."""
    log.info("Loading configuration …")
    game_cfg = load_game_config(f"{config_dir}/game.yaml")
    catalogs = load_catalogs(config_dir)
    return Configuration(game=game_cfg, catalogs=catalogs)


def new_city(config: Configuration) -> CityState:
    """A fresh city seeded from the catalogs."""
    gc = config.game
    return CityState(
        coins=gc.starting_coins,
        clock=ClockState(hour=gc.starting_hour),
        tax_policies=config.catalogs.new_tax_policies(),
        service_budgets=config.catalogs.new_service_budgets(),
        energy_rate=gc.default_energy_rate,
        days_until_bill=gc.default_days_until_bill,
    )


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


@dataclass
class CitySession:
    """A city and every service bound to it."""

    city: CityState
    config: Configuration
    event_bus: EventBus
    clock: ClockService
    weather: WeatherService
    day_cycle: DayCycleService
    taxes: TaxLedger
    services: ServiceBudgetLedger
    upgrades: UpgradeCatalog
    budget_aggregator: BudgetAggregator
    game_loop: GameLoop

    # -- Budget ----------------------------------------------------------

    def budget(self) -> CityBudgetSystem:
        """Fresh budget snapshot."""
        return self.budget_aggregator.snapshot(self.city)

    def base_budget(self) -> CityBudget:
        return self.budget_aggregator.base_budget(self.city)

    def service_effects(self) -> dict[str, float]:
        return self.services.compute_effects()

    def tax_happiness_impact(self) -> float:
        return self.taxes.total_happiness_impact()

    # -- Ledger actions --------------------------------------------------

    def update_tax_rate(self, policy_id: str, rate: float) -> None:
        self.taxes.update_rate(policy_id, rate)

    def toggle_tax_policy(self, policy_id: str) -> None:
        self.taxes.toggle(policy_id)

    def update_service_budget(self, service_id: str, percent: float) -> Optional[ServiceBudget]:
        return self.services.update_budget(service_id, percent)

    def purchase_upgrade(self, upgrade_id: str) -> None:
        """Buy an upgrade with the city's coins.

        Raises:
            PurchaseError: The purchase was refused; coins and owned
                upgrades are unchanged.
        """
        self.city.coins = self.upgrades.purchase(
            upgrade_id, self.city.owned_upgrades, self.city.coins, self.city.level,
        )

    def pay_bill(self, bill_id: str) -> bool:
        return self.day_cycle.pay_bill(bill_id)

    # -- Snapshots -------------------------------------------------------

    def snapshot(self) -> dict[str, Any]:
        """The city in persistence snapshot shape."""
        return serialize_city(self.city)

    def close(self) -> None:
        """Stop the loop and unhook services from the bus."""
        self.game_loop.stop()
        self.weather.detach()
        self.day_cycle.detach()
        self.event_bus.clear()


def create_session(
    city: CityState | None = None,
    config: Configuration | None = None,
    rng: random.Random | None = None,
) -> CitySession:
    """Instantiate and wire all services for one city.

    Args:
        city: Existing city; a new one is seeded from the catalogs if None.
        config: Loaded configuration; pure defaults if None.
        rng: Weather random source; seeded from ``weather_seed`` if None.
    """
    config = config or Configuration()
    gc = config.game
    city = city if city is not None else new_city(config)
    if rng is None:
        rng = random.Random(gc.weather_seed)

    event_bus = EventBus()
    clock = ClockService(city.clock, event_bus, gc)
    weather = WeatherService(city, event_bus, rng, gc)
    day_cycle = DayCycleService(city, event_bus, gc)
    upgrades = UpgradeCatalog(event_bus)
    upgrades.load(config.catalogs.upgrades)

    weather.attach()
    day_cycle.attach()
    weather.ensure_forecast()

    session = CitySession(
        city=city,
        config=config,
        event_bus=event_bus,
        clock=clock,
        weather=weather,
        day_cycle=day_cycle,
        taxes=TaxLedger(city.tax_policies),
        services=ServiceBudgetLedger(city.service_budgets),
        upgrades=upgrades,
        budget_aggregator=BudgetAggregator(upgrades),
        game_loop=GameLoop(clock, gc),
    )
    log.info("Session created: day %d, %02d:%02d, %d buildings",
             city.day, city.clock.hour, city.clock.minute, len(city.buildings))
    return session


def restore_session(
    snapshot: dict[str, Any],
    config: Configuration | None = None,
    rng: random.Random | None = None,
) -> CitySession:
    """Create a session from a persistence snapshot."""
    config = config or Configuration()
    city = deserialize_city(snapshot, config.catalogs, config.game)
    return create_session(city, config, rng)
