"""City model — one player's complete simulation state.

A CityState is the explicit context object every engine operation receives.
It holds the clock, weather, ledgers, owned upgrades, buildings and bills.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from citycore.models.bill import Bill
from citycore.models.building import Building
from citycore.models.clock import ClockState, TimeOfDay
from citycore.models.services import ServiceBudget
from citycore.models.tax import TaxPolicy
from citycore.models.weather import WeatherState
from citycore.util.constants import (
    DEFAULT_DAYS_UNTIL_BILL,
    DEFAULT_ENERGY_RATE,
    STARTING_COINS,
)


@dataclass
class CityState:
    """Complete state of a player's city.

    Attributes:
        day: Game day counter, starting at 1.
        level: Player level (gates upgrades, boosts daily income).
        coins: Current treasury.
        clock: Hour/minute counters and pause flag.
        weather: Current weather.
        weather_forecast: Rolling forecast, 6 slots once initialized.
        tax_policies: Tax policy ledger.
        service_budgets: Service budget ledger.
        owned_upgrades: IDs of purchased infrastructure upgrades.
        buildings: Placed buildings (owned by the grid collaborator).
        bills: Issued bills, paid and unpaid.
        energy_rate: Coins per energy unit on energy bills.
        total_energy_usage: Energy units drawn by all buildings.
        last_bill_day: Day the last energy bill was issued.
        days_until_bill: Countdown to the next energy bill.
    """

    day: int = 1
    level: int = 1
    coins: float = STARTING_COINS
    clock: ClockState = field(default_factory=ClockState)
    weather: WeatherState = WeatherState.SUNNY
    weather_forecast: list[WeatherState] = field(default_factory=list)
    tax_policies: list[TaxPolicy] = field(default_factory=list)
    service_budgets: list[ServiceBudget] = field(default_factory=list)
    owned_upgrades: set[str] = field(default_factory=set)
    buildings: list[Building] = field(default_factory=list)
    bills: list[Bill] = field(default_factory=list)
    energy_rate: float = DEFAULT_ENERGY_RATE
    total_energy_usage: float = 0.0
    last_bill_day: int = 0
    days_until_bill: int = DEFAULT_DAYS_UNTIL_BILL

    # -- Helpers ---------------------------------------------------------

    @property
    def time_of_day(self) -> TimeOfDay:
        return self.clock.time_of_day

    def get_policy(self, policy_id: str) -> TaxPolicy | None:
        """Look up a tax policy by id."""
        for policy in self.tax_policies:
            if policy.id == policy_id:
                return policy
        return None

    def get_service(self, service_id: str) -> ServiceBudget | None:
        """Look up a service budget by id."""
        for service in self.service_budgets:
            if service.id == service_id:
                return service
        return None
