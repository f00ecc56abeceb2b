"""Day cycle service — what happens when the game day rolls over.

Responsibilities:
- Daily building income with the per-level bonus
- Day counter
- Energy bills every few days, and paying them

Triggered by the clock's DayRolledOver event. No I/O.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from citycore.models.bill import Bill
from citycore.util import constants as c
from citycore.util.errors import InsufficientFunds
from citycore.util.events import BillGenerated, BillPaid, DayEnded, DayRolledOver

if TYPE_CHECKING:
    from citycore.loaders.game_config_loader import GameConfig
    from citycore.models.city import CityState
    from citycore.util.events import EventBus

log = logging.getLogger(__name__)

ENERGY_BILL_NAME = "Energy Bill"
ENERGY_BILL_ICON = "Energy"


def total_energy_usage(city: CityState) -> float:
    return sum(b.energy_usage for b in city.buildings)


class DayCycleService:
    """Service for day rollover and bills.

    Args:
        city: City whose day, coins and bills are updated.
        event_bus: Source of DayRolledOver; receives DayEnded, BillGenerated
            and BillPaid.
    """

    def __init__(self, city: CityState, event_bus: EventBus,
                 game_config: GameConfig | None = None) -> None:
        self._city = city
        self._events = event_bus

        if game_config is not None:
            self._level_bonus = game_config.level_income_bonus
            self._bill_interval = game_config.bill_interval_days
            self._bill_due_offset = game_config.bill_due_offset_days
        else:
            self._level_bonus = c.LEVEL_INCOME_BONUS
            self._bill_interval = c.BILL_INTERVAL_DAYS
            self._bill_due_offset = c.BILL_DUE_OFFSET_DAYS

    def attach(self) -> None:
        self._events.on(DayRolledOver, self.on_day_rolled_over)

    def detach(self) -> None:
        self._events.off(DayRolledOver, self.on_day_rolled_over)

    def on_day_rolled_over(self, event: DayRolledOver) -> None:
        self.end_day()

    # -- Day end ---------------------------------------------------------

    def daily_income(self) -> int:
        """Building income scaled by the level bonus, rounded down."""
        income = sum(b.income for b in self._city.buildings)
        return math.floor(income * (1 + self._city.level * self._level_bonus))

    def end_day(self) -> None:
        """Collect income, advance the day counter and issue bills."""
        city = self._city
        income = self.daily_income()
        city.coins += income

        previous_day = city.day
        city.day += 1
        city.total_energy_usage = total_energy_usage(city)

        if city.day % self._bill_interval == 0:
            self._generate_energy_bill(previous_day)

        remaining = city.day % self._bill_interval
        city.days_until_bill = remaining if remaining else self._bill_interval

        log.info("Day %d began: +%d coins (balance %.1f)", city.day, income, city.coins)
        self._events.emit(DayEnded(new_day=city.day, income=income))

    # -- Bills -----------------------------------------------------------

    def _generate_energy_bill(self, issued_on: int) -> Bill | None:
        city = self._city
        amount = max(0, round(city.total_energy_usage * city.energy_rate))
        if amount <= 0:
            return None

        bill = Bill(
            id=f"energy_{city.day}",
            name=ENERGY_BILL_NAME,
            amount=float(amount),
            day_due=issued_on + self._bill_due_offset,
            is_paid=False,
            icon=ENERGY_BILL_ICON,
        )
        city.bills.append(bill)
        city.last_bill_day = city.day
        log.info("Energy bill %s: %d coins due on day %d", bill.id, amount, bill.day_due)
        self._events.emit(BillGenerated(bill_id=bill.id, amount=bill.amount, day_due=bill.day_due))
        return bill

    def due_bills(self) -> list[Bill]:
        """Unpaid bills due today or earlier."""
        return [b for b in self._city.bills if not b.is_paid and b.day_due <= self._city.day]

    def pay_bill(self, bill_id: str) -> bool:
        """Pay a bill. Returns False for unknown or already paid bills.

        Raises:
            InsufficientFunds: Not enough coins; the bill stays unpaid.
        """
        city = self._city
        bill = next((b for b in city.bills if b.id == bill_id), None)
        if bill is None or bill.is_paid:
            log.debug("pay_bill: %r unknown or already paid", bill_id)
            return False
        if city.coins < bill.amount:
            raise InsufficientFunds(bill.amount, city.coins)

        city.coins -= bill.amount
        bill.is_paid = True
        log.info("Paid %s: %.0f coins", bill.name, bill.amount)
        self._events.emit(BillPaid(bill_id=bill.id, amount=bill.amount))
        return True
