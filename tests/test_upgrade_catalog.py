"""Tests for UpgradeCatalog — availability gating, purchasing, maintenance."""

from __future__ import annotations

import pytest

from citycore.engine.upgrade_catalog import UpgradeCatalog, is_available
from citycore.models.upgrades import InfrastructureUpgrade
from citycore.util.errors import (
    AlreadyOwned,
    InsufficientFunds,
    LevelTooLow,
    PrerequisiteNotMet,
    PurchaseError,
    UnknownUpgrade,
)
from citycore.util.events import EventBus, UpgradePurchased


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_upgrades() -> list[InfrastructureUpgrade]:
    return [
        InfrastructureUpgrade(id="smart_grid", category="power", cost=2000,
                              maintenance_cost=100, unlock_level=3,
                              effects={"efficiency": 25, "pollution": -10}),
        InfrastructureUpgrade(id="renewable_energy", category="power", cost=3000,
                              maintenance_cost=80, prerequisite="smart_grid",
                              unlock_level=6,
                              effects={"efficiency": 35, "pollution": -25}),
        InfrastructureUpgrade(id="fiber_network", category="telecom", cost=1200,
                              maintenance_cost=50, unlock_level=5,
                              effects={"capacity": 40}),
    ]


def _make_catalog(event_bus: EventBus | None = None) -> UpgradeCatalog:
    catalog = UpgradeCatalog(event_bus)
    catalog.load(_make_upgrades())
    return catalog


# ---------------------------------------------------------------------------
# Availability
# ---------------------------------------------------------------------------

class TestIsAvailable:
    def test_level_gate(self):
        smart_grid = _make_catalog().get("smart_grid")
        assert not is_available(smart_grid, set(), level=2)
        assert is_available(smart_grid, set(), level=3)

    def test_prerequisite_gate(self):
        renewable = _make_catalog().get("renewable_energy")
        assert not is_available(renewable, set(), level=10)
        assert is_available(renewable, {"smart_grid"}, level=10)

    def test_owned_is_not_available(self):
        smart_grid = _make_catalog().get("smart_grid")
        assert not is_available(smart_grid, {"smart_grid"}, level=10)

    def test_available_upgrades_list(self):
        catalog = _make_catalog()
        ids = {u.id for u in catalog.available_upgrades({"smart_grid"}, level=6)}
        assert ids == {"renewable_energy", "fiber_network"}


# ---------------------------------------------------------------------------
# Purchasing
# ---------------------------------------------------------------------------

class TestPurchase:
    def test_success_adds_and_charges(self):
        owned: set[str] = set()
        remaining = _make_catalog().purchase("smart_grid", owned, coins=2500, level=3)
        assert remaining == 500
        assert owned == {"smart_grid"}

    def test_missing_prerequisite(self):
        owned: set[str] = set()
        with pytest.raises(PrerequisiteNotMet) as exc:
            _make_catalog().purchase("renewable_energy", owned, coins=10_000, level=6)
        assert exc.value.prerequisite == "smart_grid"
        assert owned == set()

    def test_level_too_low(self):
        owned = {"smart_grid"}
        with pytest.raises(LevelTooLow) as exc:
            _make_catalog().purchase("renewable_energy", owned, coins=10_000, level=5)
        assert exc.value.required == 6
        assert owned == {"smart_grid"}

    def test_insufficient_funds(self):
        owned: set[str] = set()
        with pytest.raises(InsufficientFunds) as exc:
            _make_catalog().purchase("smart_grid", owned, coins=1999, level=3)
        assert exc.value.needed == 2000
        assert owned == set()

    def test_exact_funds_suffice(self):
        remaining = _make_catalog().purchase("smart_grid", set(), coins=2000, level=3)
        assert remaining == 0

    def test_already_owned(self):
        with pytest.raises(AlreadyOwned):
            _make_catalog().purchase("smart_grid", {"smart_grid"}, coins=10_000, level=3)

    def test_unknown(self):
        with pytest.raises(UnknownUpgrade):
            _make_catalog().purchase("moon_base", set(), coins=10_000, level=10)

    def test_all_failures_share_base_class(self):
        with pytest.raises(PurchaseError):
            _make_catalog().purchase("smart_grid", set(), coins=0, level=1)

    def test_emits_event(self):
        bus = EventBus()
        received: list = []
        bus.on(UpgradePurchased, received.append)
        _make_catalog(bus).purchase("fiber_network", set(), coins=1200, level=5)
        assert received == [UpgradePurchased(upgrade_id="fiber_network", cost=1200)]

    def test_refused_purchase_emits_nothing(self):
        bus = EventBus()
        received: list = []
        bus.on(UpgradePurchased, received.append)
        with pytest.raises(PurchaseError):
            _make_catalog(bus).purchase("fiber_network", set(), coins=10, level=5)
        assert received == []


# ---------------------------------------------------------------------------
# Maintenance & effects
# ---------------------------------------------------------------------------

class TestOwnedTotals:
    def test_maintenance_cost(self):
        catalog = _make_catalog()
        assert catalog.maintenance_cost(set()) == 0
        assert catalog.maintenance_cost({"smart_grid", "renewable_energy"}) == 180

    def test_unknown_owned_ids_are_skipped(self):
        assert _make_catalog().maintenance_cost({"smart_grid", "gone"}) == 100

    def test_effects_accumulate(self):
        effects = _make_catalog().get_effects({"smart_grid", "renewable_energy"})
        assert effects["efficiency"] == 60
        assert effects["pollution"] == -35

    def test_get_by_category(self):
        ids = {u.id for u in _make_catalog().get_by_category("power")}
        assert ids == {"smart_grid", "renewable_energy"}
