"""Tests for ServiceBudgetLedger — funding clamp, efficiency, happiness, effects."""

from __future__ import annotations

import dataclasses

import pytest

from citycore.engine.service_ledger import (
    ServiceBudgetLedger,
    compute_service_effects,
    efficiency_for,
    happiness_delta_for,
    quality_factor,
    with_budget,
)
from citycore.models.services import ServiceBudget
from citycore.util.effects import SERVICE_EFFECT_KEYS


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_service(sid: str = "power_grid", base_cost: float = 50.0,
                  budget: float = 100.0, **effects: float) -> ServiceBudget:
    return ServiceBudget(id=sid, name=sid, category="utilities", base_cost=base_cost,
                         current_budget=budget, efficiency=75, effects=dict(effects))


# ---------------------------------------------------------------------------
# Pure formulas
# ---------------------------------------------------------------------------

class TestEfficiency:
    @pytest.mark.parametrize("percent,expected", [
        (50, 50), (75, 70), (100, 90), (112.5, 100), (150, 100), (200, 100),
    ])
    def test_values(self, percent, expected):
        assert efficiency_for(percent) == pytest.approx(expected)

    def test_monotonic_and_bounded(self):
        values = [efficiency_for(p) for p in range(50, 201)]
        assert all(0 <= v <= 100 for v in values)
        assert all(a <= b for a, b in zip(values, values[1:]))


class TestHappinessDelta:
    @pytest.mark.parametrize("percent,expected", [
        (50, -6), (60, -4), (70, -2), (79, 0), (80, 0), (100, 0),
        (120, 0), (139, 0), (140, 1), (160, 2), (200, 4),
    ])
    def test_values(self, percent, expected):
        assert happiness_delta_for(percent) == expected

    def test_sign_by_band(self):
        assert all(happiness_delta_for(p) <= 0 for p in range(50, 80))
        assert all(happiness_delta_for(p) == 0 for p in range(80, 121))
        assert all(happiness_delta_for(p) >= 0 for p in range(121, 201))


class TestQualityFactor:
    def test_baseline_is_one(self):
        assert quality_factor(100) == pytest.approx(1.0)

    def test_diminishing_returns(self):
        assert quality_factor(200) == pytest.approx(2 ** 0.7)
        assert quality_factor(200) < 2


# ---------------------------------------------------------------------------
# Budget updates
# ---------------------------------------------------------------------------

class TestWithBudget:
    def test_fields_move_together(self):
        svc = with_budget(_make_service(), 150)
        assert svc.current_budget == 150
        assert svc.efficiency == pytest.approx(100)
        assert svc.effects["happiness"] == 1
        assert svc.maintenance_multiplier == pytest.approx(1.5)
        assert svc.quality_multiplier == pytest.approx(1.5)

    @pytest.mark.parametrize("requested,stored", [(10, 50), (300, 200), (-20, 50)])
    def test_clamps_before_deriving(self, requested, stored):
        svc = with_budget(_make_service(), requested)
        assert svc.current_budget == stored
        assert svc.efficiency == pytest.approx(efficiency_for(stored))
        assert svc.maintenance_multiplier == pytest.approx(stored / 100)

    def test_keeps_declared_effects(self):
        svc = with_budget(_make_service(community_satisfaction=4), 60)
        assert svc.effects["community_satisfaction"] == 4
        assert svc.effects["happiness"] == -4

    def test_original_record_untouched(self):
        original = _make_service()
        with_budget(original, 60)
        assert original.current_budget == 100
        assert "happiness" not in original.effects

    def test_record_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            _make_service().current_budget = 120


class TestServiceBudgetLedger:
    def test_daily_cost_follows_budget(self):
        ledger = ServiceBudgetLedger([_make_service(base_cost=50)])
        assert ledger.daily_cost("power_grid") == pytest.approx(50)
        ledger.update_budget("power_grid", 150)
        assert ledger.daily_cost("power_grid") == pytest.approx(75)
        assert ledger.get("power_grid").efficiency == pytest.approx(100)

    def test_update_replaces_record_in_list(self):
        services = [_make_service(), _make_service("water_system", base_cost=40)]
        before = services[0]
        updated = ServiceBudgetLedger(services).update_budget("power_grid", 80)
        assert services[0] is updated
        assert services[0] is not before
        assert before.current_budget == 100
        assert services[1].id == "water_system"

    def test_unknown_id_is_noop(self):
        services = [_make_service()]
        assert ServiceBudgetLedger(services).update_budget("nope", 150) is None
        assert services[0].current_budget == 100

    def test_unknown_daily_cost_is_zero(self):
        assert ServiceBudgetLedger([]).daily_cost("nope") == 0

    def test_total_cost(self):
        ledger = ServiceBudgetLedger([
            _make_service(base_cost=50), _make_service("b", base_cost=40, budget=50),
        ])
        assert ledger.total_cost() == pytest.approx(70)


# ---------------------------------------------------------------------------
# Effects
# ---------------------------------------------------------------------------

class TestComputeServiceEffects:
    def test_all_keys_present(self):
        effects = compute_service_effects([])
        assert set(effects) == set(SERVICE_EFFECT_KEYS)
        assert all(v == 0 for v in effects.values())

    def test_scaled_by_quality_factor(self):
        services = [
            _make_service("a", budget=200, community_satisfaction=10),
            _make_service("b", budget=100, community_satisfaction=5, pollution=-8),
        ]
        effects = compute_service_effects(services)
        assert effects["community_satisfaction"] == pytest.approx(10 * 2 ** 0.7 + 5)
        assert effects["pollution"] == pytest.approx(-8)
        assert effects["land_value"] == 0

    def test_happiness_delta_is_not_an_aggregated_effect(self):
        svc = with_budget(_make_service(), 200)
        assert "happiness" not in compute_service_effects([svc])
