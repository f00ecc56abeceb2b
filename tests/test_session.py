"""Integration tests — a wired city session driven through the clock."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from citycore.models.building import Building
from citycore.models.weather import WeatherState
from citycore.session import create_session, load_configuration, new_city, restore_session
from citycore.util.errors import LevelTooLow
from citycore.util.events import DayEnded

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"


@pytest.fixture
def config():
    return load_configuration(str(CONFIG_DIR))


@pytest.fixture
def session(config):
    s = create_session(config=config, rng=random.Random(7))
    yield s
    s.close()


def _advance_hours(session, hours: int) -> None:
    for _ in range(hours * 60):
        session.clock.tick()


class TestNewCity:
    def test_seeded_from_config(self, config):
        city = new_city(config)
        assert city.coins == 2000
        assert city.clock.hour == 8
        assert city.day == 1
        assert len(city.tax_policies) == 4
        assert len(city.service_budgets) == 5

    def test_forecast_ready_on_creation(self, session):
        assert len(session.city.weather_forecast) == 6
        assert all(isinstance(w, WeatherState) for w in session.city.weather_forecast)


class TestClockDrivesCity:
    def test_day_rolls_over_at_six(self, session):
        session.city.buildings = [Building("house", income=100)]
        ended: list = []
        session.event_bus.on(DayEnded, ended.append)

        _advance_hours(session, 21)          # 08:00 → 05:00
        assert session.city.day == 1
        _advance_hours(session, 1)           # → 06:00
        assert session.city.day == 2
        assert session.city.coins == 2105    # floor(100 * 1.05)
        assert len(ended) == 1

    def test_forecast_stays_six_long(self, session):
        _advance_hours(session, 30)
        assert len(session.city.weather_forecast) == 6

    def test_same_seed_same_weather(self, config):
        a = create_session(config=config, rng=random.Random(11))
        b = create_session(config=config, rng=random.Random(11))
        for _ in range(12 * 60):
            a.clock.tick()
            b.clock.tick()
        assert a.city.weather == b.city.weather
        assert a.city.weather_forecast == b.city.weather_forecast


class TestLedgerActions:
    def test_default_budget(self, session):
        b = session.budget()
        assert b.total_expenses == pytest.approx(225)
        assert b.citizen_satisfaction == pytest.approx(64)
        assert b.infrastructure_health == 60

    def test_budget_change_visible_in_next_snapshot(self, session):
        session.update_service_budget("power_grid", 150)
        assert session.budget().total_expenses == pytest.approx(250)

    def test_tax_change_visible_in_next_snapshot(self, session):
        session.city.buildings = [Building("house")]
        assert session.budget().tax_revenue == pytest.approx(5)
        session.update_tax_rate("residential_tax", 9)
        assert session.budget().tax_revenue == pytest.approx(9)
        session.toggle_tax_policy("residential_tax")
        assert session.budget().tax_revenue == 0

    def test_purchase_upgrade(self, session):
        with pytest.raises(LevelTooLow):
            session.purchase_upgrade("smart_grid")
        assert session.city.coins == 2000

        session.city.level = 3
        session.purchase_upgrade("smart_grid")
        assert session.city.coins == 0
        assert session.city.owned_upgrades == {"smart_grid"}
        assert session.budget().infrastructure_health == 68

    def test_service_effects_and_tax_impact(self, session):
        effects = session.service_effects()
        assert "community_satisfaction" in effects
        assert session.tax_happiness_impact() == -3


class TestRestore:
    def test_snapshot_round_trip(self, session, config):
        session.city.level = 3
        session.purchase_upgrade("smart_grid")
        session.update_tax_rate("commercial_tax", 12)
        _advance_hours(session, 3)

        restored = restore_session(session.snapshot(), config, random.Random(1))
        try:
            assert restored.city == session.city
            assert restored.taxes.get("commercial_tax").rate == 12
        finally:
            restored.close()
