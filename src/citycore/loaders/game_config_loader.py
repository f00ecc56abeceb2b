"""Game configuration — loads tunable constants from config/game.yaml.

Provides a single ``GameConfig`` dataclass that is loaded once when a
session is created and then passed wherever constants are needed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from citycore.util import constants

log = logging.getLogger(__name__)

DEFAULT_GAME_CONFIG_PATH = "config/game.yaml"


@dataclass
class GameConfig:
    """All tunable gameplay constants.

    Loaded from ``config/game.yaml``.  Every field has a sensible default
    so a session can start even without the file.
    """

    # -- Timing ------------------------------------------------------
    tick_interval_ms: float = constants.TICK_INTERVAL_MS
    day_start_hour: int = constants.DAY_START_HOUR

    # -- Weather -----------------------------------------------------
    forecast_length: int = constants.FORECAST_LENGTH
    forecast_slot_hours: int = constants.FORECAST_SLOT_HOURS

    # -- Day cycle ---------------------------------------------------
    level_income_bonus: float = constants.LEVEL_INCOME_BONUS
    bill_interval_days: int = constants.BILL_INTERVAL_DAYS
    bill_due_offset_days: int = constants.BILL_DUE_OFFSET_DAYS

    # -- New city defaults -------------------------------------------
    starting_coins: float = constants.STARTING_COINS
    starting_hour: int = constants.DEFAULT_START_HOUR
    default_energy_rate: float = constants.DEFAULT_ENERGY_RATE
    default_days_until_bill: int = constants.DEFAULT_DAYS_UNTIL_BILL

    # -- Randomness --------------------------------------------------
    weather_seed: int | None = None
    """Seed for the weather sampler; None draws from system entropy."""


def load_game_config(path: str | Path = DEFAULT_GAME_CONFIG_PATH) -> GameConfig:
    """Load game configuration from a YAML file.

    Missing keys fall back to dataclass defaults.  If the file does not
    exist, a warning is logged and pure defaults are returned.
    """
    p = Path(path)
    if not p.exists():
        log.warning("Game config not found at %s — using defaults", p)
        return GameConfig()

    with p.open() as f:
        raw = yaml.safe_load(f) or {}

    log.info("Loaded game config from %s (%d keys)", p, len(raw))

    unknown = sorted(k for k in raw if k not in GameConfig.__dataclass_fields__)
    if unknown:
        log.warning("Ignoring unknown game config keys: %s", ", ".join(unknown))

    return GameConfig(**{
        k: v for k, v in raw.items()
        if k in GameConfig.__dataclass_fields__
    })
