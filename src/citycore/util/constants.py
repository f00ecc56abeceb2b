"""Game constants — timing, bounds, thresholds.

Balance-critical magic numbers of the city economy, centralized here.
Tunable values that operators may override live in ``GameConfig``.
"""

# -- Timing --------------------------------------------------------------

TICK_INTERVAL_MS: float = 300.0
"""Real-time milliseconds per simulated minute."""

MINUTES_PER_HOUR: int = 60
HOURS_PER_DAY: int = 24

DAY_START_HOUR: int = 6
"""The hour whose arrival advances the game day."""

DEFAULT_START_HOUR: int = 8

# -- Weather -------------------------------------------------------------

FORECAST_LENGTH: int = 6
"""Number of slots in the rolling weather forecast."""

FORECAST_SLOT_HOURS: int = 4
"""Hours covered by one forecast slot; also the regeneration cadence."""

# -- Taxes ---------------------------------------------------------------

MIN_TAX_RATE: float = 0.0
MAX_TAX_RATE: float = 30.0

LUXURY_COST_THRESHOLD: float = 2000.0
"""Residential buildings costing more than this also count as luxury."""

# -- Service budgets -----------------------------------------------------

MIN_BUDGET_PERCENT: float = 50.0
MAX_BUDGET_PERCENT: float = 200.0

BASE_EFFICIENCY: float = 50.0
EFFICIENCY_SLOPE: float = 80.0
"""efficiency = BASE_EFFICIENCY + (multiplier - 0.5) * EFFICIENCY_SLOPE"""

MAX_EFFICIENCY: float = 100.0

UNDERFUND_THRESHOLD: float = 80.0
OVERFUND_THRESHOLD: float = 120.0
UNDERFUND_STEP: float = 10.0
OVERFUND_STEP: float = 20.0
UNDERFUND_PENALTY: int = 2
OVERFUND_BONUS: int = 1

QUALITY_EXPONENT: float = 0.7
"""Exponent applied to the budget multiplier for secondary effects."""

# -- Aggregates ----------------------------------------------------------

BASE_INFRASTRUCTURE_HEALTH: float = 60.0
HEALTH_PER_UPGRADE: float = 8.0
MAX_INFRASTRUCTURE_HEALTH: float = 100.0
MAX_SATISFACTION: float = 100.0

EMERGENCY_FUND_DAYS: float = 5.0
"""emergency_fund = max(0, balance * EMERGENCY_FUND_DAYS)"""

# -- Day cycle -----------------------------------------------------------

LEVEL_INCOME_BONUS: float = 0.05
"""Per-level multiplier on daily building income."""

BILL_INTERVAL_DAYS: int = 5
BILL_DUE_OFFSET_DAYS: int = 3

# -- New city defaults ---------------------------------------------------

STARTING_COINS: float = 2000.0
DEFAULT_ENERGY_RATE: float = 2.0
DEFAULT_DAYS_UNTIL_BILL: int = 5
