"""Effect key constants.

String keys used in effect maps on service budgets and infrastructure
upgrades.
"""

# -- Service secondary effects -------------------------------------------
COMMUNITY_SATISFACTION = "community_satisfaction"
INCOME = "income"
POLLUTION = "pollution"
LAND_VALUE = "land_value"
ENERGY_EFFICIENCY = "energy_efficiency"
WATER_EFFICIENCY = "water_efficiency"

SERVICE_EFFECT_KEYS = (
    COMMUNITY_SATISFACTION,
    INCOME,
    POLLUTION,
    LAND_VALUE,
    ENERGY_EFFICIENCY,
    WATER_EFFICIENCY,
)
"""Effects summed across services by the quality-weighted aggregation."""

# -- Funding feedback ----------------------------------------------------
HAPPINESS = "happiness"
"""Written by the budget update; not part of the weighted aggregation."""
