"""Tax policy model.

Policies are created from the catalog at game start and only ever have
their rate adjusted or their enabled flag toggled.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TaxCategory(Enum):
    """Building class a tax policy applies to."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"
    LUXURY = "luxury"


@dataclass
class TaxPolicy:
    """A toggleable tax on one building category.

    Attributes:
        id: Unique policy identifier.
        name: Display name.
        rate: Coins levied per matching building, 0-30.
        category: Building category the rate applies to.
        happiness_impact: Happiness change while the policy is enabled.
        revenue_multiplier: Scales the per-building rate.
        enabled: Only enabled policies raise revenue.
        description: Extended description.
    """

    id: str
    name: str = ""
    rate: float = 0.0
    category: TaxCategory = TaxCategory.RESIDENTIAL
    happiness_impact: float = 0.0
    revenue_multiplier: float = 1.0
    enabled: bool = True
    description: str = ""
