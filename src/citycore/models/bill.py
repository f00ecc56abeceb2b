"""Utility bill model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Bill:
    """A payable bill.

    Attributes:
        id: Unique bill identifier.
        name: Display name.
        amount: Coins owed.
        day_due: Game day the bill falls due.
        is_paid: Whether the bill has been settled.
        icon: Presentation hint (``Energy`` for energy bills).
    """

    id: str
    name: str = ""
    amount: float = 0.0
    day_due: int = 0
    is_paid: bool = False
    icon: str = ""
