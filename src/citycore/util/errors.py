"""Purchase failures.

Rates and percentages are clamped and unknown ledger ids are ignored, so
the only hard failures in the engine are refused purchases and payments.
"""

from __future__ import annotations


class PurchaseError(Exception):
    """Base class for a refused purchase. State is left untouched."""


class UnknownUpgrade(PurchaseError):
    def __init__(self, upgrade_id: str) -> None:
        super().__init__(f"Unknown upgrade: {upgrade_id}")
        self.upgrade_id = upgrade_id


class AlreadyOwned(PurchaseError):
    def __init__(self, upgrade_id: str) -> None:
        super().__init__(f"Upgrade {upgrade_id} already owned")
        self.upgrade_id = upgrade_id


class InsufficientFunds(PurchaseError):
    def __init__(self, needed: float, available: float) -> None:
        super().__init__(f"Not enough coins (need {needed}, have {available:.1f})")
        self.needed = needed
        self.available = available


class PrerequisiteNotMet(PurchaseError):
    def __init__(self, upgrade_id: str, prerequisite: str) -> None:
        super().__init__(f"Requirements not met for {upgrade_id} (needs {prerequisite})")
        self.upgrade_id = upgrade_id
        self.prerequisite = prerequisite


class LevelTooLow(PurchaseError):
    def __init__(self, upgrade_id: str, required: int, level: int) -> None:
        super().__init__(f"{upgrade_id} unlocks at level {required} (current level {level})")
        self.upgrade_id = upgrade_id
        self.required = required
        self.level = level
