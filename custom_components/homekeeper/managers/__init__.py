"""Manager modules for HomeKeeper integration.

Managers own the stateful workflows for one household area each. They read
and replace the coordinator's stored record, delegate all calculations to the
pure engines, and persist through the coordinator.
"""

from .base_manager import BaseManager
from .freshness_manager import FreshnessManager, HygieneManager, PetCareManager
from .household_manager import HouseholdManager
from .inventory_manager import InventoryManager
from .water_manager import WaterManager

__all__ = [
    "BaseManager",
    "FreshnessManager",
    "HouseholdManager",
    "HygieneManager",
    "InventoryManager",
    "PetCareManager",
    "WaterManager",
]
