"""Freshness Managers - Hygiene items and pet-care tasks.

Both domains store items with a base interval and a last reset timestamp and
are scored by EntropyEngine. The subclasses only differ in where their items
live, which policy applies, and which population drives the load factor.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any

from .. import const
from ..engines.entropy_engine import HYGIENE_POLICY, PET_POLICY, EntropyEngine
from ..helpers.entity_helpers import get_item_or_raise
from ..utils import dt_utils
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..engines.entropy_engine import EntropyResult, LoadFactorPolicy
    from ..type_defs import FreshnessItemData


class FreshnessManager(BaseManager):
    """Shared workflows for items scored by elapsed time over an interval."""

    bucket: str
    module: str
    policy: LoadFactorPolicy
    label: str

    async def async_setup(self) -> None:
        """Populations are read on demand; nothing to subscribe to."""

    @property
    def items(self) -> dict[str, FreshnessItemData]:
        """Stored items keyed by internal_id."""
        return self.coordinator._data[self.bucket][const.DATA_ITEMS]

    @property
    @abstractmethod
    def population(self) -> int:
        """Headcount that triggers the load factor."""

    @abstractmethod
    def interval_in_base_units(self, amount: float, unit: str) -> float:
        """Convert a user interval into the policy's base unit."""

    def get_item(self, item_id: str) -> FreshnessItemData:
        """Return an item or raise a translated not-found error."""
        return get_item_or_raise(self.items, item_id, self.label)

    def evaluate(self, item_id: str) -> EntropyResult:
        """Score an item at virtual now."""
        item = self.get_item(item_id)
        return EntropyEngine.evaluate(
            self.policy,
            dt_utils.dt_to_utc(item.get(const.DATA_FRESHNESS_LAST_RESET_AT)),
            float(item.get(const.DATA_FRESHNESS_BASE_INTERVAL, 0.0)),
            bool(item.get(const.DATA_FRESHNESS_IS_SHARED, False)),
            self.population,
            self.coordinator.now(),
        )

    def perform(self, item_id: str) -> None:
        """Mark an item as done now, resetting its score to zero."""
        self.require_module(self.module)
        item = self.get_item(item_id)
        item[const.DATA_FRESHNESS_LAST_RESET_AT] = dt_utils.dt_to_iso(
            self.coordinator.now()
        )
        const.LOGGER.info(
            "INFO: %s '%s' reset", self.label, item.get(const.DATA_FRESHNESS_NAME)
        )
        self.coordinator._persist_and_update()

    def update_interval(self, item_id: str, amount: float, unit: str) -> None:
        """Change an item's base interval, remembering the display unit."""
        self.require_module(self.module)
        item = self.get_item(item_id)
        base = self.interval_in_base_units(amount, unit)
        item[const.DATA_FRESHNESS_BASE_INTERVAL] = base
        item[const.DATA_FRESHNESS_PREFERRED_UNIT] = unit
        const.LOGGER.info(
            "INFO: %s '%s' interval set to %s %s (%.2f base units)",
            self.label,
            item.get(const.DATA_FRESHNESS_NAME),
            amount,
            unit,
            base,
        )
        self.coordinator._persist_and_update()

    def attributes(self, item_id: str) -> dict[str, Any]:
        """Entity attributes describing an item's current score."""
        item = self.get_item(item_id)
        result = self.evaluate(item_id)
        return {
            const.ATTR_SCORE: result.score,
            const.ATTR_LOAD_FACTOR: result.load_factor,
            const.ATTR_EFFECTIVE_THRESHOLD_HOURS: round(
                result.effective_threshold * self.policy.unit.total_seconds() / 3600, 2
            ),
            const.ATTR_BASE_INTERVAL: item.get(const.DATA_FRESHNESS_BASE_INTERVAL),
            const.ATTR_PREFERRED_UNIT: item.get(const.DATA_FRESHNESS_PREFERRED_UNIT),
            const.ATTR_IS_SHARED: item.get(const.DATA_FRESHNESS_IS_SHARED),
            const.ATTR_CATEGORY: item.get(const.DATA_FRESHNESS_CATEGORY),
            const.ATTR_LAST_RESET_AT: item.get(const.DATA_FRESHNESS_LAST_RESET_AT),
        }


class HygieneManager(FreshnessManager):
    """Cleaning items; public areas soil faster in larger households."""

    bucket = const.DATA_HYGIENE
    module = const.MODULE_HYGIENE
    policy = HYGIENE_POLICY
    label = const.LABEL_HYGIENE_ITEM

    @property
    def population(self) -> int:
        """People in the household."""
        return self.coordinator.household_manager.human_count

    def interval_in_base_units(self, amount: float, unit: str) -> float:
        """Days, with calendar months measured from virtual now."""
        return dt_utils.dt_interval_to_days(amount, unit, self.coordinator.now())


class PetCareManager(FreshnessManager):
    """Pet-care tasks; shared tasks come around sooner with several pets."""

    bucket = const.DATA_PET
    module = const.MODULE_PET
    policy = PET_POLICY
    label = const.LABEL_PET_CARE_ITEM

    @property
    def population(self) -> int:
        """Pets in the household."""
        return self.coordinator.household_manager.pet_count

    def interval_in_base_units(self, amount: float, unit: str) -> float:
        """Hours."""
        return dt_utils.dt_interval_to_hours(amount, unit, self.coordinator.now())
