"""Inventory Manager - Consumable stock, event logs and categories.

Every stock change appends an OPEN, RESTOCK or EDIT entry to the item's log
(pruned to INVENTORY_MAX_LOG_ENTRIES). Rates, projections and step charts are
derived from that log by InventoryEngine and TrendEngine.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
import uuid

from .. import const
from ..engines.inventory_engine import InventoryEngine
from ..engines.trend_engine import TrendEngine
from ..helpers.entity_helpers import get_item_or_raise, remove_entities_by_item_id
from ..utils.math_utils import round_value
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..type_defs import InventoryItemData


class InventoryManager(BaseManager):
    """Manages inventory items and categories stored under DATA_INVENTORY."""

    async def async_setup(self) -> None:
        """Nothing to subscribe to."""

    @property
    def items(self) -> dict[str, InventoryItemData]:
        """Stored items keyed by internal_id."""
        return self.coordinator.inventory_data

    @property
    def categories(self) -> dict[str, Any]:
        """Stored categories keyed by internal_id."""
        return self.coordinator.inventory_categories

    def get_item(self, item_id: str) -> InventoryItemData:
        """Return an item or raise a translated not-found error."""
        return get_item_or_raise(self.items, item_id, const.LABEL_INVENTORY_ITEM)

    # -------------------------------------------------------------------------------------
    # Derived Values
    # -------------------------------------------------------------------------------------

    def summary(self, item_id: str) -> dict[str, Any]:
        """Daily rate, days left, alert level and step chart for an item."""
        item = self.get_item(item_id)
        now = self.coordinator.now()
        stock = float(item.get(const.DATA_INVENTORY_ITEM_STOCK, 0))
        logs = item.get(const.DATA_INVENTORY_ITEM_HISTORY, [])

        rate = InventoryEngine.daily_rate(logs, now)
        days_left = InventoryEngine.projection_days(stock, rate)
        chart = TrendEngine.inventory_step_chart(logs, stock, now)
        return {
            const.ATTR_DAILY_RATE: None if rate is None else round_value(rate, 3),
            const.ATTR_DAYS_LEFT: None if days_left is None else round_value(days_left, 1),
            const.ATTR_ALERT_LEVEL: InventoryEngine.alert_level(
                stock,
                float(item.get(const.DATA_INVENTORY_ITEM_THRESHOLD, 0)),
                days_left,
            ),
            const.ATTR_THRESHOLD: item.get(const.DATA_INVENTORY_ITEM_THRESHOLD),
            const.ATTR_IS_SHARED: item.get(const.DATA_INVENTORY_ITEM_IS_SHARED),
            const.ATTR_CATEGORY: item.get(const.DATA_INVENTORY_ITEM_CATEGORY_ID),
            const.ATTR_STEP_CHART: [point.as_dict() for point in chart],
        }

    # -------------------------------------------------------------------------------------
    # Stock Changes
    # -------------------------------------------------------------------------------------

    def _record(self, item: InventoryItemData, action: str, delta: float) -> None:
        balance = float(item.get(const.DATA_INVENTORY_ITEM_STOCK, 0)) + delta
        item[const.DATA_INVENTORY_ITEM_STOCK] = round_value(balance)
        history = list(item.get(const.DATA_INVENTORY_ITEM_HISTORY, []))
        history.append(
            InventoryEngine.create_log_entry(
                self.coordinator.now(), action, delta, balance
            )
        )
        item[const.DATA_INVENTORY_ITEM_HISTORY] = InventoryEngine.prune_logs(history)
        const.LOGGER.info(
            "INFO: Inventory '%s' %s %+g → %g",
            item.get(const.DATA_INVENTORY_ITEM_NAME),
            action,
            delta,
            balance,
        )
        self.coordinator._persist_and_update()

    def open_item(self, item_id: str) -> bool:
        """Take one unit into use. Returns False when the item is empty."""
        self.require_module(const.MODULE_INVENTORY)
        item = self.get_item(item_id)
        if float(item.get(const.DATA_INVENTORY_ITEM_STOCK, 0)) <= 0:
            const.LOGGER.warning(
                "WARNING: Inventory '%s' (%s) is out of stock; open ignored",
                item.get(const.DATA_INVENTORY_ITEM_NAME),
                item_id,
            )
            return False
        self._record(item, const.INVENTORY_ACTION_OPEN, -1)
        return True

    def restock_item(self, item_id: str, amount: float) -> None:
        """Add `amount` units."""
        self.require_module(const.MODULE_INVENTORY)
        self._record(self.get_item(item_id), const.INVENTORY_ACTION_RESTOCK, amount)

    def set_stock(self, item_id: str, stock: float) -> None:
        """Correct the stock to a counted value, logging the difference."""
        self.require_module(const.MODULE_INVENTORY)
        item = self.get_item(item_id)
        delta = stock - float(item.get(const.DATA_INVENTORY_ITEM_STOCK, 0))
        if delta == 0:
            return
        self._record(item, const.INVENTORY_ACTION_EDIT, delta)

    # -------------------------------------------------------------------------------------
    # Items and Categories
    # -------------------------------------------------------------------------------------

    def add_item(
        self,
        name: str,
        category_id: str,
        stock: float = 0,
        threshold: float = const.DEFAULT_INVENTORY_THRESHOLD,
        is_shared: bool = True,
    ) -> str:
        """Create an item and return its internal id."""
        self.require_module(const.MODULE_INVENTORY)
        get_item_or_raise(self.categories, category_id, const.LABEL_INVENTORY_CATEGORY)
        item_id = str(uuid.uuid4())
        self.items[item_id] = {
            const.DATA_INVENTORY_ITEM_ID: item_id,
            const.DATA_INVENTORY_ITEM_NAME: name,
            const.DATA_INVENTORY_ITEM_CATEGORY_ID: category_id,
            const.DATA_INVENTORY_ITEM_STOCK: float(stock),
            const.DATA_INVENTORY_ITEM_THRESHOLD: float(threshold),
            const.DATA_INVENTORY_ITEM_IS_SHARED: is_shared,
            const.DATA_INVENTORY_ITEM_HISTORY: [],
        }
        const.LOGGER.info("INFO: Inventory item '%s' added", name)
        self.coordinator._persist_and_update()
        self.coordinator.async_schedule_entity_reload()
        return item_id

    def remove_item(self, item_id: str) -> None:
        """Delete an item and its entities."""
        self.require_module(const.MODULE_INVENTORY)
        item = self.get_item(item_id)
        del self.items[item_id]
        remove_entities_by_item_id(self.hass, self.entry_id, item_id)
        const.LOGGER.info(
            "INFO: Inventory item '%s' removed", item.get(const.DATA_INVENTORY_ITEM_NAME)
        )
        self.coordinator._persist_and_update()

    def add_category(self, name: str, emoji: str = "") -> str:
        """Create a category and return its internal id."""
        self.require_module(const.MODULE_INVENTORY)
        category_id = str(uuid.uuid4())
        self.categories[category_id] = {
            const.DATA_INVENTORY_CATEGORY_ID: category_id,
            const.DATA_INVENTORY_CATEGORY_NAME: name,
            const.DATA_INVENTORY_CATEGORY_EMOJI: emoji,
        }
        const.LOGGER.info("INFO: Inventory category '%s' added", name)
        self.coordinator._persist_and_update()
        return category_id

    def remove_category(self, category_id: str) -> None:
        """Delete a category. Items keep their category id."""
        self.require_module(const.MODULE_INVENTORY)
        get_item_or_raise(self.categories, category_id, const.LABEL_INVENTORY_CATEGORY)
        category = self.categories.pop(category_id)
        const.LOGGER.info(
            "INFO: Inventory category '%s' removed",
            category.get(const.DATA_INVENTORY_CATEGORY_NAME),
        )
        self.coordinator._persist_and_update()
