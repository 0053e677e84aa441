# File: button.py
"""Buttons for the HomeKeeper integration.

01. WaterRefillButton - Swap in a full container and learn from the cycle.
02. HygieneCleanButton - Mark a cleaning item as done.
03. PetCareButton - Mark a pet-care task as done.
04. InventoryOpenButton - Take one unit of an item into use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.components.button import ButtonEntity
from homeassistant.exceptions import HomeAssistantError

from . import const
from .entity import HomeKeeperCoordinatorEntity
from .helpers.device_helpers import create_module_device_info

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import HomeKeeperConfigEntry, HomeKeeperDataCoordinator

# Silver requirement: Parallel Updates
# Set to 1 (serialized) for action buttons that modify state
PARALLEL_UPDATES = 1


async def async_setup_entry(
    hass: HomeAssistant,
    entry: HomeKeeperConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up buttons for every enabled module."""
    coordinator = entry.runtime_data
    entities: list[ButtonEntity] = []

    if coordinator.is_module_enabled(const.MODULE_WATER):
        entities.append(WaterRefillButton(coordinator, entry))

    if coordinator.is_module_enabled(const.MODULE_HYGIENE):
        entities.extend(
            HygieneCleanButton(
                coordinator, entry, item_id, item[const.DATA_FRESHNESS_NAME]
            )
            for item_id, item in coordinator.hygiene_data.items()
        )

    if coordinator.is_module_enabled(const.MODULE_PET):
        entities.extend(
            PetCareButton(coordinator, entry, item_id, item[const.DATA_FRESHNESS_NAME])
            for item_id, item in coordinator.pet_data.items()
        )

    if coordinator.is_module_enabled(const.MODULE_INVENTORY):
        entities.extend(
            InventoryOpenButton(
                coordinator, entry, item_id, item[const.DATA_INVENTORY_ITEM_NAME]
            )
            for item_id, item in coordinator.inventory_data.items()
        )

    async_add_entities(entities)


# ------------------------------------------------------------------------------------------
# Water
# ------------------------------------------------------------------------------------------


class WaterRefillButton(HomeKeeperCoordinatorEntity, ButtonEntity):
    """Report that the water container was just replaced with a full one."""

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_BUTTON_WATER_REFILL
    _attr_icon = "mdi:water-plus"

    def __init__(
        self, coordinator: HomeKeeperDataCoordinator, entry: ConfigEntry
    ) -> None:
        """Initialize the refill button."""
        super().__init__(coordinator)
        self._attr_unique_id = (
            f"{entry.entry_id}{const.BUTTON_UID_SUFFIX_WATER_REFILL}"
        )
        self._attr_device_info = create_module_device_info(const.MODULE_WATER, entry)

    async def async_press(self) -> None:
        """Handle the button press event."""
        try:
            report = self.coordinator.water_manager.refill()
        except HomeAssistantError as err:
            const.LOGGER.error("ERROR: Failed to refill water: %s", err)
            raise
        const.LOGGER.info(
            "INFO: Water refilled (outlier=%s, implied rate=%s)",
            report.is_outlier,
            report.implied_rate,
        )


# ------------------------------------------------------------------------------------------
# Per-item buttons
# ------------------------------------------------------------------------------------------


class ItemActionButton(HomeKeeperCoordinatorEntity, ButtonEntity):
    """Button bound to a single stored item."""

    _attr_has_entity_name = True
    _uid_suffix: str
    _module: str

    def __init__(
        self,
        coordinator: HomeKeeperDataCoordinator,
        entry: ConfigEntry,
        item_id: str,
        item_name: str,
    ) -> None:
        """Initialize the button.

        Args:
            coordinator: HomeKeeperDataCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            item_id: Internal id of the item the button acts on.
            item_name: Display name of the item.
        """
        super().__init__(coordinator)
        self._item_id = item_id
        self._item_name = item_name
        self._attr_unique_id = f"{entry.entry_id}_{item_id}{self._uid_suffix}"
        self._attr_translation_placeholders = {
            const.TRANS_KEY_ATTR_ITEM_NAME: item_name
        }
        self._attr_device_info = create_module_device_info(self._module, entry)

    def _act(self) -> None:
        raise NotImplementedError

    async def async_press(self) -> None:
        """Handle the button press event."""
        try:
            self._act()
        except HomeAssistantError as err:
            const.LOGGER.error(
                "ERROR: Button '%s' failed for '%s': %s",
                self.translation_key,
                self._item_name,
                err,
            )
            raise


class HygieneCleanButton(ItemActionButton):
    """Mark a cleaning item as done."""

    _attr_translation_key = const.TRANS_KEY_BUTTON_HYGIENE_CLEAN
    _attr_icon = "mdi:spray-bottle"
    _uid_suffix = const.BUTTON_UID_SUFFIX_HYGIENE_CLEAN
    _module = const.MODULE_HYGIENE

    def _act(self) -> None:
        self.coordinator.hygiene_manager.perform(self._item_id)


class PetCareButton(ItemActionButton):
    """Mark a pet-care task as done."""

    _attr_translation_key = const.TRANS_KEY_BUTTON_PET_CARE
    _attr_icon = "mdi:paw"
    _uid_suffix = const.BUTTON_UID_SUFFIX_PET_CARE
    _module = const.MODULE_PET

    def _act(self) -> None:
        self.coordinator.pet_manager.perform(self._item_id)


class InventoryOpenButton(ItemActionButton):
    """Take one unit of an item into use."""

    _attr_translation_key = const.TRANS_KEY_BUTTON_INVENTORY_OPEN
    _attr_icon = "mdi:package-variant-minus"
    _uid_suffix = const.BUTTON_UID_SUFFIX_INVENTORY_OPEN
    _module = const.MODULE_INVENTORY

    def _act(self) -> None:
        self.coordinator.inventory_manager.open_item(self._item_id)
