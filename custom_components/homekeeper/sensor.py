# File: sensor.py
"""Sensors for the HomeKeeper integration.

Sensors Defined in This File (6):

# Water (one each per entry)
01. WaterLevelSensor
02. WaterEnduranceSensor
03. WaterTrendSensor

# Per item
04. HygieneFreshnessSensor
05. PetCareFreshnessSensor
06. InventoryStockSensor

All values are derived at read time from the stored record and the
coordinator's virtual clock.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.components.sensor import (
    SensorDeviceClass,
    SensorEntity,
    SensorStateClass,
)
from homeassistant.const import UnitOfTime, UnitOfVolume

from . import const
from .entity import HomeKeeperCoordinatorEntity
from .helpers.device_helpers import create_module_device_info

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant
    from homeassistant.helpers.entity_platform import AddEntitiesCallback

    from .coordinator import HomeKeeperConfigEntry, HomeKeeperDataCoordinator
    from .managers import FreshnessManager

# Silver requirement: Parallel Updates
# Set to 0 (unlimited) for coordinator-based entities that don't poll
PARALLEL_UPDATES = 0


async def async_setup_entry(
    hass: HomeAssistant,
    entry: HomeKeeperConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    """Set up sensors for every enabled module."""
    coordinator = entry.runtime_data
    entities: list[SensorEntity] = []

    if coordinator.is_module_enabled(const.MODULE_WATER):
        entities.extend(
            [
                WaterLevelSensor(coordinator, entry),
                WaterEnduranceSensor(coordinator, entry),
                WaterTrendSensor(coordinator, entry),
            ]
        )

    if coordinator.is_module_enabled(const.MODULE_HYGIENE):
        for item_id, item in coordinator.hygiene_data.items():
            entities.append(
                HygieneFreshnessSensor(
                    coordinator, entry, item_id, item[const.DATA_FRESHNESS_NAME]
                )
            )

    if coordinator.is_module_enabled(const.MODULE_PET):
        for item_id, item in coordinator.pet_data.items():
            entities.append(
                PetCareFreshnessSensor(
                    coordinator, entry, item_id, item[const.DATA_FRESHNESS_NAME]
                )
            )

    if coordinator.is_module_enabled(const.MODULE_INVENTORY):
        for item_id, item in coordinator.inventory_data.items():
            entities.append(
                InventoryStockSensor(
                    coordinator, entry, item_id, item[const.DATA_INVENTORY_ITEM_NAME]
                )
            )

    async_add_entities(entities)


# ------------------------------------------------------------------------------------------
# Water
# ------------------------------------------------------------------------------------------


class WaterLevelSensor(HomeKeeperCoordinatorEntity, SensorEntity):
    """Interpolated litres left in the drinking-water tank.

    Attributes expose the learned model so automations can react to outliers
    and calibrations.
    """

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_WATER_LEVEL
    _attr_device_class = SensorDeviceClass.VOLUME_STORAGE
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = UnitOfVolume.LITERS
    _attr_suggested_display_precision = 1

    def __init__(
        self, coordinator: HomeKeeperDataCoordinator, entry: ConfigEntry
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_WATER_LEVEL}"
        self._attr_device_info = create_module_device_info(const.MODULE_WATER, entry)

    @property
    def native_value(self) -> float:
        """Return the current level in litres."""
        return self.coordinator.water_manager.view().level

    @property
    def icon(self) -> str:
        """Return an icon matching the fill status."""
        status = self.coordinator.water_manager.view().status
        if status in (const.WATER_STATUS_EMPTY, const.WATER_STATUS_LOW):
            return "mdi:water-alert"
        if status == const.WATER_STATUS_UNCONFIGURED:
            return "mdi:water-off"
        return "mdi:water"

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose fill percentage, status and the rate model."""
        manager = self.coordinator.water_manager
        view = manager.view()
        state = manager.state
        attributes = {
            const.ATTR_PERCENTAGE: view.percentage,
            const.ATTR_STATUS: view.status,
            const.ATTR_CAPACITY: state.capacity,
            const.ATTR_CURRENT_CYCLE_RATE: view.rate,
            const.ATTR_LEARNED_RATE: round(state.learned_rate, 4),
            const.ATTR_HAS_CALIBRATED: state.has_calibrated,
            const.ATTR_LAST_RESET_AT: (
                state.last_reset_at.isoformat() if state.last_reset_at else None
            ),
            const.ATTR_SLEEP_WINDOW: state.sleep_window.as_dict(),
            const.ATTR_LAST_REPORT: manager.last_report,
            const.ATTR_VIRTUAL_NOW: self.coordinator.now().isoformat(),
        }
        return dict(sorted(attributes.items()))


class WaterEnduranceSensor(HomeKeeperCoordinatorEntity, SensorEntity):
    """Predicted wall-clock hours until the tank runs dry."""

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_WATER_ENDURANCE
    _attr_device_class = SensorDeviceClass.DURATION
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_native_unit_of_measurement = UnitOfTime.HOURS
    _attr_icon = "mdi:timer-sand"

    def __init__(
        self, coordinator: HomeKeeperDataCoordinator, entry: ConfigEntry
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator)
        self._attr_unique_id = (
            f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_WATER_ENDURANCE}"
        )
        self._attr_device_info = create_module_device_info(const.MODULE_WATER, entry)

    @property
    def native_value(self) -> float:
        """Return hours of water left."""
        return self.coordinator.water_manager.view().endurance_hours


class WaterTrendSensor(HomeKeeperCoordinatorEntity, SensorEntity):
    """Litres consumed today, with the trailing week as an attribute."""

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_WATER_TREND
    _attr_native_unit_of_measurement = UnitOfVolume.LITERS
    _attr_icon = "mdi:chart-bar"

    def __init__(
        self, coordinator: HomeKeeperDataCoordinator, entry: ConfigEntry
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator)
        self._attr_unique_id = f"{entry.entry_id}{const.SENSOR_UID_SUFFIX_WATER_TREND}"
        self._attr_device_info = create_module_device_info(const.MODULE_WATER, entry)

    @property
    def native_value(self) -> float:
        """Return today's consumption."""
        trend = self.coordinator.water_manager.trend()
        return trend[-1][const.DATA_WATER_HISTORY_LITERS] if trend else 0.0

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the daily series, oldest first."""
        return {const.ATTR_TREND: self.coordinator.water_manager.trend()}


# ------------------------------------------------------------------------------------------
# Freshness
# ------------------------------------------------------------------------------------------


class FreshnessSensor(HomeKeeperCoordinatorEntity, SensorEntity):
    """Tier of a hygiene item or pet-care task (enum state)."""

    _attr_has_entity_name = True
    _attr_device_class = SensorDeviceClass.ENUM
    _uid_suffix: str
    _module: str

    def __init__(
        self,
        coordinator: HomeKeeperDataCoordinator,
        entry: ConfigEntry,
        item_id: str,
        item_name: str,
    ) -> None:
        """Initialize the sensor.

        Args:
            coordinator: HomeKeeperDataCoordinator instance for data access.
            entry: ConfigEntry for this integration instance.
            item_id: Internal id of the item.
            item_name: Display name of the item.
        """
        super().__init__(coordinator)
        self._item_id = item_id
        self._attr_unique_id = f"{entry.entry_id}_{item_id}{self._uid_suffix}"
        self._attr_translation_placeholders = {
            const.TRANS_KEY_ATTR_ITEM_NAME: item_name
        }
        self._attr_options = list(self._manager.policy.tier_names)
        self._attr_device_info = create_module_device_info(self._module, entry)

    @property
    def _manager(self) -> FreshnessManager:
        raise NotImplementedError

    @property
    def available(self) -> bool:
        """Unavailable once the item has been deleted."""
        return super().available and self._item_id in self._manager.items

    @property
    def native_value(self) -> str | None:
        """Return the current tier."""
        if self._item_id not in self._manager.items:
            return None
        return self._manager.evaluate(self._item_id).status

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose the score and the thresholds behind it."""
        if self._item_id not in self._manager.items:
            return {}
        return dict(sorted(self._manager.attributes(self._item_id).items()))


class HygieneFreshnessSensor(FreshnessSensor):
    """Freshness of a cleaning item."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_HYGIENE
    _attr_icon = "mdi:broom"
    _uid_suffix = const.SENSOR_UID_SUFFIX_HYGIENE
    _module = const.MODULE_HYGIENE

    @property
    def _manager(self) -> FreshnessManager:
        return self.coordinator.hygiene_manager


class PetCareFreshnessSensor(FreshnessSensor):
    """Freshness of a pet-care task."""

    _attr_translation_key = const.TRANS_KEY_SENSOR_PET_CARE
    _attr_icon = "mdi:paw"
    _uid_suffix = const.SENSOR_UID_SUFFIX_PET_CARE
    _module = const.MODULE_PET

    @property
    def _manager(self) -> FreshnessManager:
        return self.coordinator.pet_manager


# ------------------------------------------------------------------------------------------
# Inventory
# ------------------------------------------------------------------------------------------


class InventoryStockSensor(HomeKeeperCoordinatorEntity, SensorEntity):
    """Units in stock, with consumption rate and projection attributes."""

    _attr_has_entity_name = True
    _attr_translation_key = const.TRANS_KEY_SENSOR_INVENTORY
    _attr_state_class = SensorStateClass.MEASUREMENT
    _attr_icon = "mdi:package-variant"

    def __init__(
        self,
        coordinator: HomeKeeperDataCoordinator,
        entry: ConfigEntry,
        item_id: str,
        item_name: str,
    ) -> None:
        """Initialize the sensor."""
        super().__init__(coordinator)
        self._item_id = item_id
        self._attr_unique_id = (
            f"{entry.entry_id}_{item_id}{const.SENSOR_UID_SUFFIX_INVENTORY}"
        )
        self._attr_translation_placeholders = {
            const.TRANS_KEY_ATTR_ITEM_NAME: item_name
        }
        self._attr_device_info = create_module_device_info(
            const.MODULE_INVENTORY, entry
        )

    @property
    def available(self) -> bool:
        """Unavailable once the item has been deleted."""
        return super().available and self._item_id in self.coordinator.inventory_data

    @property
    def native_value(self) -> float | None:
        """Return the current stock."""
        item = self.coordinator.inventory_data.get(self._item_id)
        if item is None:
            return None
        return item.get(const.DATA_INVENTORY_ITEM_STOCK)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Expose rate, projection, alert level and the step chart."""
        if self._item_id not in self.coordinator.inventory_data:
            return {}
        summary = self.coordinator.inventory_manager.summary(self._item_id)
        return dict(sorted(summary.items()))
