# File: coordinator.py
"""Coordinator for the HomeKeeper integration.

Holds the stored household record and the virtual clock, owns the domain
managers, and pushes derived state to entities on every refresh tick.
Engines never read the wall clock: every call receives `coordinator.now()`.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed
from homeassistant.util import dt as dt_util

from . import const
from .managers import (
    HouseholdManager,
    HygieneManager,
    InventoryManager,
    PetCareManager,
    WaterManager,
)
from .store import HomeKeeperStore

type HomeKeeperConfigEntry = ConfigEntry[HomeKeeperDataCoordinator]


class HomeKeeperDataCoordinator(DataUpdateCoordinator[dict[str, Any]]):
    """Coordinator for HomeKeeper integration.

    The stored record is the single source of truth. Managers mutate it
    through engine transitions and then call _persist_and_update().
    """

    config_entry: ConfigEntry

    def __init__(
        self,
        hass: HomeAssistant,
        config_entry: ConfigEntry,
        store: HomeKeeperStore,
    ) -> None:
        """Initialize the HomeKeeperDataCoordinator."""
        update_interval_minutes = config_entry.options.get(
            const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
        )

        super().__init__(
            hass,
            const.LOGGER,
            config_entry=config_entry,
            name=f"{const.DOMAIN}{const.COORDINATOR_SUFFIX}",
            update_interval=timedelta(minutes=update_interval_minutes),
        )
        self.store = store
        self._data: dict[str, Any] = {}

        self.household_manager = HouseholdManager(hass, self)
        self.water_manager = WaterManager(hass, self)
        self.hygiene_manager = HygieneManager(hass, self)
        self.pet_manager = PetCareManager(hass, self)
        self.inventory_manager = InventoryManager(hass, self)

    # -------------------------------------------------------------------------------------
    # Periodic + First Refresh
    # -------------------------------------------------------------------------------------

    async def _async_update_data(self) -> dict[str, Any]:
        """Periodic update.

        Derived values (levels, scores, projections) depend only on the
        virtual clock, so a tick just notifies entities to re-read them.
        """
        try:
            self.async_update_listeners()
            return self._data
        except Exception as err:  # pylint: disable=broad-exception-caught
            raise UpdateFailed(f"Error updating HomeKeeper data: {err}") from err

    async def async_config_entry_first_refresh(self) -> None:
        """Load from storage and set up managers."""
        self._data = self.store.data
        for manager in self.managers:
            await manager.async_setup()
        self.async_set_updated_data(self._data)

    @property
    def managers(self) -> tuple[Any, ...]:
        """All domain managers, in setup order."""
        return (
            self.household_manager,
            self.water_manager,
            self.hygiene_manager,
            self.pet_manager,
            self.inventory_manager,
        )

    # -------------------------------------------------------------------------------------
    # Virtual Clock
    # -------------------------------------------------------------------------------------

    @property
    def clock_offset(self) -> timedelta:
        """Accumulated time-travel offset."""
        seconds = self._data.get(const.DATA_CLOCK, {}).get(
            const.DATA_CLOCK_OFFSET_SECONDS, 0.0
        )
        return timedelta(seconds=float(seconds))

    def now(self) -> datetime:
        """Return the virtual current time (UTC)."""
        return dt_util.utcnow() + self.clock_offset

    # -------------------------------------------------------------------------------------
    # Data Access
    # -------------------------------------------------------------------------------------

    @property
    def household_data(self) -> dict[str, Any]:
        """Household roster and module flags."""
        return self._data[const.DATA_HOUSEHOLD]

    @property
    def water_data(self) -> dict[str, Any]:
        """Stored water cycle."""
        return self._data[const.DATA_WATER]

    @property
    def hygiene_data(self) -> dict[str, Any]:
        """Hygiene items keyed by id."""
        return self._data[const.DATA_HYGIENE][const.DATA_ITEMS]

    @property
    def pet_data(self) -> dict[str, Any]:
        """Pet-care items keyed by id."""
        return self._data[const.DATA_PET][const.DATA_ITEMS]

    @property
    def inventory_data(self) -> dict[str, Any]:
        """Inventory items keyed by id."""
        return self._data[const.DATA_INVENTORY][const.DATA_ITEMS]

    @property
    def inventory_categories(self) -> dict[str, Any]:
        """Inventory categories keyed by id."""
        return self._data[const.DATA_INVENTORY][const.DATA_INVENTORY_CATEGORIES]

    def is_module_enabled(self, module: str) -> bool:
        """Return True when a household module is switched on."""
        modules = self.household_data.get(const.DATA_HOUSEHOLD_MODULES, {})
        return bool(modules.get(module, const.DEFAULT_MODULES_ENABLED.get(module)))

    # -------------------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------------------

    def _persist(self) -> None:
        """Save to persistent storage."""
        self.store.set_data(self._data)
        self.hass.add_job(self.store.async_save)

    def _persist_and_update(self) -> None:
        """Save and push the new record to entities."""
        self._persist()
        self.async_set_updated_data(self._data)

    def async_schedule_entity_reload(self) -> None:
        """Reload the entry so platforms rebuild their entity lists."""
        const.LOGGER.debug(
            "DEBUG: Scheduling reload of entry %s after entity set change",
            self.config_entry.entry_id,
        )
        self.hass.config_entries.async_schedule_reload(self.config_entry.entry_id)
