"""Initialization file for the HomeKeeper integration.

Handles setting up the integration, including loading configuration entries,
initializing data storage, and preparing the coordinator for data handling.

Key Features:
- Config entry setup and unload support.
- Coordinator initialization for data synchronization.
- Storage management for persistent data handling.
"""

from __future__ import annotations

from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from . import const
from .coordinator import HomeKeeperConfigEntry, HomeKeeperDataCoordinator
from .services import async_setup_services, async_unload_services
from .store import HomeKeeperStore


async def async_setup_entry(hass: HomeAssistant, entry: HomeKeeperConfigEntry) -> bool:
    """Set up the integration from a config entry."""
    const.LOGGER.info("INFO: Starting setup for HomeKeeper entry: %s", entry.entry_id)

    # Day boundaries and the sleep window follow the HA timezone.
    const.set_default_timezone(hass)

    store = HomeKeeperStore(hass, const.STORAGE_KEY)
    # Seeds a fresh file from the config entry data on first run.
    await store.async_initialize(entry.data)

    coordinator = HomeKeeperDataCoordinator(hass, entry, store)

    try:
        await coordinator.async_config_entry_first_refresh()
    except ConfigEntryNotReady as e:
        const.LOGGER.error("ERROR: Failed to refresh coordinator data: %s", e)
        raise

    entry.runtime_data = coordinator

    async_setup_services(hass)

    await hass.config_entries.async_forward_entry_setups(entry, const.PLATFORMS)

    const.LOGGER.info("INFO: HomeKeeper setup complete for entry: %s", entry.entry_id)
    return True


async def async_unload_entry(hass: HomeAssistant, entry: HomeKeeperConfigEntry) -> bool:
    """Unload a config entry."""
    const.LOGGER.info("INFO: Unloading HomeKeeper entry: %s", entry.entry_id)

    unload_ok = await hass.config_entries.async_unload_platforms(entry, const.PLATFORMS)

    if unload_ok:
        # Flush pending writes before the entry goes away
        await entry.runtime_data.store.async_save()
        await async_unload_services(hass)

    return unload_ok


async def async_remove_entry(hass: HomeAssistant, entry: HomeKeeperConfigEntry) -> None:
    """Handle removal of a config entry."""
    const.LOGGER.info("INFO: Removing HomeKeeper entry: %s", entry.entry_id)

    store = HomeKeeperStore(hass, const.STORAGE_KEY)
    await store.async_delete_storage()

    const.LOGGER.info("INFO: HomeKeeper entry data cleared: %s", entry.entry_id)
