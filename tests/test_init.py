"""Tests for HomeKeeper setup, reload and removal."""

from typing import Any
from unittest.mock import patch

from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.homekeeper import const


async def test_setup_seeds_storage_from_entry(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """A first setup builds the record from the config entry data."""
    assert init_integration.state is ConfigEntryState.LOADED

    coordinator = init_integration.runtime_data
    assert coordinator.household_data[const.DATA_HOUSEHOLD_NAME] == "Test Home"
    assert coordinator.water_manager.state.capacity == 18.9
    assert coordinator.water_manager.state.sleep_window == (0, 0)
    assert coordinator.clock_offset.total_seconds() == 0


async def test_data_survives_reload(
    hass: HomeAssistant,
    init_integration: MockConfigEntry,
    hass_storage: dict[str, Any],
) -> None:
    """Changes are flushed on unload and loaded again on setup."""
    coordinator = init_integration.runtime_data
    coordinator.household_manager.time_travel(12)
    await hass.async_block_till_done()

    assert await hass.config_entries.async_reload(init_integration.entry_id)
    await hass.async_block_till_done()

    reloaded = init_integration.runtime_data
    assert reloaded is not coordinator
    assert reloaded.clock_offset.total_seconds() == 12 * 3600
    assert hass_storage[const.STORAGE_KEY]["data"][const.DATA_CLOCK] == {
        const.DATA_CLOCK_OFFSET_SECONDS: 12 * 3600.0
    }


async def test_remove_entry_deletes_storage(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Removing the entry deletes the storage file."""
    with patch(
        "custom_components.homekeeper.HomeKeeperStore.async_delete_storage"
    ) as mock_delete:
        await hass.config_entries.async_remove(init_integration.entry_id)
        await hass.async_block_till_done()

    mock_delete.assert_called_once()
    assert init_integration.state is ConfigEntryState.NOT_LOADED
