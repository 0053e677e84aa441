"""Tests for HomeKeeper diagnostics module.

Config entry diagnostics return the raw storage record so it can be pasted
back for recovery; device diagnostics return the bucket behind one module.
"""

# pylint: disable=redefined-outer-name  # Pytest fixtures shadow names

from homeassistant.core import HomeAssistant
from homeassistant.helpers import device_registry as dr
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.homekeeper import const
from custom_components.homekeeper.diagnostics import (
    async_get_config_entry_diagnostics,
    async_get_device_diagnostics,
)


async def test_config_entry_diagnostics_is_raw_storage(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """The export is the stored record itself."""
    coordinator = init_integration.runtime_data

    result = await async_get_config_entry_diagnostics(hass, init_integration)

    assert result is coordinator.store.data
    assert result[const.DATA_WATER][const.DATA_WATER_CAPACITY] == 18.9
    assert result[const.DATA_META][const.DATA_META_SCHEMA_VERSION] == (
        const.SCHEMA_VERSION
    )


async def test_device_diagnostics_per_module(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Each module device exports its own bucket."""
    registry = dr.async_get(hass)
    device = registry.async_get_device(
        identifiers={
            (const.DOMAIN, f"{init_integration.entry_id}{const.DEVICE_ID_SUFFIX_WATER}")
        }
    )
    assert device is not None

    result = await async_get_device_diagnostics(hass, init_integration, device)

    assert result["module"] == const.DATA_WATER
    assert result["data"] is init_integration.runtime_data.water_data
    assert "virtual_now" in result


async def test_device_diagnostics_unknown_device(
    hass: HomeAssistant, init_integration: MockConfigEntry
) -> None:
    """Devices that are not module devices report an error."""
    registry = dr.async_get(hass)
    device = registry.async_get_or_create(
        config_entry_id=init_integration.entry_id,
        identifiers={(const.DOMAIN, f"{init_integration.entry_id}_garage")},
    )

    result = await async_get_device_diagnostics(hass, init_integration, device)

    assert "error" in result
