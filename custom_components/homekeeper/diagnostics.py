"""Diagnostics support for HomeKeeper integration.

The config entry diagnostics return the raw storage record, identical to the
homekeeper_data file, so it can be pasted back during data recovery.
"""

from typing import Any

from homeassistant.core import HomeAssistant
from homeassistant.helpers.device_registry import DeviceEntry

from . import const
from .coordinator import HomeKeeperConfigEntry

_DEVICE_SUFFIX_TO_BUCKET = {
    const.DEVICE_ID_SUFFIX_WATER: const.DATA_WATER,
    const.DEVICE_ID_SUFFIX_HYGIENE: const.DATA_HYGIENE,
    const.DEVICE_ID_SUFFIX_PET: const.DATA_PET,
    const.DEVICE_ID_SUFFIX_INVENTORY: const.DATA_INVENTORY,
}


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: HomeKeeperConfigEntry
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator = entry.runtime_data
    return coordinator.store.data


async def async_get_device_diagnostics(
    hass: HomeAssistant, entry: HomeKeeperConfigEntry, device: DeviceEntry
) -> dict[str, Any]:
    """Return the stored bucket behind a module device."""
    coordinator = entry.runtime_data

    device_id = None
    for identifier in device.identifiers:
        if identifier[0] == const.DOMAIN:
            device_id = identifier[1]
            break

    if not device_id or not device_id.startswith(entry.entry_id):
        return {"error": "Could not determine module from device identifiers"}

    suffix = device_id[len(entry.entry_id) :]
    bucket = _DEVICE_SUFFIX_TO_BUCKET.get(suffix)
    if bucket is None:
        return {"error": f"Unknown module device: {device_id}"}

    return {
        "module": bucket,
        "virtual_now": coordinator.now().isoformat(),
        "data": coordinator.store.data.get(bucket, {}),
    }
