# File: helpers/device_helpers.py
"""Device registry helper functions for HomeKeeper.

Each enabled module is exposed as one service device per config entry, so
water, hygiene, pet-care and inventory entities group together in the UI.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.helpers.device_registry import DeviceEntryType, DeviceInfo

from .. import const

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry


# ==============================================================================
# Device Info Construction
# ==============================================================================

_MODULE_DEVICES = {
    const.MODULE_WATER: (const.DEVICE_ID_SUFFIX_WATER, "Water"),
    const.MODULE_HYGIENE: (const.DEVICE_ID_SUFFIX_HYGIENE, "Hygiene"),
    const.MODULE_PET: (const.DEVICE_ID_SUFFIX_PET, "Pet Care"),
    const.MODULE_INVENTORY: (const.DEVICE_ID_SUFFIX_INVENTORY, "Inventory"),
}


def create_module_device_info(module: str, config_entry: ConfigEntry) -> DeviceInfo:
    """Create device info for a household module.

    Args:
        module: One of const.MODULES
        config_entry: Config entry for this integration instance

    Returns:
        DeviceInfo dict for the module device
    """
    suffix, label = _MODULE_DEVICES[module]
    return DeviceInfo(
        identifiers={(const.DOMAIN, f"{config_entry.entry_id}{suffix}")},
        name=f"{label} ({config_entry.title})",
        manufacturer=const.HOMEKEEPER_TITLE,
        model=f"{label} Module",
        entry_type=DeviceEntryType.SERVICE,
    )
