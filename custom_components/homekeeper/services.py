# File: services.py
"""Defines custom services for the HomeKeeper integration.

These services allow direct actions through scripts or automations. Items are
addressed by internal_id; every handler delegates to a manager, which raises
translated HomeAssistantError for unknown ids or disabled modules. Handlers
log and re-raise those; anything else is wrapped as an action_failed error.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv
import voluptuous as vol

from . import const

if TYPE_CHECKING:
    from .coordinator import HomeKeeperDataCoordinator

# --- Service Schemas ---
EMPTY_SCHEMA = vol.Schema({})

CALIBRATE_WATER_SCHEMA = vol.Schema(
    {vol.Required(const.FIELD_LEVEL): vol.All(vol.Coerce(float), vol.Range(min=0))}
)

SET_WATER_CAPACITY_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_CAPACITY): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        )
    }
)

SET_SLEEP_WINDOW_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_START): vol.All(
            vol.Coerce(int), vol.Range(min=0, max=23)
        ),
        vol.Required(const.FIELD_END): vol.All(
            vol.Coerce(int), vol.Range(min=0, max=23)
        ),
    }
)

SIMULATE_WATER_SCENARIO_SCHEMA = vol.Schema(
    {vol.Required(const.FIELD_SCENARIO): vol.In(const.WATER_SCENARIOS)}
)

ITEM_SCHEMA = vol.Schema({vol.Required(const.FIELD_ITEM_ID): cv.string})

UPDATE_HYGIENE_ITEM_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_ITEM_ID): cv.string,
        vol.Required(const.FIELD_INTERVAL): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional(const.FIELD_UNIT, default=const.UNIT_DAYS): vol.In(
            const.HYGIENE_UNITS
        ),
    }
)

UPDATE_PET_CARE_ITEM_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_ITEM_ID): cv.string,
        vol.Required(const.FIELD_INTERVAL): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional(const.FIELD_UNIT, default=const.UNIT_HOURS): vol.In(
            const.PET_UNITS
        ),
    }
)

RESTOCK_INVENTORY_ITEM_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_ITEM_ID): cv.string,
        vol.Required(const.FIELD_AMOUNT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
    }
)

SET_INVENTORY_STOCK_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_ITEM_ID): cv.string,
        vol.Required(const.FIELD_STOCK): vol.All(vol.Coerce(float), vol.Range(min=0)),
    }
)

ADD_INVENTORY_ITEM_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_NAME): cv.string,
        vol.Required(const.FIELD_CATEGORY_ID): cv.string,
        vol.Optional(const.FIELD_STOCK, default=0): vol.All(
            vol.Coerce(float), vol.Range(min=0)
        ),
        vol.Optional(
            const.FIELD_THRESHOLD, default=const.DEFAULT_INVENTORY_THRESHOLD
        ): vol.All(vol.Coerce(float), vol.Range(min=0)),
        vol.Optional(const.FIELD_IS_SHARED, default=True): cv.boolean,
    }
)

ADD_INVENTORY_CATEGORY_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_NAME): cv.string,
        vol.Optional(const.FIELD_EMOJI, default=""): cv.string,
    }
)

REMOVE_INVENTORY_CATEGORY_SCHEMA = vol.Schema(
    {vol.Required(const.FIELD_CATEGORY_ID): cv.string}
)

ADD_MEMBER_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_NAME): cv.string,
        vol.Optional(const.FIELD_ROLE, default=const.MEMBER_ROLE_MEMBER): vol.In(
            const.MEMBER_ROLES
        ),
        vol.Optional(const.FIELD_SPECIES): vol.In(const.PET_SPECIES),
    }
)

REMOVE_MEMBER_SCHEMA = vol.Schema({vol.Required(const.FIELD_MEMBER_ID): cv.string})

SET_MODULE_ENABLED_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_MODULE): vol.In(const.MODULES),
        vol.Required(const.FIELD_ENABLED): cv.boolean,
    }
)

TIME_TRAVEL_SCHEMA = vol.Schema(
    {vol.Required(const.FIELD_HOURS): vol.Coerce(float)}
)


def _get_coordinator(hass: HomeAssistant) -> HomeKeeperDataCoordinator:
    """Return the coordinator of the first loaded HomeKeeper entry."""
    for entry in hass.config_entries.async_entries(const.DOMAIN):
        if entry.state is ConfigEntryState.LOADED:
            return entry.runtime_data
    raise HomeAssistantError(
        translation_domain=const.DOMAIN,
        translation_key=const.TRANS_KEY_ERROR_NOT_LOADED,
    )


def _action_failed(action: str, err: Exception) -> HomeAssistantError:
    """Log an unexpected handler failure and wrap it for the caller."""
    const.LOGGER.error("ERROR: %s: Unexpected failure: %s", action, err)
    return HomeAssistantError(
        translation_domain=const.DOMAIN,
        translation_key=const.TRANS_KEY_ERROR_ACTION_FAILED,
        translation_placeholders={"action": action, "error": str(err)},
    )


def async_setup_services(hass: HomeAssistant) -> None:
    """Register HomeKeeper services."""

    # --- Water ---

    async def handle_refill_water(call: ServiceCall) -> ServiceResponse:
        """Record a full refill and return the learning report."""
        try:
            report = _get_coordinator(hass).water_manager.refill()
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Refill Water: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Refill Water", e) from e
        return report.as_dict()

    async def handle_calibrate_water(call: ServiceCall) -> ServiceResponse:
        """Correct the water model from a measured level."""
        try:
            report = _get_coordinator(hass).water_manager.calibrate(
                call.data[const.FIELD_LEVEL]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Calibrate Water: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Calibrate Water", e) from e
        return report.as_dict()

    async def handle_set_water_capacity(call: ServiceCall) -> None:
        """Change the tank capacity."""
        try:
            _get_coordinator(hass).water_manager.set_capacity(
                call.data[const.FIELD_CAPACITY]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Set Water Capacity: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Set Water Capacity", e) from e

    async def handle_set_sleep_window(call: ServiceCall) -> None:
        """Change the nightly quiet window."""
        try:
            _get_coordinator(hass).water_manager.set_sleep_window(
                call.data[const.FIELD_START], call.data[const.FIELD_END]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Set Sleep Window: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Set Sleep Window", e) from e

    async def handle_simulate_water_scenario(call: ServiceCall) -> None:
        """Overwrite the open cycle with a debug scenario."""
        try:
            _get_coordinator(hass).water_manager.simulate_scenario(
                call.data[const.FIELD_SCENARIO]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Simulate Water Scenario: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Simulate Water Scenario", e) from e

    # --- Hygiene / Pet Care ---

    async def handle_clean_hygiene_item(call: ServiceCall) -> None:
        """Mark a hygiene item as cleaned."""
        try:
            _get_coordinator(hass).hygiene_manager.perform(
                call.data[const.FIELD_ITEM_ID]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Clean Hygiene Item: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Clean Hygiene Item", e) from e

    async def handle_update_hygiene_item(call: ServiceCall) -> None:
        """Change a hygiene item's interval."""
        try:
            _get_coordinator(hass).hygiene_manager.update_interval(
                call.data[const.FIELD_ITEM_ID],
                call.data[const.FIELD_INTERVAL],
                call.data[const.FIELD_UNIT],
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Update Hygiene Item: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Update Hygiene Item", e) from e

    async def handle_perform_pet_care(call: ServiceCall) -> None:
        """Mark a pet-care task as done."""
        try:
            _get_coordinator(hass).pet_manager.perform(call.data[const.FIELD_ITEM_ID])
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Perform Pet Care: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Perform Pet Care", e) from e

    async def handle_update_pet_care_item(call: ServiceCall) -> None:
        """Change a pet-care task's interval."""
        try:
            _get_coordinator(hass).pet_manager.update_interval(
                call.data[const.FIELD_ITEM_ID],
                call.data[const.FIELD_INTERVAL],
                call.data[const.FIELD_UNIT],
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Update Pet Care Item: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Update Pet Care Item", e) from e

    # --- Inventory ---

    async def handle_open_inventory_item(call: ServiceCall) -> None:
        """Take one unit of an item into use."""
        try:
            _get_coordinator(hass).inventory_manager.open_item(
                call.data[const.FIELD_ITEM_ID]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Open Inventory Item: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Open Inventory Item", e) from e

    async def handle_restock_inventory_item(call: ServiceCall) -> None:
        """Add units to an item."""
        try:
            _get_coordinator(hass).inventory_manager.restock_item(
                call.data[const.FIELD_ITEM_ID], call.data[const.FIELD_AMOUNT]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Restock Inventory Item: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Restock Inventory Item", e) from e

    async def handle_set_inventory_stock(call: ServiceCall) -> None:
        """Correct an item's stock to a counted value."""
        try:
            _get_coordinator(hass).inventory_manager.set_stock(
                call.data[const.FIELD_ITEM_ID], call.data[const.FIELD_STOCK]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Set Inventory Stock: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Set Inventory Stock", e) from e

    async def handle_add_inventory_item(call: ServiceCall) -> ServiceResponse:
        """Create an inventory item and return its id."""
        try:
            item_id = _get_coordinator(hass).inventory_manager.add_item(
                call.data[const.FIELD_NAME],
                call.data[const.FIELD_CATEGORY_ID],
                stock=call.data[const.FIELD_STOCK],
                threshold=call.data[const.FIELD_THRESHOLD],
                is_shared=call.data[const.FIELD_IS_SHARED],
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Add Inventory Item: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Add Inventory Item", e) from e
        return {const.FIELD_ITEM_ID: item_id}

    async def handle_remove_inventory_item(call: ServiceCall) -> None:
        """Delete an inventory item."""
        try:
            _get_coordinator(hass).inventory_manager.remove_item(
                call.data[const.FIELD_ITEM_ID]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Remove Inventory Item: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Remove Inventory Item", e) from e

    async def handle_add_inventory_category(call: ServiceCall) -> ServiceResponse:
        """Create an inventory category and return its id."""
        try:
            category_id = _get_coordinator(hass).inventory_manager.add_category(
                call.data[const.FIELD_NAME], call.data[const.FIELD_EMOJI]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Add Inventory Category: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Add Inventory Category", e) from e
        return {const.FIELD_CATEGORY_ID: category_id}

    async def handle_remove_inventory_category(call: ServiceCall) -> None:
        """Delete an inventory category."""
        try:
            _get_coordinator(hass).inventory_manager.remove_category(
                call.data[const.FIELD_CATEGORY_ID]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Remove Inventory Category: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Remove Inventory Category", e) from e

    # --- Household ---

    async def handle_add_member(call: ServiceCall) -> ServiceResponse:
        """Add a person or pet and return its id."""
        try:
            member_id = _get_coordinator(hass).household_manager.add_member(
                call.data[const.FIELD_NAME],
                call.data[const.FIELD_ROLE],
                call.data.get(const.FIELD_SPECIES),
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Add Member: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Add Member", e) from e
        return {const.FIELD_MEMBER_ID: member_id}

    async def handle_remove_member(call: ServiceCall) -> None:
        """Remove a person or pet."""
        try:
            _get_coordinator(hass).household_manager.remove_member(
                call.data[const.FIELD_MEMBER_ID]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Remove Member: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Remove Member", e) from e

    async def handle_set_module_enabled(call: ServiceCall) -> None:
        """Switch a module on or off."""
        try:
            _get_coordinator(hass).household_manager.set_module_enabled(
                call.data[const.FIELD_MODULE], call.data[const.FIELD_ENABLED]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Set Module Enabled: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Set Module Enabled", e) from e

    async def handle_time_travel(call: ServiceCall) -> None:
        """Shift the virtual clock."""
        try:
            _get_coordinator(hass).household_manager.time_travel(
                call.data[const.FIELD_HOURS]
            )
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Time Travel: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Time Travel", e) from e

    async def handle_reset_time_travel(call: ServiceCall) -> None:
        """Return the virtual clock to wall time."""
        try:
            _get_coordinator(hass).household_manager.reset_time_travel()
        except HomeAssistantError as e:
            const.LOGGER.info("ERROR: Reset Time Travel: %s", e)
            raise
        except Exception as e:
            raise _action_failed("Reset Time Travel", e) from e

    # service name: (handler, schema, supports_response)
    registrations: dict[str, tuple[Any, vol.Schema, SupportsResponse]] = {
        const.SERVICE_REFILL_WATER: (
            handle_refill_water,
            EMPTY_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        const.SERVICE_CALIBRATE_WATER: (
            handle_calibrate_water,
            CALIBRATE_WATER_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        const.SERVICE_SET_WATER_CAPACITY: (
            handle_set_water_capacity,
            SET_WATER_CAPACITY_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_SET_SLEEP_WINDOW: (
            handle_set_sleep_window,
            SET_SLEEP_WINDOW_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_SIMULATE_WATER_SCENARIO: (
            handle_simulate_water_scenario,
            SIMULATE_WATER_SCENARIO_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_CLEAN_HYGIENE_ITEM: (
            handle_clean_hygiene_item,
            ITEM_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_UPDATE_HYGIENE_ITEM: (
            handle_update_hygiene_item,
            UPDATE_HYGIENE_ITEM_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_PERFORM_PET_CARE: (
            handle_perform_pet_care,
            ITEM_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_UPDATE_PET_CARE_ITEM: (
            handle_update_pet_care_item,
            UPDATE_PET_CARE_ITEM_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_OPEN_INVENTORY_ITEM: (
            handle_open_inventory_item,
            ITEM_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_RESTOCK_INVENTORY_ITEM: (
            handle_restock_inventory_item,
            RESTOCK_INVENTORY_ITEM_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_SET_INVENTORY_STOCK: (
            handle_set_inventory_stock,
            SET_INVENTORY_STOCK_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_ADD_INVENTORY_ITEM: (
            handle_add_inventory_item,
            ADD_INVENTORY_ITEM_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        const.SERVICE_REMOVE_INVENTORY_ITEM: (
            handle_remove_inventory_item,
            ITEM_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_ADD_INVENTORY_CATEGORY: (
            handle_add_inventory_category,
            ADD_INVENTORY_CATEGORY_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        const.SERVICE_REMOVE_INVENTORY_CATEGORY: (
            handle_remove_inventory_category,
            REMOVE_INVENTORY_CATEGORY_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_ADD_MEMBER: (
            handle_add_member,
            ADD_MEMBER_SCHEMA,
            SupportsResponse.OPTIONAL,
        ),
        const.SERVICE_REMOVE_MEMBER: (
            handle_remove_member,
            REMOVE_MEMBER_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_SET_MODULE_ENABLED: (
            handle_set_module_enabled,
            SET_MODULE_ENABLED_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_TIME_TRAVEL: (
            handle_time_travel,
            TIME_TRAVEL_SCHEMA,
            SupportsResponse.NONE,
        ),
        const.SERVICE_RESET_TIME_TRAVEL: (
            handle_reset_time_travel,
            EMPTY_SCHEMA,
            SupportsResponse.NONE,
        ),
    }

    for service, (handler, schema, supports_response) in registrations.items():
        if hass.services.has_service(const.DOMAIN, service):
            continue
        hass.services.async_register(
            const.DOMAIN,
            service,
            handler,
            schema=schema,
            supports_response=supports_response,
        )

    const.LOGGER.info("INFO: HomeKeeper services have been registered successfully")


async def async_unload_services(hass: HomeAssistant) -> None:
    """Unregister HomeKeeper services when unloading the integration."""
    services = [
        const.SERVICE_REFILL_WATER,
        const.SERVICE_CALIBRATE_WATER,
        const.SERVICE_SET_WATER_CAPACITY,
        const.SERVICE_SET_SLEEP_WINDOW,
        const.SERVICE_SIMULATE_WATER_SCENARIO,
        const.SERVICE_CLEAN_HYGIENE_ITEM,
        const.SERVICE_UPDATE_HYGIENE_ITEM,
        const.SERVICE_PERFORM_PET_CARE,
        const.SERVICE_UPDATE_PET_CARE_ITEM,
        const.SERVICE_OPEN_INVENTORY_ITEM,
        const.SERVICE_RESTOCK_INVENTORY_ITEM,
        const.SERVICE_SET_INVENTORY_STOCK,
        const.SERVICE_ADD_INVENTORY_ITEM,
        const.SERVICE_REMOVE_INVENTORY_ITEM,
        const.SERVICE_ADD_INVENTORY_CATEGORY,
        const.SERVICE_REMOVE_INVENTORY_CATEGORY,
        const.SERVICE_ADD_MEMBER,
        const.SERVICE_REMOVE_MEMBER,
        const.SERVICE_SET_MODULE_ENABLED,
        const.SERVICE_TIME_TRAVEL,
        const.SERVICE_RESET_TIME_TRAVEL,
    ]

    for service in services:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)

    const.LOGGER.info("INFO: HomeKeeper services have been unregistered")
