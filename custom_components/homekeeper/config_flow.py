# File: config_flow.py
"""Config flow for the HomeKeeper integration.

A single step collects the household name, the water tank capacity and the
nightly sleep window. Everything else (members, items, categories) is managed
at runtime through services and stored in the integration's storage file.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries
from homeassistant.core import callback

from . import const
from . import flow_helpers as fh
from .options_flow import HomeKeeperOptionsFlowHandler


class HomeKeeperConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for HomeKeeper."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Collect household settings and create the entry."""

        # Only one household per Home Assistant instance
        if any(self._async_current_entries()):
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        errors: dict[str, str] = {}
        if user_input is not None:
            errors = fh.validate_household_inputs(user_input)
            if not errors:
                data = fh.build_household_data(user_input)
                const.LOGGER.debug(
                    "DEBUG: Creating HomeKeeper entry for household '%s'",
                    data[const.CONF_HOUSEHOLD_NAME],
                )
                return self.async_create_entry(
                    title=data[const.CONF_HOUSEHOLD_NAME],
                    data=data,
                    options={
                        const.CONF_UPDATE_INTERVAL: const.DEFAULT_UPDATE_INTERVAL
                    },
                )

        defaults = user_input or {}
        return self.async_show_form(
            step_id=const.CONFIG_FLOW_STEP_USER,
            data_schema=fh.build_household_schema(
                default_name=defaults.get(
                    const.CONF_HOUSEHOLD_NAME, const.HOMEKEEPER_TITLE
                ),
                default_capacity=defaults.get(
                    const.CONF_WATER_CAPACITY, const.DEMO_WATER_CAPACITY
                ),
            ),
            errors=errors,
        )

    @staticmethod
    @callback
    def async_get_options_flow(config_entry):
        """Return the Options Flow."""
        return HomeKeeperOptionsFlowHandler(config_entry)
