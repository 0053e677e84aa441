# File: options_flow.py
"""Options Flow for the HomeKeeper integration.

Only system settings live in the config entry; saving them reloads the
integration so the coordinator picks up the new refresh interval.
"""

from __future__ import annotations

from typing import Any

from homeassistant import config_entries

from . import const
from . import flow_helpers as fh


class HomeKeeperOptionsFlowHandler(config_entries.OptionsFlow):
    """Options Flow for editing system settings."""

    def __init__(self, _config_entry: config_entries.ConfigEntry):
        """Initialize the options flow."""
        self._entry_options: dict[str, Any] = {}

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        """Edit the refresh interval."""
        self._entry_options = dict(self.config_entry.options)
        errors: dict[str, str] = {}

        if user_input is not None:
            errors = fh.validate_general_options_inputs(user_input)
            if not errors:
                self._entry_options[const.CONF_UPDATE_INTERVAL] = int(
                    user_input[const.CONF_UPDATE_INTERVAL]
                )
                const.LOGGER.debug(
                    "DEBUG: Update interval set to %s minutes",
                    self._entry_options[const.CONF_UPDATE_INTERVAL],
                )
                await self._update_system_settings_and_reload()
                return self.async_create_entry(title="", data=self._entry_options)

        return self.async_show_form(
            step_id=const.OPTIONS_FLOW_STEP_INIT,
            data_schema=fh.build_general_options_schema(
                default_update_interval=self._entry_options.get(
                    const.CONF_UPDATE_INTERVAL, const.DEFAULT_UPDATE_INTERVAL
                )
            ),
            errors=errors,
        )

    async def _update_system_settings_and_reload(self) -> None:
        """Write options to the entry and reload it."""
        self.hass.config_entries.async_update_entry(
            self.config_entry, options=self._entry_options
        )
        const.LOGGER.debug(
            "DEBUG: Updating system settings. Reloading entry: %s",
            self.config_entry.entry_id,
        )
        await self.hass.config_entries.async_reload(self.config_entry.entry_id)
