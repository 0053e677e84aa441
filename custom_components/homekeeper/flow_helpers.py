# File: flow_helpers.py
"""Helpers for the HomeKeeper config and options flows.

Schemas and validators live here so the config flow and the options flow
build the same forms and reject the same inputs.
"""

from __future__ import annotations

from typing import Any

from homeassistant.helpers import selector
import voluptuous as vol

from . import const

# ----------------------------------------------------------------------------------
# HOUSEHOLD SCHEMA
# ----------------------------------------------------------------------------------


def _hour_selector() -> selector.NumberSelector:
    return selector.NumberSelector(
        selector.NumberSelectorConfig(
            min=0, max=23, step=1, mode=selector.NumberSelectorMode.BOX
        )
    )


def build_household_schema(
    default_name: str = const.HOMEKEEPER_TITLE,
    default_capacity: float = const.DEMO_WATER_CAPACITY,
    default_sleep_start: int = const.DEFAULT_SLEEP_START,
    default_sleep_end: int = const.DEFAULT_SLEEP_END,
) -> vol.Schema:
    """Build the schema for the household setup step.

    A capacity of 0 leaves the water module unconfigured until a capacity is
    set through the set_water_capacity service.
    """
    return vol.Schema(
        {
            vol.Required(const.CONF_HOUSEHOLD_NAME, default=default_name): str,
            vol.Required(
                const.CONF_WATER_CAPACITY, default=default_capacity
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    min=0,
                    step=0.1,
                    mode=selector.NumberSelectorMode.BOX,
                    unit_of_measurement="L",
                )
            ),
            vol.Required(
                const.CONF_SLEEP_START, default=default_sleep_start
            ): _hour_selector(),
            vol.Required(
                const.CONF_SLEEP_END, default=default_sleep_end
            ): _hour_selector(),
        }
    )


def validate_household_inputs(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate household setup inputs.

    Returns:
        Dictionary of errors keyed by field (empty if validation passes).
    """
    errors: dict[str, str] = {}

    if not str(user_input.get(const.CONF_HOUSEHOLD_NAME, "")).strip():
        errors[const.CONF_HOUSEHOLD_NAME] = const.CFOP_ERROR_NAME_REQUIRED

    try:
        capacity = float(user_input.get(const.CONF_WATER_CAPACITY, 0))
    except (TypeError, ValueError):
        capacity = -1.0
    if capacity < 0:
        errors[const.CONF_WATER_CAPACITY] = const.CFOP_ERROR_INVALID_CAPACITY

    for key in (const.CONF_SLEEP_START, const.CONF_SLEEP_END):
        value = user_input.get(key)
        if (
            not isinstance(value, (int, float))
            or int(value) != value
            or not 0 <= value <= 23
        ):
            errors[key] = const.CFOP_ERROR_INVALID_HOUR

    return errors


def build_household_data(user_input: dict[str, Any]) -> dict[str, Any]:
    """Normalize validated household inputs into config entry data."""
    return {
        const.CONF_HOUSEHOLD_NAME: str(user_input[const.CONF_HOUSEHOLD_NAME]).strip(),
        const.CONF_WATER_CAPACITY: float(user_input[const.CONF_WATER_CAPACITY]),
        const.CONF_SLEEP_START: int(user_input[const.CONF_SLEEP_START]),
        const.CONF_SLEEP_END: int(user_input[const.CONF_SLEEP_END]),
    }


# ----------------------------------------------------------------------------------
# GENERAL OPTIONS SCHEMA
# ----------------------------------------------------------------------------------


def build_general_options_schema(
    default_update_interval: int = const.DEFAULT_UPDATE_INTERVAL,
) -> vol.Schema:
    """Build the schema for the general options step."""
    return vol.Schema(
        {
            vol.Required(
                const.CONF_UPDATE_INTERVAL, default=default_update_interval
            ): selector.NumberSelector(
                selector.NumberSelectorConfig(
                    min=1,
                    max=60,
                    step=1,
                    mode=selector.NumberSelectorMode.BOX,
                    unit_of_measurement="min",
                )
            ),
        }
    )


def validate_general_options_inputs(user_input: dict[str, Any]) -> dict[str, str]:
    """Validate general options inputs."""
    errors: dict[str, str] = {}
    value = user_input.get(const.CONF_UPDATE_INTERVAL)
    if not isinstance(value, (int, float)) or value < 1:
        errors[const.CONF_UPDATE_INTERVAL] = const.CFOP_ERROR_INVALID_UPDATE_INTERVAL
    return errors
