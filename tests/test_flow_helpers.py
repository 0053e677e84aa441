"""Tests for flow_helpers.py validators and schema builders."""

import pytest
import voluptuous as vol

from custom_components.homekeeper import const
from custom_components.homekeeper import flow_helpers as fh

VALID = {
    const.CONF_HOUSEHOLD_NAME: "Home",
    const.CONF_WATER_CAPACITY: 18.9,
    const.CONF_SLEEP_START: 23,
    const.CONF_SLEEP_END: 7,
}


# ----------------------------------------------------------------------------------
# HOUSEHOLD
# ----------------------------------------------------------------------------------


def test_valid_household_has_no_errors() -> None:
    """A complete input passes."""
    assert fh.validate_household_inputs(VALID) == {}


@pytest.mark.parametrize(
    ("field", "value", "error"),
    [
        (const.CONF_HOUSEHOLD_NAME, "", const.CFOP_ERROR_NAME_REQUIRED),
        (const.CONF_WATER_CAPACITY, -0.5, const.CFOP_ERROR_INVALID_CAPACITY),
        (const.CONF_WATER_CAPACITY, "lots", const.CFOP_ERROR_INVALID_CAPACITY),
        (const.CONF_SLEEP_START, 24, const.CFOP_ERROR_INVALID_HOUR),
        (const.CONF_SLEEP_END, 6.5, const.CFOP_ERROR_INVALID_HOUR),
        (const.CONF_SLEEP_END, None, const.CFOP_ERROR_INVALID_HOUR),
    ],
)
def test_invalid_household_field(field: str, value, error: str) -> None:
    """Each bad field is reported under its own key."""
    assert fh.validate_household_inputs({**VALID, field: value}) == {field: error}


def test_household_data_is_normalized() -> None:
    """Hours become ints, capacity a float, the name is stripped."""
    data = fh.build_household_data(
        {
            const.CONF_HOUSEHOLD_NAME: " Home ",
            const.CONF_WATER_CAPACITY: 20,
            const.CONF_SLEEP_START: 22.0,
            const.CONF_SLEEP_END: 6.0,
        }
    )
    assert data == {
        const.CONF_HOUSEHOLD_NAME: "Home",
        const.CONF_WATER_CAPACITY: 20.0,
        const.CONF_SLEEP_START: 22,
        const.CONF_SLEEP_END: 6,
    }
    assert isinstance(data[const.CONF_SLEEP_START], int)


def test_household_schema_defaults() -> None:
    """An empty submission is filled from the defaults."""
    schema = fh.build_household_schema()
    filled = schema({})
    assert filled[const.CONF_HOUSEHOLD_NAME] == const.HOMEKEEPER_TITLE
    assert filled[const.CONF_WATER_CAPACITY] == const.DEMO_WATER_CAPACITY
    assert filled[const.CONF_SLEEP_START] == const.DEFAULT_SLEEP_START
    assert filled[const.CONF_SLEEP_END] == const.DEFAULT_SLEEP_END


def test_household_schema_rejects_negative_capacity() -> None:
    """The capacity selector has a lower bound of zero."""
    with pytest.raises(vol.Invalid):
        fh.build_household_schema()({**VALID, const.CONF_WATER_CAPACITY: -1})


# ----------------------------------------------------------------------------------
# GENERAL OPTIONS
# ----------------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("value", "valid"), [(1, True), (5.0, True), (0, False), ("5", False)]
)
def test_update_interval_validation(value, valid: bool) -> None:
    """Intervals must be numbers of at least one minute."""
    errors = fh.validate_general_options_inputs({const.CONF_UPDATE_INTERVAL: value})
    if valid:
        assert errors == {}
    else:
        assert errors == {
            const.CONF_UPDATE_INTERVAL: const.CFOP_ERROR_INVALID_UPDATE_INTERVAL
        }


def test_general_options_schema_default() -> None:
    """The stored interval is offered as the default."""
    assert fh.build_general_options_schema(12)({}) == {const.CONF_UPDATE_INTERVAL: 12}
