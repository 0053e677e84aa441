"""Shared fixtures for HomeKeeper tests."""

from datetime import UTC, datetime
from typing import Any
from zoneinfo import ZoneInfo

import pytest
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.homekeeper import const
from custom_components.homekeeper.coordinator import HomeKeeperDataCoordinator
from custom_components.homekeeper.utils import dt_utils

# pylint: disable=invalid-name
pytest_plugins = "pytest_homeassistant_custom_component"
# pylint: enable=invalid-name

UTC_ZONE = ZoneInfo("UTC")

# Thursday 10:00 in US/Pacific (the pytest-homeassistant default zone)
FROZEN_NOW = "2026-01-15 18:00:00"
FROZEN_NOW_DT = datetime(2026, 1, 15, 18, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: Any) -> Any:
    """Enable custom integrations in tests."""
    # pylint: disable=unused-argument
    yield


@pytest.fixture(autouse=True)
def reset_default_timezone() -> Any:
    """Keep the engines' default zone at UTC between tests.

    Integration setup points dt_utils at the HA zone; engine tests assume UTC.
    """
    dt_utils.set_default_timezone(UTC_ZONE)
    yield
    dt_utils.set_default_timezone(UTC_ZONE)


@pytest.fixture
def entry_data() -> dict[str, Any]:
    """Config entry data for a configured tank with no sleep window."""
    return {
        const.CONF_HOUSEHOLD_NAME: "Test Home",
        const.CONF_WATER_CAPACITY: 18.9,
        const.CONF_SLEEP_START: 0,
        const.CONF_SLEEP_END: 0,
    }


@pytest.fixture
def mock_config_entry(entry_data: dict[str, Any]) -> MockConfigEntry:
    """Return a mock config entry."""
    return MockConfigEntry(
        domain=const.DOMAIN,
        title="Test Home",
        data=entry_data,
        options={const.CONF_UPDATE_INTERVAL: const.DEFAULT_UPDATE_INTERVAL},
        entry_id="test_entry_id",
    )


@pytest.fixture
async def init_integration(
    hass: HomeAssistant,
    mock_config_entry: MockConfigEntry,  # pylint: disable=redefined-outer-name
) -> MockConfigEntry:
    """Set up the HomeKeeper integration with empty (mocked) storage."""
    mock_config_entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()
    return mock_config_entry


@pytest.fixture
def coordinator(
    init_integration: MockConfigEntry,  # pylint: disable=redefined-outer-name
) -> HomeKeeperDataCoordinator:
    """Return the live coordinator of the set-up entry."""
    return init_integration.runtime_data
