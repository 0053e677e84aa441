"""Direct unit tests for HomeKeeperStore.

Covers the default structure for fresh installs, backfilling of older
records, and save/delete error handling.
"""

# pylint: disable=protected-access  # Accessing _store for patching
# pylint: disable=redefined-outer-name  # Pytest fixtures redefine names

from datetime import timedelta
from typing import Any
from unittest.mock import patch

from freezegun import freeze_time
from homeassistant.core import HomeAssistant
import pytest

from custom_components.homekeeper import const
from custom_components.homekeeper.store import HomeKeeperStore

from tests.conftest import FROZEN_NOW, FROZEN_NOW_DT

NOW = FROZEN_NOW_DT


@pytest.fixture
def store(hass: HomeAssistant) -> HomeKeeperStore:
    """Return a store instance."""
    return HomeKeeperStore(hass)


def test_default_structure_from_entry_data() -> None:
    """Config entry data seeds the household and the water tank."""
    data = HomeKeeperStore.get_default_structure(
        {
            const.CONF_HOUSEHOLD_NAME: "Casa",
            const.CONF_WATER_CAPACITY: 18.9,
            const.CONF_SLEEP_START: 22,
            const.CONF_SLEEP_END: 6,
        },
        NOW,
    )

    assert data[const.DATA_HOUSEHOLD][const.DATA_HOUSEHOLD_NAME] == "Casa"
    members = data[const.DATA_HOUSEHOLD][const.DATA_HOUSEHOLD_MEMBERS]
    assert [m[const.DATA_MEMBER_ROLE] for m in members] == [const.MEMBER_ROLE_OWNER]
    assert data[const.DATA_HOUSEHOLD][const.DATA_HOUSEHOLD_MODULES] == (
        const.DEFAULT_MODULES_ENABLED
    )

    water = data[const.DATA_WATER]
    assert water[const.DATA_WATER_CAPACITY] == 18.9
    assert water[const.DATA_WATER_CURRENT_LEVEL] == 18.9
    assert water[const.DATA_WATER_LAST_RESET_AT] == NOW.isoformat()
    assert water[const.DATA_WATER_SLEEP_WINDOW] == {
        const.DATA_WATER_SLEEP_START: 22,
        const.DATA_WATER_SLEEP_END: 6,
    }
    assert water[const.DATA_WATER_LAST_REPORT] is None
    assert data[const.DATA_CLOCK][const.DATA_CLOCK_OFFSET_SECONDS] == 0.0


def test_default_structure_unconfigured_tank() -> None:
    """Without a capacity the tank has no open cycle."""
    data = HomeKeeperStore.get_default_structure({}, NOW)
    assert data[const.DATA_WATER][const.DATA_WATER_CAPACITY] == 0.0
    assert data[const.DATA_WATER][const.DATA_WATER_LAST_RESET_AT] is None
    assert data[const.DATA_HOUSEHOLD][const.DATA_HOUSEHOLD_NAME] == (
        const.HOMEKEEPER_TITLE
    )


def test_default_catalogues() -> None:
    """Hygiene items are staggered; pet tasks all start now."""
    data = HomeKeeperStore.get_default_structure({}, NOW)

    hygiene = data[const.DATA_HYGIENE][const.DATA_ITEMS]
    assert list(hygiene) == list(const.HYGIENE_DEFAULT_CONFIG)
    assert hygiene["stove"][const.DATA_FRESHNESS_LAST_RESET_AT] == NOW.isoformat()
    assert hygiene["floor_vac"][const.DATA_FRESHNESS_LAST_RESET_AT] == (
        NOW - timedelta(days=const.HYGIENE_STAGGER_DAYS)
    ).isoformat()
    assert hygiene["bedding"][const.DATA_FRESHNESS_IS_SHARED] is False
    assert hygiene["toilet"][const.DATA_FRESHNESS_NAME] == "Toilet"

    pet = data[const.DATA_PET][const.DATA_ITEMS]
    assert set(pet) == set(const.PET_DEFAULT_CONFIG)
    assert pet["feed"][const.DATA_FRESHNESS_BASE_INTERVAL] == 12.0
    assert pet["deep_clean"][const.DATA_FRESHNESS_NAME] == "Deep Clean"

    inventory = data[const.DATA_INVENTORY]
    assert inventory[const.DATA_ITEMS] == {}
    assert set(inventory[const.DATA_INVENTORY_CATEGORIES]) == set(
        const.INVENTORY_DEFAULT_CATEGORIES
    )


def test_merge_backfills_old_record() -> None:
    """Older records gain missing buckets, units, flags and an owner."""
    stored: dict[str, Any] = {
        const.DATA_HOUSEHOLD: {
            const.DATA_HOUSEHOLD_MEMBERS: [
                {
                    const.DATA_MEMBER_ID: "m1",
                    const.DATA_MEMBER_NAME: "Sam",
                    const.DATA_MEMBER_ROLE: const.MEMBER_ROLE_MEMBER,
                }
            ],
            const.DATA_HOUSEHOLD_MODULES: {const.MODULE_PET: True},
        },
        const.DATA_WATER: {const.DATA_WATER_CAPACITY: 10.0},
        const.DATA_HYGIENE: {
            const.DATA_ITEMS: {
                "toilet": {
                    const.DATA_FRESHNESS_ID: "toilet",
                    const.DATA_FRESHNESS_CATEGORY: "toilet",
                    const.DATA_FRESHNESS_BASE_INTERVAL: 7.0,
                },
                "garage": {
                    const.DATA_FRESHNESS_ID: "garage",
                    const.DATA_FRESHNESS_CATEGORY: "garage",
                    const.DATA_FRESHNESS_BASE_INTERVAL: 60.0,
                },
            }
        },
        const.DATA_PET: {
            const.DATA_ITEMS: {
                "grooming": {
                    const.DATA_FRESHNESS_ID: "grooming",
                    const.DATA_FRESHNESS_CATEGORY: "grooming",
                    const.DATA_FRESHNESS_BASE_INTERVAL: 720.0,
                }
            }
        },
    }

    merged = HomeKeeperStore.merge_with_defaults(stored, NOW)

    hygiene = merged[const.DATA_HYGIENE][const.DATA_ITEMS]
    assert hygiene["toilet"][const.DATA_FRESHNESS_PREFERRED_UNIT] == const.UNIT_WEEKS
    assert hygiene["garage"][const.DATA_FRESHNESS_PREFERRED_UNIT] == const.UNIT_DAYS
    pet = merged[const.DATA_PET][const.DATA_ITEMS]
    assert pet["grooming"][const.DATA_FRESHNESS_CATEGORY] == "bath"

    water = merged[const.DATA_WATER]
    assert water[const.DATA_WATER_CAPACITY] == 10.0
    assert const.DATA_WATER_LEARNED_RATE in water

    household = merged[const.DATA_HOUSEHOLD]
    roles = [m[const.DATA_MEMBER_ROLE] for m in household[const.DATA_HOUSEHOLD_MEMBERS]]
    assert roles == [const.MEMBER_ROLE_OWNER, const.MEMBER_ROLE_MEMBER]
    modules = household[const.DATA_HOUSEHOLD_MODULES]
    assert modules[const.MODULE_PET] is True
    assert modules[const.MODULE_WATER] is True

    assert merged[const.DATA_META][const.DATA_META_SCHEMA_VERSION] == (
        const.SCHEMA_VERSION
    )
    assert const.DATA_INVENTORY_CATEGORIES in merged[const.DATA_INVENTORY]
    # input untouched
    assert const.DATA_META not in stored
    assert const.DATA_FRESHNESS_PREFERRED_UNIT not in (
        stored[const.DATA_HYGIENE][const.DATA_ITEMS]["toilet"]
    )


async def test_async_initialize_without_file(store: HomeKeeperStore) -> None:
    """A missing file is replaced by the default structure."""
    with patch.object(store._store, "async_load", return_value=None):
        await store.async_initialize({const.CONF_HOUSEHOLD_NAME: "Fresh"})

    assert store.data[const.DATA_HOUSEHOLD][const.DATA_HOUSEHOLD_NAME] == "Fresh"


async def test_async_initialize_loads_existing(
    hass: HomeAssistant, hass_storage: dict[str, Any]
) -> None:
    """A stored record is loaded and backfilled; entry data is ignored."""
    hass_storage[const.STORAGE_KEY] = {
        "version": const.STORAGE_VERSION,
        "minor_version": 1,
        "key": const.STORAGE_KEY,
        "data": {
            const.DATA_HOUSEHOLD: {const.DATA_HOUSEHOLD_NAME: "Stored"},
            const.DATA_WATER: {const.DATA_WATER_CAPACITY: 12.0},
        },
    }
    store = HomeKeeperStore(hass)
    await store.async_initialize({const.CONF_HOUSEHOLD_NAME: "Ignored"})

    assert store.data[const.DATA_HOUSEHOLD][const.DATA_HOUSEHOLD_NAME] == "Stored"
    assert store.data[const.DATA_WATER][const.DATA_WATER_CAPACITY] == 12.0
    assert store.data[const.DATA_HYGIENE][const.DATA_ITEMS]


async def test_async_save_logs_os_error(
    store: HomeKeeperStore, caplog: pytest.LogCaptureFixture
) -> None:
    """File system errors are logged, not raised."""
    with patch.object(store._store, "async_save", side_effect=OSError("disk full")):
        await store.async_save()

    assert "file system error" in caplog.text


async def test_async_delete_storage_clears_data(store: HomeKeeperStore) -> None:
    """Deleting storage empties the in-memory record."""
    store.set_data({"anything": 1})
    with patch.object(store._store, "async_remove") as mock_remove:
        await store.async_delete_storage()

    mock_remove.assert_called_once()
    assert store.data == {}


@freeze_time(FROZEN_NOW)
def test_default_structure_uses_current_time() -> None:
    """Without an explicit moment the catalogues start at wall-clock now."""
    data = HomeKeeperStore.get_default_structure({const.CONF_WATER_CAPACITY: 5})

    assert data[const.DATA_WATER][const.DATA_WATER_LAST_RESET_AT] == (
        FROZEN_NOW_DT.isoformat()
    )
    assert data[const.DATA_PET][const.DATA_ITEMS]["feed"][
        const.DATA_FRESHNESS_LAST_RESET_AT
    ] == FROZEN_NOW_DT.isoformat()
