# File: store.py
"""Handles persistent data storage for the HomeKeeper integration.

Uses Home Assistant's Storage helper to save and load the household record,
ensuring water cycles, freshness items and inventory logs survive restarts.
"""

from __future__ import annotations

import copy
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any
import uuid

from homeassistant.helpers.storage import Store

from . import const
from .engines.active_time_engine import SleepWindow
from .engines.water_engine import WaterCycleState
from .utils import dt_utils

if TYPE_CHECKING:
    from collections.abc import Mapping

    from homeassistant.core import HomeAssistant


def _catalogue_name(key: str) -> str:
    """Turn a catalogue key into a display name ("floor_vac" → "Floor Vac")."""
    return key.replace("_", " ").title()


class HomeKeeperStore:
    """Handles persistent storage operations for HomeKeeper data.

    Thin wrapper around Home Assistant's Store API for loading, saving, and
    accessing the household record. Items are keyed by internal_id.
    """

    def __init__(
        self, hass: HomeAssistant, storage_key: str = const.STORAGE_KEY
    ) -> None:
        """Initialize the store.

        Args:
            hass: Home Assistant core object.
            storage_key: Key to identify storage location (default: const.STORAGE_KEY).

        """
        self.hass = hass
        self._storage_key = storage_key
        self._store: Store = Store(hass, const.STORAGE_VERSION, storage_key)
        self._data: dict[str, Any] = {}

    # -------------------------------------------------------------------------------------
    # Default Structure
    # -------------------------------------------------------------------------------------

    @staticmethod
    def default_hygiene_items(now: datetime) -> dict[str, dict[str, Any]]:
        """Build the hygiene catalogue with staggered initial clean times."""
        items: dict[str, dict[str, Any]] = {}
        for index, (category, (days, is_public, unit)) in enumerate(
            const.HYGIENE_DEFAULT_CONFIG.items()
        ):
            cleaned_at = now - timedelta(days=index * const.HYGIENE_STAGGER_DAYS)
            items[category] = {
                const.DATA_FRESHNESS_ID: category,
                const.DATA_FRESHNESS_NAME: _catalogue_name(category),
                const.DATA_FRESHNESS_CATEGORY: category,
                const.DATA_FRESHNESS_BASE_INTERVAL: float(days),
                const.DATA_FRESHNESS_IS_SHARED: is_public,
                const.DATA_FRESHNESS_LAST_RESET_AT: dt_utils.dt_to_iso(cleaned_at),
                const.DATA_FRESHNESS_PREFERRED_UNIT: unit,
            }
        return items

    @staticmethod
    def default_pet_items(now: datetime) -> dict[str, dict[str, Any]]:
        """Build the pet-care catalogue, all performed at `now`."""
        return {
            care_type: {
                const.DATA_FRESHNESS_ID: care_type,
                const.DATA_FRESHNESS_NAME: _catalogue_name(care_type),
                const.DATA_FRESHNESS_CATEGORY: care_type,
                const.DATA_FRESHNESS_BASE_INTERVAL: float(hours),
                const.DATA_FRESHNESS_IS_SHARED: is_shared,
                const.DATA_FRESHNESS_LAST_RESET_AT: dt_utils.dt_to_iso(now),
                const.DATA_FRESHNESS_PREFERRED_UNIT: unit,
            }
            for care_type, (hours, is_shared, unit) in const.PET_DEFAULT_CONFIG.items()
        }

    @staticmethod
    def default_inventory_categories() -> dict[str, dict[str, Any]]:
        """Build the default inventory categories."""
        return {
            category_id: {
                const.DATA_INVENTORY_CATEGORY_ID: category_id,
                const.DATA_INVENTORY_CATEGORY_NAME: name,
                const.DATA_INVENTORY_CATEGORY_EMOJI: emoji,
            }
            for category_id, (name, emoji) in const.INVENTORY_DEFAULT_CATEGORIES.items()
        }

    @staticmethod
    def default_owner(name: str = const.DEFAULT_OWNER_NAME) -> dict[str, Any]:
        """Build the household owner member."""
        return {
            const.DATA_MEMBER_ID: str(uuid.uuid4()),
            const.DATA_MEMBER_NAME: name,
            const.DATA_MEMBER_ROLE: const.MEMBER_ROLE_OWNER,
            const.DATA_MEMBER_SPECIES: None,
        }

    @staticmethod
    def get_default_structure(
        initial: Mapping[str, Any] | None = None, now: datetime | None = None
    ) -> dict[str, Any]:
        """Return canonical data structure for fresh installations.

        This is the SINGLE SOURCE OF TRUTH for HomeKeeper storage schema.
        Used by:
        - Store.async_initialize() when no storage file exists
        - Store.merge_with_defaults() to backfill missing buckets

        Args:
            initial: Config entry data (household name, capacity, sleep window)
            now: Moment used for initial reset timestamps (defaults to UTC now)

        Returns:
            dict: Default structure with all buckets and meta initialized.
        """
        initial = initial or {}
        now = now or datetime.now(UTC)
        capacity = float(
            initial.get(const.CONF_WATER_CAPACITY, const.DEFAULT_WATER_CAPACITY)
        )
        window = SleepWindow(
            int(initial.get(const.CONF_SLEEP_START, const.DEFAULT_SLEEP_START)),
            int(initial.get(const.CONF_SLEEP_END, const.DEFAULT_SLEEP_END)),
        )
        water = WaterCycleState(
            capacity=capacity,
            current_level=capacity,
            last_reset_at=now if capacity > 0 else None,
            sleep_window=window,
        ).as_dict()
        water[const.DATA_WATER_LAST_REPORT] = None

        return {
            const.DATA_META: {const.DATA_META_SCHEMA_VERSION: const.SCHEMA_VERSION},
            const.DATA_HOUSEHOLD: {
                const.DATA_HOUSEHOLD_NAME: initial.get(
                    const.CONF_HOUSEHOLD_NAME, const.HOMEKEEPER_TITLE
                ),
                const.DATA_HOUSEHOLD_MEMBERS: [HomeKeeperStore.default_owner()],
                const.DATA_HOUSEHOLD_MODULES: dict(const.DEFAULT_MODULES_ENABLED),
            },
            const.DATA_CLOCK: {const.DATA_CLOCK_OFFSET_SECONDS: 0.0},
            const.DATA_WATER: water,
            const.DATA_HYGIENE: {
                const.DATA_ITEMS: HomeKeeperStore.default_hygiene_items(now)
            },
            const.DATA_PET: {const.DATA_ITEMS: HomeKeeperStore.default_pet_items(now)},
            const.DATA_INVENTORY: {
                const.DATA_INVENTORY_CATEGORIES: (
                    HomeKeeperStore.default_inventory_categories()
                ),
                const.DATA_ITEMS: {},
            },
        }

    @staticmethod
    def merge_with_defaults(
        stored: Mapping[str, Any], now: datetime | None = None
    ) -> dict[str, Any]:
        """Backfill a loaded record with anything newer versions expect.

        Missing buckets, water fields and module flags are taken from the
        default structure. Hygiene items regain their preferred unit, legacy
        pet-care types are renamed, and the roster always keeps an owner.
        The input is not modified.
        """
        defaults = HomeKeeperStore.get_default_structure(now=now)
        merged = copy.deepcopy(dict(stored))

        for key, value in defaults.items():
            if not isinstance(merged.get(key), dict):
                merged[key] = value

        water = merged[const.DATA_WATER]
        for key, value in defaults[const.DATA_WATER].items():
            water.setdefault(key, value)

        for bucket in (const.DATA_HYGIENE, const.DATA_PET):
            if not isinstance(merged[bucket].get(const.DATA_ITEMS), dict):
                merged[bucket][const.DATA_ITEMS] = defaults[bucket][const.DATA_ITEMS]

        for item in merged[const.DATA_HYGIENE][const.DATA_ITEMS].values():
            if not item.get(const.DATA_FRESHNESS_PREFERRED_UNIT):
                config = const.HYGIENE_DEFAULT_CONFIG.get(
                    item.get(const.DATA_FRESHNESS_CATEGORY, "")
                )
                item[const.DATA_FRESHNESS_PREFERRED_UNIT] = (
                    config[2] if config else const.UNIT_DAYS
                )

        for item in merged[const.DATA_PET][const.DATA_ITEMS].values():
            category = item.get(const.DATA_FRESHNESS_CATEGORY)
            if category in const.PET_LEGACY_TYPES:
                item[const.DATA_FRESHNESS_CATEGORY] = const.PET_LEGACY_TYPES[category]
            item.setdefault(const.DATA_FRESHNESS_PREFERRED_UNIT, const.UNIT_DAYS)

        inventory = merged[const.DATA_INVENTORY]
        if not isinstance(inventory.get(const.DATA_ITEMS), dict):
            inventory[const.DATA_ITEMS] = {}
        if not inventory.get(const.DATA_INVENTORY_CATEGORIES):
            inventory[const.DATA_INVENTORY_CATEGORIES] = defaults[const.DATA_INVENTORY][
                const.DATA_INVENTORY_CATEGORIES
            ]

        household = merged[const.DATA_HOUSEHOLD]
        members = household.get(const.DATA_HOUSEHOLD_MEMBERS) or []
        if not any(
            member.get(const.DATA_MEMBER_ROLE) == const.MEMBER_ROLE_OWNER
            for member in members
        ):
            members.insert(0, HomeKeeperStore.default_owner())
        household[const.DATA_HOUSEHOLD_MEMBERS] = members
        modules = household.setdefault(const.DATA_HOUSEHOLD_MODULES, {})
        for module, enabled in const.DEFAULT_MODULES_ENABLED.items():
            modules.setdefault(module, enabled)
        household.setdefault(const.DATA_HOUSEHOLD_NAME, const.HOMEKEEPER_TITLE)

        merged[const.DATA_CLOCK].setdefault(const.DATA_CLOCK_OFFSET_SECONDS, 0.0)
        merged[const.DATA_META][const.DATA_META_SCHEMA_VERSION] = const.SCHEMA_VERSION
        return merged

    # -------------------------------------------------------------------------------------
    # Load / Save
    # -------------------------------------------------------------------------------------

    async def async_initialize(self, initial: Mapping[str, Any] | None = None) -> None:
        """Load data from storage during startup.

        If no data exists, initializes the default structure from `initial`
        (the config entry data); otherwise backfills the stored record.
        """
        const.LOGGER.debug("DEBUG: HomeKeeperStore: Loading data from storage")
        existing_data = await self._store.async_load()

        if existing_data is None:
            const.LOGGER.info("INFO: No existing storage found. Initializing new data")
            self._data = HomeKeeperStore.get_default_structure(initial)
        else:
            self._data = HomeKeeperStore.merge_with_defaults(existing_data)
            const.LOGGER.debug(
                "DEBUG: Loaded existing data from storage: %s",
                {
                    "members": len(
                        self._data[const.DATA_HOUSEHOLD][const.DATA_HOUSEHOLD_MEMBERS]
                    ),
                    "hygiene": len(self._data[const.DATA_HYGIENE][const.DATA_ITEMS]),
                    "pet": len(self._data[const.DATA_PET][const.DATA_ITEMS]),
                    "inventory": len(
                        self._data[const.DATA_INVENTORY][const.DATA_ITEMS]
                    ),
                },
            )

    @property
    def data(self) -> dict[str, Any]:
        """Retrieve the in-memory data cache."""
        return self._data

    def get_storage_path(self) -> str:
        """Get the storage file path."""
        return self._store.path

    def set_data(self, new_data: dict[str, Any]) -> None:
        """Replace the entire in-memory data structure."""
        self._data = new_data

    async def async_save(self) -> None:
        """Save the current data structure to storage asynchronously.

        Raises:
            No exceptions raised - errors are logged but do not stop execution.
            OSError: Logged when file system issues prevent saving.
            TypeError: Logged when data contains non-serializable types.
            ValueError: Logged when data is invalid for JSON serialization.
        """
        try:
            await self._store.async_save(self._data)
            const.LOGGER.debug("DEBUG: Data saved successfully to storage")
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to file system error: %s. "
                "Check disk space and file permissions for %s",
                err,
                self._store.path,
            )
        except TypeError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to non-serializable data: %s",
                err,
            )
        except ValueError as err:
            const.LOGGER.error(
                "ERROR: Failed to save storage due to invalid data format: %s",
                err,
            )

    async def async_delete_storage(self) -> None:
        """Delete the storage file completely from disk."""
        self._data = {}
        try:
            await self._store.async_remove()
            const.LOGGER.info(
                "INFO: Storage file removed successfully: %s",
                self._store.path,
            )
        except OSError as err:
            const.LOGGER.error(
                "ERROR: Failed to remove storage file %s: %s. Check file permissions",
                self._store.path,
                err,
            )
