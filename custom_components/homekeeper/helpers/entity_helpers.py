# File: helpers/entity_helpers.py
"""Entity registry helper functions for HomeKeeper.

Functions that build instance-scoped signal names and interact with Home
Assistant's entity registry when household items are deleted.

All functions here require a `hass` object or interact with HA registries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.entity_registry import (
    async_entries_for_config_entry,
    async_get as async_get_entity_registry,
)

from .. import const

if TYPE_CHECKING:
    from collections.abc import Mapping
    from typing import Any

    from homeassistant.core import HomeAssistant


# ==============================================================================
# Event Signal Helpers (Manager Communication)
# ==============================================================================


def get_event_signal(entry_id: str, suffix: str) -> str:
    """Build instance-scoped event signal name for dispatcher.

    Format: 'homekeeper_{entry_id}_{suffix}'

    Example:
        get_event_signal("abc123", "members_changed")
        → "homekeeper_abc123_members_changed"
    """
    return f"{const.DOMAIN}_{entry_id}_{suffix}"


# ==============================================================================
# Lookup Helpers
# ==============================================================================


def get_item_or_raise(
    collection: Mapping[str, Any], item_id: str, label: str
) -> Any:
    """Return `collection[item_id]` or raise a translated not-found error.

    Args:
        collection: Mapping of internal_id → stored record
        item_id: Requested internal_id
        label: Human-readable entity type used in the error placeholder

    Raises:
        HomeAssistantError: If the id is unknown
    """
    item = collection.get(item_id)
    if item is None:
        raise HomeAssistantError(
            translation_domain=const.DOMAIN,
            translation_key=const.TRANS_KEY_ERROR_NOT_FOUND,
            translation_placeholders={"entity_type": label, "name": item_id},
        )
    return item


# ==============================================================================
# Registry Cleanup
# ==============================================================================


def remove_entities_by_item_id(
    hass: HomeAssistant,
    entry_id: str,
    item_id: str,
) -> int:
    """Remove all entities whose unique_id references the given item_id.

    Uses delimiter matching so that "item_1" never matches "item_10".

    Returns:
        Count of removed entities.
    """
    ent_reg = async_get_entity_registry(hass)
    prefix = f"{entry_id}_"
    removed_count = 0

    for entity_entry in async_entries_for_config_entry(ent_reg, entry_id):
        unique_id = str(entity_entry.unique_id)
        if not unique_id.startswith(prefix):
            continue
        remainder = unique_id[len(prefix) :]
        if remainder == item_id or remainder.startswith(f"{item_id}_"):
            ent_reg.async_remove(entity_entry.entity_id)
            removed_count += 1
            const.LOGGER.debug(
                "DEBUG: Removed entity %s (uid: %s) for deleted item %s",
                entity_entry.entity_id,
                unique_id,
                item_id,
            )

    if removed_count > 0:
        const.LOGGER.info(
            "INFO: Removed %d entities for deleted item %s", removed_count, item_id
        )
    return removed_count
