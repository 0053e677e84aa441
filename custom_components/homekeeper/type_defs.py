"""Type definitions for HomeKeeper data structures.

TypedDict is used for the fixed-key records kept in storage. Collections keyed
by runtime ids stay dict[str, Any]-style mappings.

IMPORTANT: This file must NOT import from coordinator.py or any file that
imports coordinator to avoid circular dependencies. Only typing is imported.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime defaults and null checks live
in the store and managers.
"""

from typing import Any, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

MemberId = str  # UUID string
ItemId = str  # UUID string or catalogue key
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"


# =============================================================================
# Household
# =============================================================================


class MemberData(TypedDict):
    """A household member (person or pet)."""

    internal_id: MemberId
    name: str
    role: str  # owner | member | pet
    species: NotRequired[str | None]  # Only set for pets


class HouseholdData(TypedDict):
    """Household roster and enabled modules."""

    name: str
    members: list[MemberData]
    modules: dict[str, bool]


class ClockData(TypedDict):
    """Virtual clock offset applied on top of the real UTC time."""

    offset_seconds: float


# =============================================================================
# Water
# =============================================================================


class SleepWindowData(TypedDict):
    """Quiet window hour pair, end exclusive."""

    start: int
    end: int


class WaterHistoryEntry(TypedDict):
    """Archived litres consumed on one local day."""

    date: ISODate
    liters: float


class RefillReportData(TypedDict):
    """Last reset/calibration report, also fired on the event bus."""

    timestamp: ISODatetime
    action: str  # refill | calibrate
    is_outlier: bool
    outlier_kind: str | None
    implied_rate: float | None


class WaterData(TypedDict):
    """Stored water cycle.

    Created by: HomeKeeperStore.get_default_structure()
    Transitions: WaterEngine.process_reset() / process_calibration()
    Managed by: WaterManager
    """

    capacity: float
    current_level: float
    last_reset_at: ISODatetime | None
    learned_rate: float
    current_cycle_rate: float
    has_calibrated: bool
    sleep_window: SleepWindowData
    history: list[WaterHistoryEntry]
    last_report: NotRequired[RefillReportData | None]


# =============================================================================
# Freshness (Hygiene / Pet Care)
# =============================================================================


class FreshnessItemData(TypedDict):
    """A hygiene item or pet-care task.

    base_interval is in days for hygiene items and in hours for pet care.
    """

    internal_id: ItemId
    name: str
    category: str
    base_interval: float
    is_shared: bool
    last_reset_at: ISODatetime | None
    preferred_unit: str


class FreshnessData(TypedDict):
    """Container for freshness items keyed by id."""

    items: dict[ItemId, FreshnessItemData]


# =============================================================================
# Inventory
# =============================================================================


class InventoryLogEntry(TypedDict):
    """A single stock event.

    Created by: InventoryEngine.create_log_entry()
    Stored in: InventoryItemData["history"] (append order, pruned)
    """

    ts: ISODatetime
    action: str  # OPEN | RESTOCK | EDIT
    delta: float
    balance: float  # Stock after the event


class InventoryCategoryData(TypedDict):
    """An inventory category."""

    internal_id: str
    name: str
    emoji: str


class InventoryItemData(TypedDict):
    """A consumable tracked by unit count."""

    internal_id: ItemId
    name: str
    category_id: str
    current_stock: float
    threshold: float
    is_shared: bool
    history: list[InventoryLogEntry]


class InventoryData(TypedDict):
    """Container for inventory categories and items."""

    categories: dict[str, InventoryCategoryData]
    items: dict[ItemId, InventoryItemData]


# =============================================================================
# Storage Root
# =============================================================================


class HomeKeeperData(TypedDict):
    """Root of the stored household record."""

    meta: dict[str, Any]
    household: HouseholdData
    clock: ClockData
    water: WaterData
    hygiene: FreshnessData
    pet: FreshnessData
    inventory: InventoryData


__all__ = [
    "ClockData",
    "FreshnessData",
    "FreshnessItemData",
    "HomeKeeperData",
    "HouseholdData",
    "ISODate",
    "ISODatetime",
    "InventoryCategoryData",
    "InventoryData",
    "InventoryItemData",
    "InventoryLogEntry",
    "ItemId",
    "MemberData",
    "MemberId",
    "RefillReportData",
    "SleepWindowData",
    "WaterData",
    "WaterHistoryEntry",
]
