# File: const.py
"""Constants for the HomeKeeper integration.

This file centralizes configuration keys, defaults, storage keys, service names,
signal suffixes, and translation keys for consistency across the integration.
Engines import the numeric defaults from here; nothing in this file imports
from the rest of the package.
"""

import logging

import homeassistant.util.dt as dt_util
from homeassistant.const import Platform

from .utils import dt_utils


def set_default_timezone(hass):
    """Set the default timezone based on the Home Assistant configuration."""
    global DEFAULT_TIME_ZONE
    DEFAULT_TIME_ZONE = dt_util.get_time_zone(hass.config.time_zone)
    if DEFAULT_TIME_ZONE is not None:
        dt_utils.set_default_timezone(DEFAULT_TIME_ZONE)


# ------------------------------------------------------------------------------------------------
# General / Integration Information
# ------------------------------------------------------------------------------------------------
# Integration Name
HOMEKEEPER_TITLE = "HomeKeeper"

# Integration Domain
DOMAIN = "homekeeper"

# Logger
LOGGER = logging.getLogger(__package__)

# Supported Platforms
PLATFORMS = [
    Platform.BUTTON,
    Platform.SENSOR,
]

# Coordinator
COORDINATOR_SUFFIX = "_coordinator"

# Storage and Versioning
STORAGE_KEY = "homekeeper_data"
STORAGE_VERSION = 1
SCHEMA_VERSION = 1

# Default timezone: initially None, to be set once hass is available.
DEFAULT_TIME_ZONE = None

# Update Interval (minutes)
DEFAULT_UPDATE_INTERVAL = 5

# ------------------------------------------------------------------------------------------------
# Configuration Keys
# ------------------------------------------------------------------------------------------------
CONF_HOUSEHOLD_NAME = "household_name"
CONF_WATER_CAPACITY = "water_capacity"
CONF_SLEEP_START = "sleep_start"
CONF_SLEEP_END = "sleep_end"
CONF_UPDATE_INTERVAL = "update_interval"

CONFIG_FLOW_STEP_USER = "user"
OPTIONS_FLOW_STEP_INIT = "init"

# ------------------------------------------------------------------------------------------------
# Storage Data Keys
# ------------------------------------------------------------------------------------------------
DATA_META = "meta"
DATA_META_SCHEMA_VERSION = "schema_version"

DATA_HOUSEHOLD = "household"
DATA_HOUSEHOLD_NAME = "name"
DATA_HOUSEHOLD_MEMBERS = "members"
DATA_HOUSEHOLD_MODULES = "modules"

DATA_MEMBER_ID = "internal_id"
DATA_MEMBER_NAME = "name"
DATA_MEMBER_ROLE = "role"
DATA_MEMBER_SPECIES = "species"

DATA_CLOCK = "clock"
DATA_CLOCK_OFFSET_SECONDS = "offset_seconds"

DATA_WATER = "water"
DATA_WATER_CAPACITY = "capacity"
DATA_WATER_CURRENT_LEVEL = "current_level"
DATA_WATER_LAST_RESET_AT = "last_reset_at"
DATA_WATER_LEARNED_RATE = "learned_rate"
DATA_WATER_CURRENT_CYCLE_RATE = "current_cycle_rate"
DATA_WATER_HAS_CALIBRATED = "has_calibrated"
DATA_WATER_SLEEP_WINDOW = "sleep_window"
DATA_WATER_SLEEP_START = "start"
DATA_WATER_SLEEP_END = "end"
DATA_WATER_HISTORY = "history"
DATA_WATER_HISTORY_DATE = "date"
DATA_WATER_HISTORY_LITERS = "liters"
DATA_WATER_LAST_REPORT = "last_report"

DATA_REPORT_TIMESTAMP = "timestamp"
DATA_REPORT_ACTION = "action"
DATA_REPORT_IS_OUTLIER = "is_outlier"
DATA_REPORT_OUTLIER_KIND = "outlier_kind"
DATA_REPORT_IMPLIED_RATE = "implied_rate"

DATA_HYGIENE = "hygiene"
DATA_PET = "pet"
DATA_ITEMS = "items"

DATA_FRESHNESS_ID = "internal_id"
DATA_FRESHNESS_NAME = "name"
DATA_FRESHNESS_CATEGORY = "category"
DATA_FRESHNESS_BASE_INTERVAL = "base_interval"
DATA_FRESHNESS_IS_SHARED = "is_shared"
DATA_FRESHNESS_LAST_RESET_AT = "last_reset_at"
DATA_FRESHNESS_PREFERRED_UNIT = "preferred_unit"

DATA_INVENTORY = "inventory"
DATA_INVENTORY_CATEGORIES = "categories"
DATA_INVENTORY_CATEGORY_ID = "internal_id"
DATA_INVENTORY_CATEGORY_NAME = "name"
DATA_INVENTORY_CATEGORY_EMOJI = "emoji"

DATA_INVENTORY_ITEM_ID = "internal_id"
DATA_INVENTORY_ITEM_NAME = "name"
DATA_INVENTORY_ITEM_CATEGORY_ID = "category_id"
DATA_INVENTORY_ITEM_STOCK = "current_stock"
DATA_INVENTORY_ITEM_THRESHOLD = "threshold"
DATA_INVENTORY_ITEM_IS_SHARED = "is_shared"
DATA_INVENTORY_ITEM_HISTORY = "history"

DATA_LOG_TS = "ts"
DATA_LOG_ACTION = "action"
DATA_LOG_DELTA = "delta"
DATA_LOG_BALANCE = "balance"

# ------------------------------------------------------------------------------------------------
# Modules
# ------------------------------------------------------------------------------------------------
MODULE_WATER = "water"
MODULE_HYGIENE = "hygiene"
MODULE_PET = "pet"
MODULE_INVENTORY = "inventory"
MODULES = [MODULE_WATER, MODULE_HYGIENE, MODULE_PET, MODULE_INVENTORY]

DEFAULT_MODULES_ENABLED = {
    MODULE_WATER: True,
    MODULE_HYGIENE: True,
    MODULE_PET: False,
    MODULE_INVENTORY: True,
}

# ------------------------------------------------------------------------------------------------
# Members
# ------------------------------------------------------------------------------------------------
MEMBER_ROLE_OWNER = "owner"
MEMBER_ROLE_MEMBER = "member"
MEMBER_ROLE_PET = "pet"
MEMBER_ROLES = [MEMBER_ROLE_OWNER, MEMBER_ROLE_MEMBER, MEMBER_ROLE_PET]

PET_SPECIES_CAT = "cat"
PET_SPECIES_DOG = "dog"
PET_SPECIES_OTHER = "other"
PET_SPECIES = [PET_SPECIES_CAT, PET_SPECIES_DOG, PET_SPECIES_OTHER]

DEFAULT_OWNER_NAME = "Owner"

# ------------------------------------------------------------------------------------------------
# Water Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_SLEEP_START = 23
DEFAULT_SLEEP_END = 7
DEFAULT_WATER_CAPACITY = 0.0
DEMO_WATER_CAPACITY = 18.9

# Liters per active hour contributed by each human member
WATER_PER_PERSON_RATE = 0.106
WATER_MIN_BASELINE_RATE = 0.05
DEFAULT_WATER_LEARNED_RATE = 0.212

# Fallback rate used when the open cycle has no usable rate
WATER_FALLBACK_RATE = 0.15
WATER_MIN_RATE = 0.001

WATER_OUTLIER_MIN_FACTOR = 0.5
WATER_OUTLIER_MAX_FACTOR = 2.0
WATER_LEARNING_OLD_WEIGHT = 0.7
WATER_LEARNING_NEW_WEIGHT = 0.3

# Elapsed active hours below which a reset reuses the learned rate
WATER_MIN_RESET_ACTIVE_HOURS = 0.1
# Elapsed active hours below which calibration shifts the cycle start instead
WATER_MIN_CALIBRATION_ACTIVE_HOURS = 0.5

WATER_HISTORY_RETENTION_DAYS = 14
WATER_TREND_DAYS = 7
WATER_ENDURANCE_UNBOUNDED_HOURS = 999.0
WATER_EMPTY_LEVEL = 0.1
WATER_LOW_PERCENT = 20.0
WATER_MEDIUM_PERCENT = 40.0

WATER_STATUS_UNCONFIGURED = "unconfigured"
WATER_STATUS_EMPTY = "empty"
WATER_STATUS_LOW = "low"
WATER_STATUS_MEDIUM = "medium"
WATER_STATUS_OK = "ok"

WATER_ACTION_REFILL = "refill"
WATER_ACTION_CALIBRATE = "calibrate"

OUTLIER_KIND_FAST = "fast_consumption"
OUTLIER_KIND_SLOW = "slow_consumption"

WATER_SCENARIO_LOW = "LOW"
WATER_SCENARIO_ALMOST_EMPTY = "ALMOST_EMPTY"
WATER_SCENARIO_FULL = "FULL"
WATER_SCENARIO_STAGNANT = "STAGNANT"
WATER_SCENARIO_RATE_FAST = "RATE_FAST"
WATER_SCENARIO_RATE_SLOW = "RATE_SLOW"
WATER_SCENARIOS = [
    WATER_SCENARIO_LOW,
    WATER_SCENARIO_ALMOST_EMPTY,
    WATER_SCENARIO_FULL,
    WATER_SCENARIO_STAGNANT,
    WATER_SCENARIO_RATE_FAST,
    WATER_SCENARIO_RATE_SLOW,
]

# ------------------------------------------------------------------------------------------------
# Freshness (Hygiene / Pet Care)
# ------------------------------------------------------------------------------------------------
HYGIENE_STATUS_FRESH = "fresh"
HYGIENE_STATUS_NORMAL = "normal"
HYGIENE_STATUS_DUSTY = "dusty"
HYGIENE_STATUS_MESSY = "messy"

PET_STATUS_HAPPY = "happy"
PET_STATUS_OKAY = "okay"
PET_STATUS_STALE = "stale"
PET_STATUS_CRISIS = "crisis"

HYGIENE_LOAD_FACTOR = 1.2
HYGIENE_LOAD_MIN_HOUSEHOLD = 2
PET_LOAD_FACTOR = 1.5
PET_LOAD_MIN_PETS = 1

ENTROPY_SATURATED_SCORE = 100.0

UNIT_HOURS = "hours"
UNIT_DAYS = "days"
UNIT_WEEKS = "weeks"
UNIT_MONTHS = "months"
HYGIENE_UNITS = [UNIT_DAYS, UNIT_WEEKS, UNIT_MONTHS]
PET_UNITS = [UNIT_HOURS, UNIT_DAYS]

# category: (base_interval_days, is_public_area, preferred_unit)
HYGIENE_DEFAULT_CONFIG = {
    "stove": (2, True, UNIT_DAYS),
    "floor_vac": (3, True, UNIT_DAYS),
    "toilet": (7, True, UNIT_WEEKS),
    "floor_mop": (7, True, UNIT_WEEKS),
    "bedding": (14, False, UNIT_WEEKS),
    "washer": (30, True, UNIT_MONTHS),
    "ac_filter": (90, True, UNIT_MONTHS),
    "curtain": (180, True, UNIT_MONTHS),
}
HYGIENE_STAGGER_DAYS = 2

# type: (base_interval_hours, is_shared, preferred_unit)
PET_DEFAULT_CONFIG = {
    "feed": (12, False, UNIT_HOURS),
    "scoop": (24, True, UNIT_DAYS),
    "water": (24, True, UNIT_DAYS),
    "deep_clean": (14 * 24, True, UNIT_DAYS),
    "nails": (14 * 24, False, UNIT_DAYS),
    "bath": (30 * 24, False, UNIT_DAYS),
    "deworm": (30 * 24, False, UNIT_DAYS),
}
PET_LEGACY_TYPES = {"grooming": "bath"}

# ------------------------------------------------------------------------------------------------
# Inventory
# ------------------------------------------------------------------------------------------------
INVENTORY_ACTION_OPEN = "OPEN"
INVENTORY_ACTION_RESTOCK = "RESTOCK"
INVENTORY_ACTION_EDIT = "EDIT"

INVENTORY_RATE_WINDOW_DAYS = 60
INVENTORY_CHART_WINDOW_DAYS = 90
INVENTORY_WARNING_DAYS = 3
INVENTORY_MAX_LOG_ENTRIES = 200
DEFAULT_INVENTORY_THRESHOLD = 1

INVENTORY_ALERT_CRITICAL = "critical"
INVENTORY_ALERT_WARNING = "warning"
INVENTORY_ALERT_OK = "ok"

# id: (name, emoji)
INVENTORY_DEFAULT_CATEGORIES = {
    "daily": ("Daily", "🧻"),
    "cleaning": ("Cleaning", "🧴"),
    "pet": ("Pet", "🐾"),
}

# ------------------------------------------------------------------------------------------------
# Signals (instance-scoped dispatcher suffixes)
# ------------------------------------------------------------------------------------------------
SIGNAL_SUFFIX_MEMBERS_CHANGED = "members_changed"

# HA bus events
EVENT_WATER_REFILL_REPORT = f"{DOMAIN}_water_refill_report"

# ------------------------------------------------------------------------------------------------
# Services
# ------------------------------------------------------------------------------------------------
SERVICE_REFILL_WATER = "refill_water"
SERVICE_CALIBRATE_WATER = "calibrate_water"
SERVICE_SET_WATER_CAPACITY = "set_water_capacity"
SERVICE_SET_SLEEP_WINDOW = "set_sleep_window"
SERVICE_SIMULATE_WATER_SCENARIO = "simulate_water_scenario"
SERVICE_CLEAN_HYGIENE_ITEM = "clean_hygiene_item"
SERVICE_UPDATE_HYGIENE_ITEM = "update_hygiene_item"
SERVICE_PERFORM_PET_CARE = "perform_pet_care"
SERVICE_UPDATE_PET_CARE_ITEM = "update_pet_care_item"
SERVICE_OPEN_INVENTORY_ITEM = "open_inventory_item"
SERVICE_RESTOCK_INVENTORY_ITEM = "restock_inventory_item"
SERVICE_SET_INVENTORY_STOCK = "set_inventory_stock"
SERVICE_ADD_INVENTORY_ITEM = "add_inventory_item"
SERVICE_REMOVE_INVENTORY_ITEM = "remove_inventory_item"
SERVICE_ADD_INVENTORY_CATEGORY = "add_inventory_category"
SERVICE_REMOVE_INVENTORY_CATEGORY = "remove_inventory_category"
SERVICE_ADD_MEMBER = "add_member"
SERVICE_REMOVE_MEMBER = "remove_member"
SERVICE_SET_MODULE_ENABLED = "set_module_enabled"
SERVICE_TIME_TRAVEL = "time_travel"
SERVICE_RESET_TIME_TRAVEL = "reset_time_travel"

# Service Fields
FIELD_LEVEL = "level"
FIELD_CAPACITY = "capacity"
FIELD_START = "start"
FIELD_END = "end"
FIELD_SCENARIO = "scenario"
FIELD_ITEM_ID = "item_id"
FIELD_INTERVAL = "interval"
FIELD_UNIT = "unit"
FIELD_AMOUNT = "amount"
FIELD_STOCK = "stock"
FIELD_NAME = "name"
FIELD_CATEGORY_ID = "category_id"
FIELD_THRESHOLD = "threshold"
FIELD_IS_SHARED = "is_shared"
FIELD_EMOJI = "emoji"
FIELD_MEMBER_ID = "member_id"
FIELD_ROLE = "role"
FIELD_SPECIES = "species"
FIELD_MODULE = "module"
FIELD_ENABLED = "enabled"
FIELD_HOURS = "hours"

# ------------------------------------------------------------------------------------------------
# Entity Attributes
# ------------------------------------------------------------------------------------------------
ATTR_PERCENTAGE = "percentage"
ATTR_STATUS = "status"
ATTR_CURRENT_CYCLE_RATE = "current_cycle_rate"
ATTR_LEARNED_RATE = "learned_rate"
ATTR_HAS_CALIBRATED = "has_calibrated"
ATTR_LAST_RESET_AT = "last_reset_at"
ATTR_LAST_REPORT = "last_report"
ATTR_SLEEP_WINDOW = "sleep_window"
ATTR_CAPACITY = "capacity"
ATTR_TREND = "trend"
ATTR_SCORE = "score"
ATTR_LOAD_FACTOR = "load_factor"
ATTR_EFFECTIVE_THRESHOLD_HOURS = "effective_threshold_hours"
ATTR_BASE_INTERVAL = "base_interval"
ATTR_PREFERRED_UNIT = "preferred_unit"
ATTR_IS_SHARED = "is_shared"
ATTR_CATEGORY = "category"
ATTR_DAILY_RATE = "daily_rate"
ATTR_DAYS_LEFT = "days_left"
ATTR_ALERT_LEVEL = "alert_level"
ATTR_THRESHOLD = "threshold"
ATTR_STEP_CHART = "step_chart"
ATTR_VIRTUAL_NOW = "virtual_now"

# ------------------------------------------------------------------------------------------------
# Entity Unique ID Suffixes
# ------------------------------------------------------------------------------------------------
SENSOR_UID_SUFFIX_WATER_LEVEL = "_water_level_sensor"
SENSOR_UID_SUFFIX_WATER_ENDURANCE = "_water_endurance_sensor"
SENSOR_UID_SUFFIX_WATER_TREND = "_water_trend_sensor"
SENSOR_UID_SUFFIX_HYGIENE = "_hygiene_freshness_sensor"
SENSOR_UID_SUFFIX_PET_CARE = "_pet_care_freshness_sensor"
SENSOR_UID_SUFFIX_INVENTORY = "_inventory_stock_sensor"

BUTTON_UID_SUFFIX_WATER_REFILL = "_water_refill_button"
BUTTON_UID_SUFFIX_HYGIENE_CLEAN = "_hygiene_clean_button"
BUTTON_UID_SUFFIX_PET_CARE = "_pet_care_button"
BUTTON_UID_SUFFIX_INVENTORY_OPEN = "_inventory_open_button"

DEVICE_ID_SUFFIX_WATER = "_water"
DEVICE_ID_SUFFIX_HYGIENE = "_hygiene"
DEVICE_ID_SUFFIX_PET = "_pet"
DEVICE_ID_SUFFIX_INVENTORY = "_inventory"

# ------------------------------------------------------------------------------------------------
# Translation Keys
# ------------------------------------------------------------------------------------------------
TRANS_KEY_SENSOR_WATER_LEVEL = "water_level"
TRANS_KEY_SENSOR_WATER_ENDURANCE = "water_endurance"
TRANS_KEY_SENSOR_WATER_TREND = "water_trend"
TRANS_KEY_SENSOR_HYGIENE = "hygiene_freshness"
TRANS_KEY_SENSOR_PET_CARE = "pet_care_freshness"
TRANS_KEY_SENSOR_INVENTORY = "inventory_stock"

TRANS_KEY_BUTTON_WATER_REFILL = "water_refill"
TRANS_KEY_BUTTON_HYGIENE_CLEAN = "hygiene_clean"
TRANS_KEY_BUTTON_PET_CARE = "pet_care"
TRANS_KEY_BUTTON_INVENTORY_OPEN = "inventory_open"

TRANS_KEY_ATTR_ITEM_NAME = "item_name"

TRANS_KEY_ERROR_SINGLE_INSTANCE = "single_instance_allowed"
TRANS_KEY_ERROR_NOT_FOUND = "not_found"
TRANS_KEY_ERROR_MODULE_DISABLED = "module_disabled"
TRANS_KEY_ERROR_WATER_NOT_CONFIGURED = "water_not_configured"
TRANS_KEY_ERROR_LAST_OWNER = "last_owner"
TRANS_KEY_ERROR_NOT_LOADED = "not_loaded"
TRANS_KEY_ERROR_ACTION_FAILED = "action_failed"

CFOP_ERROR_INVALID_CAPACITY = "invalid_capacity"
CFOP_ERROR_INVALID_HOUR = "invalid_hour"
CFOP_ERROR_NAME_REQUIRED = "name_required"
CFOP_ERROR_INVALID_UPDATE_INTERVAL = "invalid_update_interval"

# Entity type labels used in error placeholders
LABEL_HYGIENE_ITEM = "hygiene item"
LABEL_PET_CARE_ITEM = "pet care item"
LABEL_INVENTORY_ITEM = "inventory item"
LABEL_INVENTORY_CATEGORY = "inventory category"
LABEL_MEMBER = "member"
