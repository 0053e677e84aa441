# File: utils/dt_utils.py
"""Date and time utilities for HomeKeeper.

Pure Python date/time functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.
   Uses standard library: datetime, zoneinfo, dateutil.

Functions:
    - set_default_timezone / get_default_timezone: Local timezone configuration
    - as_utc / as_local: Timezone conversion
    - dt_to_utc: Parse ISO strings (or datetimes) into aware UTC datetimes
    - dt_to_iso: Serialize an aware datetime for storage
    - dt_floor_hour: Start of the local clock hour containing a moment
    - dt_local_hour: Local hour-of-day of a moment
    - dt_next_local_midnight: Next local midnight after a moment
    - dt_local_date_key: Local calendar day key ("YYYY-MM-DD")
    - dt_hours_between: Signed wall-clock hours between two moments
    - dt_interval_to_days / dt_interval_to_hours: User interval to base units
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
import logging
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo

# Third-party date utilities (no HA dependency)
from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from datetime import tzinfo

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: tzinfo = ZoneInfo("UTC")

TIME_UNIT_HOURS = "hours"
TIME_UNIT_DAYS = "days"
TIME_UNIT_WEEKS = "weeks"
TIME_UNIT_MONTHS = "months"

HOUR = timedelta(hours=1)
SECONDS_PER_HOUR = 3600.0


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: tzinfo) -> None:
    """Set the default timezone for all dt_utils functions.

    Call this during integration setup to configure the user's timezone.

    Args:
        tz: tzinfo object representing the household's local timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> tzinfo:
    """Get the current default timezone."""
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Timezone Conversion
# ==============================================================================


def as_utc(dt_obj: datetime) -> datetime:
    """Convert a datetime to UTC timezone.

    Naive datetimes are assumed to be in the default local timezone.
    """
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=DEFAULT_TIME_ZONE)
    return dt_obj.astimezone(UTC)


def as_local(dt_obj: datetime, tz: tzinfo | None = None) -> datetime:
    """Convert a datetime to local timezone.

    Naive datetimes are assumed to be in UTC.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    if dt_obj.tzinfo is None:
        dt_obj = dt_obj.replace(tzinfo=UTC)
    return dt_obj.astimezone(tz_info)


# ==============================================================================
# Parsing / Serialization
# ==============================================================================


def dt_to_utc(value: str | datetime | None) -> datetime | None:
    """Parse a stored timestamp into an aware UTC datetime.

    Args:
        value: ISO 8601 string, datetime, or None

    Returns:
        UTC-aware datetime, or None if the value is empty or unparseable.

    Example:
        "2026-01-06T17:00:00+00:00" → datetime(2026, 1, 6, 17, 0, tzinfo=UTC)
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if not isinstance(value, str):
        _LOGGER.warning("dt_to_utc: Unsupported timestamp type %s", type(value))
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        _LOGGER.warning("dt_to_utc: Could not parse timestamp '%s'", value)
        return None
    return as_utc(parsed)


def dt_to_iso(dt_obj: datetime | None) -> str | None:
    """Serialize a datetime as a UTC ISO 8601 string for storage."""
    if dt_obj is None:
        return None
    return as_utc(dt_obj).isoformat()


# ==============================================================================
# Local Calendar Helpers
# ==============================================================================


def dt_floor_hour(moment: datetime, tz: tzinfo | None = None) -> datetime:
    """Return the start of the local clock hour containing `moment`, in UTC.

    The floor is taken on the local wall clock so that half-hour offset
    timezones and DST transitions line up with the hours users see.
    """
    local = as_local(moment, tz)
    return local.replace(minute=0, second=0, microsecond=0).astimezone(UTC)


def dt_local_hour(moment: datetime, tz: tzinfo | None = None) -> int:
    """Return the local hour-of-day (0-23) of `moment`."""
    return as_local(moment, tz).hour


def dt_next_local_midnight(moment: datetime, tz: tzinfo | None = None) -> datetime:
    """Return the first local midnight strictly after `moment`, in UTC."""
    tz_info = tz or DEFAULT_TIME_ZONE
    local = as_local(moment, tz_info)
    next_day = local.date() + timedelta(days=1)
    midnight = datetime(next_day.year, next_day.month, next_day.day, tzinfo=tz_info)
    return midnight.astimezone(UTC)


def dt_local_date(moment: datetime, tz: tzinfo | None = None) -> date:
    """Return the local calendar date of `moment`."""
    return as_local(moment, tz).date()


def dt_local_date_key(moment: datetime, tz: tzinfo | None = None) -> str:
    """Return the local calendar day key of `moment` ("YYYY-MM-DD")."""
    return dt_local_date(moment, tz).isoformat()


def dt_hours_between(start: datetime, end: datetime) -> float:
    """Return wall-clock hours from `start` to `end` (negative if reversed)."""
    return (end - start).total_seconds() / SECONDS_PER_HOUR


# ==============================================================================
# Interval Conversion
# ==============================================================================


def dt_interval_to_days(
    amount: float, unit: str, anchor: datetime | None = None
) -> float:
    """Convert a user-facing interval into days.

    Months are calendar months measured from `anchor` (defaults to now), so
    "1 month" starting January 31st is 28 or 29 days long.

    Args:
        amount: Interval length in `unit`
        unit: One of TIME_UNIT_HOURS/DAYS/WEEKS/MONTHS
        anchor: Reference moment for calendar-month arithmetic

    Returns:
        Interval length in days, or 0.0 for an unknown unit.
    """
    if unit == TIME_UNIT_HOURS:
        return amount / 24.0
    if unit == TIME_UNIT_DAYS:
        return float(amount)
    if unit == TIME_UNIT_WEEKS:
        return amount * 7.0
    if unit == TIME_UNIT_MONTHS:
        base = as_local(anchor or datetime.now(UTC))
        whole_months = int(amount)
        target = base + relativedelta(months=whole_months)
        days = (target - base).total_seconds() / 86400.0
        fraction = amount - whole_months
        if fraction:
            following = target + relativedelta(months=1)
            days += fraction * (following - target).total_seconds() / 86400.0
        return days
    _LOGGER.warning("dt_interval_to_days: Unknown interval unit '%s'", unit)
    return 0.0


def dt_interval_to_hours(
    amount: float, unit: str, anchor: datetime | None = None
) -> float:
    """Convert a user-facing interval into hours (see dt_interval_to_days)."""
    if unit == TIME_UNIT_HOURS:
        return float(amount)
    return dt_interval_to_days(amount, unit, anchor) * 24.0
