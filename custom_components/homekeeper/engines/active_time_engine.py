"""Active Time Engine - Pure logic for quiet-window-aware elapsed time.

This engine provides stateless, pure Python functions for:
- Walking a wall-clock interval one local clock hour at a time
- Integrating "active hours" (elapsed time outside the nightly quiet window)
- The inverse search: the start instant that yields a target number of
  active hours ending at a given moment

Forward integration and the inverse search share a single hour-segment
iterator, so both directions always agree on where hours begin and which
hours are quiet.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant state.
All functions are static methods that operate on passed-in data. "Now" is
always supplied by the caller.
"""

from __future__ import annotations

from datetime import UTC, timedelta
from itertools import islice
from typing import TYPE_CHECKING, NamedTuple

from .. import const
from ..utils import dt_utils

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from datetime import datetime, tzinfo


# Longest interval integrated segment-by-segment before returning an estimate
MAX_SPAN_DAYS = 60
# One segment per clock hour across the same span
MAX_BACKTRACK_SEGMENTS = MAX_SPAN_DAYS * 24


class SleepWindow(NamedTuple):
    """Recurring daily quiet window as a half-open [start, end) hour range.

    A window may wrap past midnight (23 → 7). A window whose start equals its
    end excludes nothing.
    """

    start: int
    end: int

    @classmethod
    def from_dict(cls, data: Mapping[str, int] | None) -> SleepWindow:
        """Build a window from its stored form, falling back to defaults."""
        if not data:
            return cls(const.DEFAULT_SLEEP_START, const.DEFAULT_SLEEP_END)
        return cls(
            int(data.get(const.DATA_WATER_SLEEP_START, const.DEFAULT_SLEEP_START))
            % 24,
            int(data.get(const.DATA_WATER_SLEEP_END, const.DEFAULT_SLEEP_END)) % 24,
        )

    def as_dict(self) -> dict[str, int]:
        """Return the stored form of this window."""
        return {
            const.DATA_WATER_SLEEP_START: self.start,
            const.DATA_WATER_SLEEP_END: self.end,
        }

    def contains(self, hour: int) -> bool:
        """Return True when the local hour-of-day is inside the window."""
        if self.start == self.end:
            return False
        if self.start < self.end:
            return self.start <= hour < self.end
        return hour >= self.start or hour < self.end

    @property
    def quiet_hours_per_day(self) -> int:
        """Number of clock hours per day inside the window."""
        return sum(1 for hour in range(24) if self.contains(hour))

    @property
    def active_hours_per_day(self) -> int:
        """Number of clock hours per day outside the window."""
        return 24 - self.quiet_hours_per_day


DEFAULT_SLEEP_WINDOW = SleepWindow(const.DEFAULT_SLEEP_START, const.DEFAULT_SLEEP_END)


class HourSegment(NamedTuple):
    """A slice of time contained in a single local clock hour."""

    start: datetime
    end: datetime
    quiet: bool

    @property
    def hours(self) -> float:
        """Length of the segment in hours."""
        return dt_utils.dt_hours_between(self.start, self.end)


# ==============================================================================
# Segment Iteration
# ==============================================================================


def iter_hour_segments(
    start: datetime,
    end: datetime,
    window: SleepWindow,
    tz: tzinfo | None = None,
) -> Iterator[HourSegment]:
    """Yield consecutive segments covering [start, end), oldest first.

    Each segment ends at the next local hour boundary (or at `end`). Its
    quiet flag comes from the local hour it starts in.
    """
    cursor = start.astimezone(UTC)
    finish = end.astimezone(UTC)
    while cursor < finish:
        hour_start = dt_utils.dt_floor_hour(cursor, tz)
        segment_end = min(hour_start + dt_utils.HOUR, finish)
        quiet = window.contains(dt_utils.dt_local_hour(hour_start, tz))
        yield HourSegment(cursor, segment_end, quiet)
        cursor = segment_end


def iter_hour_segments_reverse(
    end: datetime,
    window: SleepWindow,
    tz: tzinfo | None = None,
) -> Iterator[HourSegment]:
    """Yield segments walking backwards from `end`, newest first.

    Unbounded: callers must cap how many segments they consume. The first
    segment runs from the start of the local hour containing `end` up to
    `end`; when `end` sits exactly on an hour boundary the whole previous
    hour is yielded instead of an empty segment.
    """
    cursor = end.astimezone(UTC)
    while True:
        hour_start = dt_utils.dt_floor_hour(cursor, tz)
        if hour_start == cursor:
            hour_start = dt_utils.dt_floor_hour(cursor - dt_utils.HOUR, tz)
        quiet = window.contains(dt_utils.dt_local_hour(hour_start, tz))
        yield HourSegment(hour_start, cursor, quiet)
        cursor = hour_start


# ==============================================================================
# Engine
# ==============================================================================


class ActiveTimeEngine:
    """Pure logic engine converting between wall-clock spans and active hours.

    All methods are static - no instance state. Timezone arguments default to
    the household timezone configured in dt_utils.
    """

    @staticmethod
    def is_quiet(moment: datetime, window: SleepWindow, tz: tzinfo | None = None) -> bool:
        """Return True when `moment` falls inside the quiet window."""
        return window.contains(dt_utils.dt_local_hour(moment, tz))

    @staticmethod
    def capped_estimate(window: SleepWindow) -> float:
        """Active hours reported for spans longer than MAX_SPAN_DAYS."""
        return float(MAX_SPAN_DAYS * window.active_hours_per_day)

    @staticmethod
    def active_hours(
        start: datetime,
        end: datetime,
        window: SleepWindow = DEFAULT_SLEEP_WINDOW,
        tz: tzinfo | None = None,
    ) -> float:
        """Return hours elapsed in [start, end) outside the quiet window.

        Args:
            start: Beginning of the interval (timezone-aware)
            end: End of the interval (timezone-aware)
            window: Nightly quiet window
            tz: Local timezone used for hour-of-day checks

        Returns:
            Non-negative active hours. 0.0 when end <= start. Spans longer
            than MAX_SPAN_DAYS return MAX_SPAN_DAYS days of active hours.
        """
        if end <= start:
            return 0.0
        if end - start > timedelta(days=MAX_SPAN_DAYS):
            return ActiveTimeEngine.capped_estimate(window)
        return sum(
            segment.hours
            for segment in iter_hour_segments(start, end, window, tz)
            if not segment.quiet
        )

    @staticmethod
    def backtrack_start(
        now: datetime,
        target_active_hours: float,
        window: SleepWindow = DEFAULT_SLEEP_WINDOW,
        tz: tzinfo | None = None,
    ) -> datetime:
        """Find the start instant that accumulates `target_active_hours` by `now`.

        Walks backwards from `now`, skipping quiet segments at zero cost and
        consuming the target from active ones. The search is bounded to
        MAX_BACKTRACK_SEGMENTS segments; when the bound is hit the furthest
        reachable instant is returned instead of raising.

        Args:
            now: End of the interval (timezone-aware)
            target_active_hours: Active hours the interval must contain
            window: Nightly quiet window
            tz: Local timezone used for hour-of-day checks

        Returns:
            UTC datetime such that active_hours(result, now) ≈ target.
        """
        cursor = now.astimezone(UTC)
        remaining = target_active_hours
        if remaining <= 0:
            return cursor

        for segment in islice(
            iter_hour_segments_reverse(now, window, tz), MAX_BACKTRACK_SEGMENTS
        ):
            if not segment.quiet:
                if remaining <= segment.hours:
                    return segment.end - timedelta(hours=remaining)
                remaining -= segment.hours
            cursor = segment.start

        const.LOGGER.debug(
            "DEBUG: Active time backtrack hit the %s day cap with %.3f hours left",
            MAX_SPAN_DAYS,
            remaining,
        )
        return cursor
