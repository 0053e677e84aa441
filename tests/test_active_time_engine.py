"""Unit tests for ActiveTimeEngine - pure Python logic tests.

Test Categories:
- Sleep window membership (plain and wrapping windows)
- Forward integration of active hours
- Inverse search (backtrack_start) and agreement with the forward direction
- Non-UTC zones: half-hour offsets and DST transitions
- Termination bounds for pathological spans
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from custom_components.homekeeper.engines.active_time_engine import (
    MAX_SPAN_DAYS,
    ActiveTimeEngine,
    SleepWindow,
    iter_hour_segments,
)

NIGHT = SleepWindow(23, 7)
NO_SLEEP = SleepWindow(0, 0)
DAY = SleepWindow(9, 17)


def utc(*args: int) -> datetime:
    """Build an aware UTC datetime."""
    return datetime(*args, tzinfo=UTC)


# =============================================================================
# Test: SleepWindow
# =============================================================================


class TestSleepWindow:
    """Tests for quiet window membership."""

    @pytest.mark.parametrize(
        ("hour", "expected"),
        [(22, False), (23, True), (0, True), (6, True), (7, False), (12, False)],
    )
    def test_wrapping_window(self, hour: int, expected: bool) -> None:
        """A 23→7 window wraps past midnight with an exclusive end."""
        assert NIGHT.contains(hour) is expected

    @pytest.mark.parametrize(
        ("hour", "expected"), [(8, False), (9, True), (16, True), (17, False)]
    )
    def test_plain_window(self, hour: int, expected: bool) -> None:
        """A 9→17 window is a simple half-open range."""
        assert DAY.contains(hour) is expected

    def test_equal_bounds_exclude_nothing(self) -> None:
        """start == end means there is no quiet time at all."""
        assert not any(NO_SLEEP.contains(hour) for hour in range(24))
        assert NO_SLEEP.active_hours_per_day == 24

    def test_hours_per_day(self) -> None:
        """Quiet and active hours add up to a day."""
        assert NIGHT.quiet_hours_per_day == 8
        assert NIGHT.active_hours_per_day == 16

    def test_round_trip_through_storage(self) -> None:
        """Stored form restores the same window; missing data uses defaults."""
        assert SleepWindow.from_dict(DAY.as_dict()) == DAY
        assert SleepWindow.from_dict(None) == SleepWindow(23, 7)


# =============================================================================
# Test: active_hours
# =============================================================================


class TestActiveHours:
    """Tests for forward integration."""

    def test_daytime_span_counts_fully(self) -> None:
        """Hours outside the window count one for one."""
        assert ActiveTimeEngine.active_hours(
            utc(2026, 1, 1, 8), utc(2026, 1, 1, 12), NIGHT
        ) == pytest.approx(4.0)

    def test_overnight_span_skips_window(self) -> None:
        """22:00 → 08:00 keeps only 22-23 and 07-08."""
        assert ActiveTimeEngine.active_hours(
            utc(2026, 1, 1, 22), utc(2026, 1, 2, 8), NIGHT
        ) == pytest.approx(2.0)

    def test_partial_hours(self) -> None:
        """Fractional segments at both ends are counted by duration."""
        assert ActiveTimeEngine.active_hours(
            utc(2026, 1, 1, 22, 30), utc(2026, 1, 1, 23, 30), NIGHT
        ) == pytest.approx(0.5)
        assert ActiveTimeEngine.active_hours(
            utc(2026, 1, 1, 6, 45), utc(2026, 1, 1, 7, 15), NIGHT
        ) == pytest.approx(0.25)

    def test_full_day(self) -> None:
        """A whole day yields the window's active hours."""
        assert ActiveTimeEngine.active_hours(
            utc(2026, 1, 1), utc(2026, 1, 2), NIGHT
        ) == pytest.approx(16.0)

    def test_no_window_is_wall_clock(self) -> None:
        """Without a quiet window active time equals elapsed time."""
        assert ActiveTimeEngine.active_hours(
            utc(2026, 1, 1, 3, 10), utc(2026, 1, 3, 5, 40), NO_SLEEP
        ) == pytest.approx(50.5)

    def test_reversed_or_empty_interval(self) -> None:
        """end <= start yields zero."""
        start = utc(2026, 1, 1, 12)
        assert ActiveTimeEngine.active_hours(start, start, NIGHT) == 0.0
        assert ActiveTimeEngine.active_hours(start, start - timedelta(hours=5)) == 0.0

    @pytest.mark.parametrize(
        "window", [NIGHT, NO_SLEEP, DAY, SleepWindow(22, 2), SleepWindow(1, 0)]
    )
    @pytest.mark.parametrize("hour", [0, 1, 12, 23])
    def test_empty_interval_for_any_window(
        self, window: SleepWindow, hour: int
    ) -> None:
        """A zero-length interval has no active time, wrapping windows included."""
        moment = utc(2026, 1, 1, hour, 30)
        assert ActiveTimeEngine.active_hours(moment, moment, window) == 0.0

    @pytest.mark.parametrize(
        "window", [NIGHT, NO_SLEEP, DAY, SleepWindow(22, 2), SleepWindow(1, 0)]
    )
    def test_monotonic_in_end(self, window: SleepWindow) -> None:
        """Moving the end later never reduces active time."""
        start = utc(2026, 1, 1, 20, 15)
        totals = [
            ActiveTimeEngine.active_hours(
                start, start + timedelta(minutes=45 * step), window
            )
            for step in range(100)
        ]
        assert totals[0] == 0.0
        assert all(value >= 0.0 for value in totals)
        assert all(later >= earlier for earlier, later in zip(totals, totals[1:]))

    def test_span_beyond_cap_returns_estimate(self) -> None:
        """Oversized spans return the capped estimate instead of iterating."""
        start = utc(2025, 1, 1)
        end = start + timedelta(days=MAX_SPAN_DAYS * 10)
        assert ActiveTimeEngine.active_hours(start, end, NIGHT) == pytest.approx(
            MAX_SPAN_DAYS * 16.0
        )

    def test_segments_cover_interval(self) -> None:
        """Segments are contiguous and split on hour boundaries."""
        start = utc(2026, 1, 1, 10, 20)
        end = utc(2026, 1, 1, 13, 5)
        segments = list(iter_hour_segments(start, end, NIGHT))
        assert segments[0].start == start
        assert segments[-1].end == end
        assert [seg.end.minute for seg in segments[:-1]] == [0, 0, 0]
        for previous, current in zip(segments, segments[1:]):
            assert previous.end == current.start


class TestTimeZones:
    """Tests for zones with offsets and DST."""

    def test_half_hour_offset(self) -> None:
        """Hour boundaries follow the local clock in UTC+5:30."""
        kolkata = ZoneInfo("Asia/Kolkata")
        # 22:30 → 23:30 local
        start = utc(2026, 1, 1, 17)
        end = utc(2026, 1, 1, 18)
        assert ActiveTimeEngine.active_hours(start, end, NIGHT, kolkata) == (
            pytest.approx(0.5)
        )

    def test_spring_forward_counts_real_hours(self) -> None:
        """The skipped DST hour is not counted twice or invented."""
        new_york = ZoneInfo("America/New_York")
        # 00:00 EST → 04:00 EDT on 2026-03-08 is three real hours
        start = datetime(2026, 3, 8, 0, tzinfo=new_york)
        end = datetime(2026, 3, 8, 4, tzinfo=new_york)
        assert ActiveTimeEngine.active_hours(start, end, NO_SLEEP, new_york) == (
            pytest.approx(3.0)
        )

    def test_fall_back_counts_real_hours(self) -> None:
        """The repeated DST hour is counted for its real duration."""
        new_york = ZoneInfo("America/New_York")
        # 00:00 EDT → 03:00 EST on 2026-11-01 is four real hours
        start = datetime(2026, 11, 1, 0, tzinfo=new_york)
        end = datetime(2026, 11, 1, 3, tzinfo=new_york)
        assert ActiveTimeEngine.active_hours(start, end, NO_SLEEP, new_york) == (
            pytest.approx(4.0)
        )

    def test_window_uses_local_hours(self) -> None:
        """A moment is quiet based on its local, not UTC, hour."""
        new_york = ZoneInfo("America/New_York")
        # 04:00 UTC is 23:00 in New York in January
        assert ActiveTimeEngine.is_quiet(utc(2026, 1, 10, 4), NIGHT, new_york)
        assert not ActiveTimeEngine.is_quiet(utc(2026, 1, 10, 4), NIGHT, UTC)


# =============================================================================
# Test: backtrack_start
# =============================================================================


class TestBacktrackStart:
    """Tests for the inverse search."""

    def test_skips_quiet_hours(self) -> None:
        """Two active hours before 08:00 start at 22:00 the previous day."""
        assert ActiveTimeEngine.backtrack_start(
            utc(2026, 1, 2, 8), 2.0, NIGHT
        ) == utc(2026, 1, 1, 22)

    def test_fraction_inside_active_hour(self) -> None:
        """A target inside the current hour stays inside it."""
        assert ActiveTimeEngine.backtrack_start(
            utc(2026, 1, 1, 12, 30), 0.25, NIGHT
        ) == utc(2026, 1, 1, 12, 15)

    def test_zero_target_returns_now(self) -> None:
        """Nothing to accumulate means the interval is empty."""
        now = utc(2026, 1, 1, 12)
        assert ActiveTimeEngine.backtrack_start(now, 0.0, NIGHT) == now

    @pytest.mark.parametrize("target", [0.1, 1.0, 7.5, 16.0, 40.25, 200.0])
    @pytest.mark.parametrize(
        "now",
        [utc(2026, 1, 5, 8, 0), utc(2026, 1, 5, 23, 40), utc(2026, 1, 5, 3, 17)],
    )
    def test_agrees_with_forward_integration(
        self, now: datetime, target: float
    ) -> None:
        """active_hours(backtrack_start(now, x), now) == x."""
        start = ActiveTimeEngine.backtrack_start(now, target, NIGHT)
        assert ActiveTimeEngine.active_hours(start, now, NIGHT) == pytest.approx(
            target, abs=1e-6
        )

    def test_agrees_in_half_hour_zone(self) -> None:
        """The round trip also holds with local hour boundaries at :30 UTC."""
        kolkata = ZoneInfo("Asia/Kolkata")
        now = utc(2026, 1, 5, 2, 10)
        start = ActiveTimeEngine.backtrack_start(now, 20.0, NIGHT, kolkata)
        assert ActiveTimeEngine.active_hours(
            start, now, NIGHT, kolkata
        ) == pytest.approx(20.0, abs=1e-6)

    def test_unreachable_target_is_bounded(self) -> None:
        """Huge targets stop at the search bound instead of looping."""
        now = utc(2026, 1, 5, 12)
        start = ActiveTimeEngine.backtrack_start(now, 1_000_000.0, NIGHT)
        assert start == now - timedelta(days=MAX_SPAN_DAYS)

    def test_mostly_quiet_window_is_bounded(self) -> None:
        """With one active hour per day the search gives up at the bound."""
        one_active_hour = SleepWindow(1, 0)
        now = utc(2026, 1, 5, 12)
        start = ActiveTimeEngine.backtrack_start(now, 100.0, one_active_hour)
        assert start == now - timedelta(days=MAX_SPAN_DAYS)
        assert ActiveTimeEngine.active_hours(
            start, now, one_active_hour
        ) == pytest.approx(MAX_SPAN_DAYS)
