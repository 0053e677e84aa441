"""Unit tests for TrendEngine - pure Python logic tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from custom_components.homekeeper import const
from custom_components.homekeeper.engines.active_time_engine import SleepWindow
from custom_components.homekeeper.engines.inventory_engine import InventoryEngine
from custom_components.homekeeper.engines.trend_engine import TrendEngine
from custom_components.homekeeper.engines.water_engine import (
    HistoryEntry,
    WaterCycleState,
)

NOW = datetime(2026, 2, 10, 12, 0, tzinfo=UTC)
NO_SLEEP = SleepWindow(0, 0)
NIGHT = SleepWindow(23, 7)


# =============================================================================
# Test: water usage distribution
# =============================================================================


class TestDistributeUsage:
    """Tests for spreading a cycle over calendar days."""

    def test_split_at_midnight(self) -> None:
        """20:00 → 04:00 puts four hours on each day."""
        usage = TrendEngine.distribute_usage(
            datetime(2026, 2, 9, 20, tzinfo=UTC),
            datetime(2026, 2, 10, 4, tzinfo=UTC),
            10.0,
            0.5,
            NO_SLEEP,
        )
        assert usage == {
            "2026-02-09": pytest.approx(2.0),
            "2026-02-10": pytest.approx(2.0),
        }

    def test_stops_when_tank_is_empty(self) -> None:
        """Usage never exceeds the capacity."""
        usage = TrendEngine.distribute_usage(
            datetime(2026, 2, 9, 20, tzinfo=UTC),
            datetime(2026, 2, 11, 4, tzinfo=UTC),
            3.0,
            1.0,
            NO_SLEEP,
        )
        assert usage == {"2026-02-09": pytest.approx(3.0)}

    def test_quiet_hours_add_nothing(self) -> None:
        """Only active hours of each day are charged."""
        usage = TrendEngine.distribute_usage(
            datetime(2026, 2, 9, 22, tzinfo=UTC),
            datetime(2026, 2, 10, 8, tzinfo=UTC),
            10.0,
            1.0,
            NIGHT,
        )
        assert usage == {
            "2026-02-09": pytest.approx(1.0),
            "2026-02-10": pytest.approx(1.0),
        }

    def test_days_follow_local_zone(self) -> None:
        """Day keys come from the local calendar, not UTC."""
        new_york = ZoneInfo("America/New_York")
        # 22:00 → 02:00 EST
        usage = TrendEngine.distribute_usage(
            datetime(2026, 2, 10, 3, tzinfo=UTC),
            datetime(2026, 2, 10, 7, tzinfo=UTC),
            10.0,
            0.5,
            NO_SLEEP,
            new_york,
        )
        assert usage == {
            "2026-02-09": pytest.approx(1.0),
            "2026-02-10": pytest.approx(1.0),
        }

    def test_empty_inputs(self) -> None:
        """Reversed intervals and empty tanks yield nothing."""
        assert TrendEngine.distribute_usage(NOW, NOW, 10.0, 1.0, NO_SLEEP) == {}
        assert (
            TrendEngine.distribute_usage(
                NOW - timedelta(hours=5), NOW, 0.0, 1.0, NO_SLEEP
            )
            == {}
        )


class TestMergeHistory:
    """Tests for archiving usage."""

    def test_sums_same_day(self) -> None:
        """A day present in both inputs is added up."""
        merged = TrendEngine.merge_history(
            [("2026-02-01", 1.0)], {"2026-02-01": 0.5, "2026-02-02": 2.0}
        )
        assert merged == [("2026-02-01", 1.5), ("2026-02-02", 2.0)]

    def test_keeps_newest_days(self) -> None:
        """Older days fall off first."""
        merged = TrendEngine.merge_history(
            [("2026-02-01", 1.0), ("2026-02-03", 1.0)], {"2026-02-02": 2.0}, 2
        )
        assert merged == [("2026-02-02", 2.0), ("2026-02-03", 1.0)]


class TestWaterTrend:
    """Tests for the trailing daily trend."""

    def test_combines_archive_and_open_cycle(self) -> None:
        """Seven days ending today; the open cycle lands on today."""
        state = WaterCycleState(
            capacity=18.9,
            current_level=18.9,
            last_reset_at=NOW - timedelta(hours=6),
            current_cycle_rate=0.2,
            sleep_window=NO_SLEEP,
            history=(HistoryEntry("2026-02-08", 3.0),),
        )
        trend = TrendEngine.water_trend(state, NOW)

        assert len(trend) == 7
        assert trend[0][const.DATA_WATER_HISTORY_DATE] == "2026-02-04"
        assert trend[-1][const.DATA_WATER_HISTORY_DATE] == "2026-02-10"
        liters = {
            point[const.DATA_WATER_HISTORY_DATE]: point[const.DATA_WATER_HISTORY_LITERS]
            for point in trend
        }
        assert liters["2026-02-08"] == 3.0
        assert liters["2026-02-10"] == 1.2
        assert liters["2026-02-05"] == 0.0

    def test_never_reset_tank(self) -> None:
        """Without an open cycle every day reads zero."""
        trend = TrendEngine.water_trend(WaterCycleState(capacity=10.0), NOW, days=3)
        assert [point[const.DATA_WATER_HISTORY_LITERS] for point in trend] == [
            0.0,
            0.0,
            0.0,
        ]


# =============================================================================
# Test: inventory step chart
# =============================================================================


class TestInventoryStepChart:
    """Tests for stock reconstruction from the event log."""

    def test_no_events_is_flat(self) -> None:
        """An empty log gives a flat line across the window."""
        points = TrendEngine.inventory_step_chart([], 4, NOW)
        assert [(point.ts, point.value) for point in points] == [
            (NOW - timedelta(days=const.INVENTORY_CHART_WINDOW_DAYS), 4),
            (NOW, 4),
        ]

    def test_steps_at_each_event(self) -> None:
        """Each event adds a hold point and a new-balance point."""
        restock_at = NOW - timedelta(days=10)
        open_at = NOW - timedelta(days=5)
        logs = [
            InventoryEngine.create_log_entry(
                open_at, const.INVENTORY_ACTION_OPEN, -1, 5
            ),
            InventoryEngine.create_log_entry(
                restock_at, const.INVENTORY_ACTION_RESTOCK, 4, 6
            ),
        ]
        points = TrendEngine.inventory_step_chart(logs, 5, NOW)

        assert len(points) == 2 + 2 * len(logs)
        assert [point.value for point in points] == [2, 2, 6, 6, 5, 5]
        assert points[1].ts == restock_at
        assert points[2].action == const.INVENTORY_ACTION_RESTOCK
        assert points[4].action == const.INVENTORY_ACTION_OPEN
        assert points[-1].ts == NOW

    def test_old_events_are_outside_window(self) -> None:
        """Events before the cutoff are ignored."""
        logs = [
            InventoryEngine.create_log_entry(
                NOW - timedelta(days=200), const.INVENTORY_ACTION_OPEN, -1, 3
            )
        ]
        assert len(TrendEngine.inventory_step_chart(logs, 3, NOW)) == 2

    def test_events_after_now_are_outside_window(self) -> None:
        """Events logged ahead of the clock never follow the closing point."""
        past_at = NOW - timedelta(days=1)
        logs = [
            InventoryEngine.create_log_entry(
                past_at, const.INVENTORY_ACTION_OPEN, -1, 2
            ),
            InventoryEngine.create_log_entry(
                NOW + timedelta(days=2), const.INVENTORY_ACTION_OPEN, -1, 1
            ),
        ]
        points = TrendEngine.inventory_step_chart(logs, 2, NOW)

        timestamps = [point.ts for point in points]
        assert timestamps == sorted(timestamps)
        assert timestamps == [
            NOW - timedelta(days=const.INVENTORY_CHART_WINDOW_DAYS),
            past_at,
            past_at,
            NOW,
        ]
        assert [point.value for point in points] == [3, 3, 2, 2]

    def test_point_attribute_form(self) -> None:
        """Event points carry their action; boundary points do not."""
        logs = [
            InventoryEngine.create_log_entry(
                NOW - timedelta(days=1), const.INVENTORY_ACTION_OPEN, -1, 2
            )
        ]
        points = TrendEngine.inventory_step_chart(logs, 2, NOW)
        assert const.DATA_LOG_ACTION not in points[0].as_dict()
        assert points[2].as_dict() == {
            const.DATA_LOG_TS: (NOW - timedelta(days=1)).isoformat(),
            const.DATA_LOG_BALANCE: 2,
            const.DATA_LOG_ACTION: const.INVENTORY_ACTION_OPEN,
        }
