"""Trend Engine - Pure logic for reconstructing consumption history for charts.

This engine provides stateless, pure Python functions for:
- Distributing a cycle's consumption across local calendar days
- Merging per-day usage into the archived water history
- The trailing 7-day water trend (archive + open cycle)
- Inventory stock step charts reconstructed from the event log

ARCHITECTURE: This is a pure logic engine with NO Home Assistant state.
All functions are static methods that operate on passed-in data.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from .. import const
from ..utils import dt_utils
from ..utils.math_utils import round_value
from .active_time_engine import ActiveTimeEngine, SleepWindow

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from datetime import datetime, tzinfo

    from .water_engine import WaterCycleState


# Upper bound on the number of calendar days a single cycle is spread over
MAX_DISTRIBUTION_DAYS = 365


@dataclass(frozen=True)
class ChartPoint:
    """A point of a step chart. `action` is set only on event points."""

    ts: datetime
    value: float
    action: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the attribute form of this point."""
        point: dict[str, Any] = {
            const.DATA_LOG_TS: dt_utils.dt_to_iso(self.ts),
            const.DATA_LOG_BALANCE: self.value,
        }
        if self.action is not None:
            point[const.DATA_LOG_ACTION] = self.action
        return point


class TrendEngine:
    """Pure logic engine for trend reconstruction.

    All methods are static - no instance state.
    """

    @staticmethod
    def distribute_usage(
        start: datetime,
        end: datetime,
        capacity: float,
        rate: float,
        window: SleepWindow,
        tz: tzinfo | None = None,
    ) -> dict[str, float]:
        """Spread consumption between two moments over local calendar days.

        Each day receives its active hours times `rate`, until the simulated
        tank (starting at `capacity`) runs dry.

        Returns:
            Mapping of day key ("YYYY-MM-DD") to litres, in day order.
        """
        usage: dict[str, float] = {}
        if start >= end or capacity <= 0:
            return usage

        cursor = start
        remaining = capacity
        days = 0
        while cursor < end and remaining > 0 and days < MAX_DISTRIBUTION_DAYS:
            days += 1
            segment_end = min(dt_utils.dt_next_local_midnight(cursor, tz), end)
            active = ActiveTimeEngine.active_hours(cursor, segment_end, window, tz)
            consumed = min(active * rate, remaining)
            if consumed > 0:
                key = dt_utils.dt_local_date_key(cursor, tz)
                usage[key] = usage.get(key, 0.0) + consumed
                remaining -= consumed
            cursor = segment_end
        return usage

    @staticmethod
    def merge_history(
        history: Iterable[tuple[str, float]],
        usage: Mapping[str, float],
        keep_days: int = const.WATER_HISTORY_RETENTION_DAYS,
    ) -> list[tuple[str, float]]:
        """Add per-day usage into archived history, keeping the newest days.

        Returns a new list ordered by day with unique keys.
        """
        merged: dict[str, float] = {}
        for day, liters in history:
            merged[day] = merged.get(day, 0.0) + liters
        for day, liters in usage.items():
            merged[day] = merged.get(day, 0.0) + liters
        ordered = sorted(merged.items())
        return ordered[-keep_days:] if keep_days > 0 else []

    @staticmethod
    def water_trend(
        state: WaterCycleState,
        now: datetime,
        days: int = const.WATER_TREND_DAYS,
        tz: tzinfo | None = None,
    ) -> list[dict[str, Any]]:
        """Return daily litres for the trailing `days` local days ending today.

        Archived history is combined with the open cycle, which is
        reconstructed at its current rate. Missing days read 0.0.
        """
        daily: dict[str, float] = {}
        for entry in state.history:
            daily[entry.date] = daily.get(entry.date, 0.0) + entry.liters

        if state.last_reset_at is not None:
            open_cycle = TrendEngine.distribute_usage(
                state.last_reset_at,
                now,
                state.capacity,
                state.current_cycle_rate,
                state.sleep_window,
                tz,
            )
            for day, liters in open_cycle.items():
                daily[day] = daily.get(day, 0.0) + liters

        today = dt_utils.dt_local_date(now, tz)
        trend = []
        for offset in range(days - 1, -1, -1):
            key = (today - timedelta(days=offset)).isoformat()
            trend.append(
                {
                    const.DATA_WATER_HISTORY_DATE: key,
                    const.DATA_WATER_HISTORY_LITERS: round_value(
                        daily.get(key, 0.0), 1
                    ),
                }
            )
        return trend

    @staticmethod
    def inventory_step_chart(
        logs: Iterable[Mapping[str, Any]],
        current_stock: float,
        now: datetime,
        window_days: int = const.INVENTORY_CHART_WINDOW_DAYS,
    ) -> list[ChartPoint]:
        """Rebuild the stock level over the window as a step series.

        Every in-window event contributes a hold point carrying the previous
        value and an event point carrying the new balance. The series always
        starts at the window cutoff and ends at `now` with the current stock.
        """
        cutoff = now - timedelta(days=window_days)
        events = []
        for log in logs:
            ts = dt_utils.dt_to_utc(log.get(const.DATA_LOG_TS))
            if ts is not None and cutoff <= ts <= now:
                events.append((ts, log))
        events.sort(key=lambda item: item[0])

        if not events:
            return [ChartPoint(cutoff, current_stock), ChartPoint(now, current_stock)]

        first = events[0][1]
        previous = float(first.get(const.DATA_LOG_BALANCE, 0)) - float(
            first.get(const.DATA_LOG_DELTA, 0)
        )
        points = [ChartPoint(cutoff, previous)]
        for ts, log in events:
            balance = float(log.get(const.DATA_LOG_BALANCE, 0))
            points.append(ChartPoint(ts, previous))
            points.append(ChartPoint(ts, balance, log.get(const.DATA_LOG_ACTION)))
            previous = balance
        points.append(ChartPoint(now, current_stock))
        return points
