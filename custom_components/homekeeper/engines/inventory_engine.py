"""Inventory Engine - Pure logic for consumable stock tracking.

This engine provides stateless, pure Python functions for:
- Rolling-window daily consumption rate from OPEN events
- Days-to-empty projection and alert classification
- Stock event log entry creation and pruning

ARCHITECTURE: This is a pure logic engine with NO Home Assistant state.
All functions are static methods that operate on passed-in data.
State management belongs in InventoryManager.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from .. import const
from ..utils import dt_utils
from ..utils.math_utils import round_value

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from ..type_defs import InventoryLogEntry


class InventoryEngine:
    """Pure logic engine for inventory calculations.

    All methods are static - no instance state.

    Log actions:
        - INVENTORY_ACTION_OPEN: one unit taken into use (delta -1)
        - INVENTORY_ACTION_RESTOCK: units added (positive delta)
        - INVENTORY_ACTION_EDIT: manual correction to an asserted stock
    """

    @staticmethod
    def daily_rate(
        logs: Iterable[InventoryLogEntry],
        now: datetime,
        window_days: int = const.INVENTORY_RATE_WINDOW_DAYS,
    ) -> float | None:
        """Estimate units consumed per day from recent OPEN events.

        Args:
            logs: Stock event log (any order)
            now: Current (virtual) time
            window_days: Only events in [now - window_days, now] count

        Returns:
            (n - 1) / max(days between first and last open, 1), or None when
            fewer than two OPEN events fall inside the window.
        """
        cutoff = now - timedelta(days=window_days)
        opened: list[datetime] = []
        for log in logs:
            if log.get(const.DATA_LOG_ACTION) != const.INVENTORY_ACTION_OPEN:
                continue
            ts = dt_utils.dt_to_utc(log.get(const.DATA_LOG_TS))
            if ts is not None and cutoff <= ts <= now:
                opened.append(ts)

        if len(opened) < 2:
            return None

        opened.sort()
        days_elapsed = (opened[-1] - opened[0]) / timedelta(days=1)
        return (len(opened) - 1) / max(days_elapsed, 1.0)

    @staticmethod
    def projection_days(stock: float, rate: float | None) -> float | None:
        """Days until the stock runs out at `rate`, or None without a rate."""
        if rate is None or rate <= 0:
            return None
        return stock / rate

    @staticmethod
    def alert_level(stock: float, threshold: float, days_left: float | None) -> str:
        """Classify an item as critical, warning or ok."""
        if stock <= threshold:
            return const.INVENTORY_ALERT_CRITICAL
        if days_left is not None and days_left <= const.INVENTORY_WARNING_DAYS:
            return const.INVENTORY_ALERT_WARNING
        return const.INVENTORY_ALERT_OK

    @staticmethod
    def create_log_entry(
        now: datetime, action: str, delta: float, balance: float
    ) -> InventoryLogEntry:
        """Create a stock event entry. `balance` is the stock AFTER the event."""
        return {
            const.DATA_LOG_TS: dt_utils.dt_to_iso(now),
            const.DATA_LOG_ACTION: action,
            const.DATA_LOG_DELTA: round_value(delta),
            const.DATA_LOG_BALANCE: round_value(balance),
        }

    @staticmethod
    def prune_logs(
        logs: list[InventoryLogEntry],
        max_entries: int = const.INVENTORY_MAX_LOG_ENTRIES,
    ) -> list[InventoryLogEntry]:
        """Return the most recent `max_entries` entries (append order)."""
        if len(logs) <= max_entries:
            return list(logs)
        return logs[len(logs) - max_entries :]
