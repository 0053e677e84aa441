"""Water Manager - Drinking-water tank workflows.

Bridges the stored water record and WaterEngine:
- refill / calibrate transitions (with refill report on the event bus)
- capacity and sleep-window reconfiguration
- member-based baseline rate while no history has been learned
- derived views and the 7-day trend for entities
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from homeassistant.core import callback
from homeassistant.exceptions import HomeAssistantError

from .. import const
from ..engines.active_time_engine import SleepWindow
from ..engines.trend_engine import TrendEngine
from ..engines.water_engine import WaterCycleState, WaterEngine
from .base_manager import BaseManager

if TYPE_CHECKING:
    from ..engines.water_engine import RefillReport, WaterView


class WaterManager(BaseManager):
    """Manages the water cycle stored under DATA_WATER."""

    async def async_setup(self) -> None:
        """Follow roster changes to keep the baseline rate in step."""
        self.listen(const.SIGNAL_SUFFIX_MEMBERS_CHANGED, self._on_members_changed)

    @callback
    def _on_members_changed(self, payload: dict[str, Any]) -> None:
        state = self.state
        updated = WaterEngine.apply_member_baseline(state, payload["human_count"])
        if updated == state:
            return
        const.LOGGER.debug(
            "DEBUG: Water baseline rate set to %s L/h for %s people",
            updated.learned_rate,
            payload["human_count"],
        )
        self._write_state(updated)
        self.coordinator._persist_and_update()

    # -------------------------------------------------------------------------------------
    # State Access
    # -------------------------------------------------------------------------------------

    @property
    def state(self) -> WaterCycleState:
        """Current stored cycle as an engine state."""
        return WaterCycleState.from_dict(self.coordinator.water_data)

    @property
    def last_report(self) -> dict[str, Any] | None:
        """Last refill/calibration report, if any."""
        return self.coordinator.water_data.get(const.DATA_WATER_LAST_REPORT)

    def _write_state(
        self, state: WaterCycleState, report: RefillReport | None = None
    ) -> None:
        stored = state.as_dict()
        stored[const.DATA_WATER_LAST_REPORT] = (
            report.as_dict() if report is not None else self.last_report
        )
        self.coordinator._data[const.DATA_WATER] = stored

    def _require_configured(self, state: WaterCycleState) -> None:
        if not state.is_configured:
            raise HomeAssistantError(
                translation_domain=const.DOMAIN,
                translation_key=const.TRANS_KEY_ERROR_WATER_NOT_CONFIGURED,
            )

    def view(self) -> WaterView:
        """Derived level, percentage, status and endurance at virtual now."""
        return WaterEngine.view(self.state, self.coordinator.now())

    def trend(self) -> list[dict[str, Any]]:
        """Daily litres for the trailing week."""
        return TrendEngine.water_trend(self.state, self.coordinator.now())

    # -------------------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------------------

    def refill(self) -> RefillReport:
        """Record a full refill and learn from the closing cycle."""
        self.require_module(const.MODULE_WATER)
        state = self.state
        self._require_configured(state)

        new_state, report = WaterEngine.process_reset(state, self.coordinator.now())
        self._write_state(new_state, report)
        const.LOGGER.info(
            "INFO: Water refilled; learned rate %.4f L/h (outlier: %s)",
            new_state.learned_rate,
            report.outlier_kind or "none",
        )
        self.coordinator._persist_and_update()

        self.hass.bus.async_fire(
            const.EVENT_WATER_REFILL_REPORT,
            {"entry_id": self.entry_id, **report.as_dict()},
        )
        return report

    def calibrate(self, level: float) -> RefillReport:
        """Correct the open cycle from a measured level."""
        self.require_module(const.MODULE_WATER)
        state = self.state
        self._require_configured(state)

        new_state, report = WaterEngine.process_calibration(
            state, self.coordinator.now(), level
        )
        self._write_state(new_state, report)
        const.LOGGER.info(
            "INFO: Water calibrated to %.2f L; cycle rate %.4f L/h",
            new_state.current_level,
            new_state.current_cycle_rate,
        )
        self.coordinator._persist_and_update()
        return report

    def set_capacity(self, capacity: float) -> None:
        """Change the tank capacity; the tank is treated as refilled."""
        self.require_module(const.MODULE_WATER)
        new_state, report = WaterEngine.reconfigure_capacity(
            self.state, capacity, self.coordinator.now()
        )
        self._write_state(new_state, report)
        const.LOGGER.info("INFO: Water capacity set to %.2f L", new_state.capacity)
        self.coordinator._persist_and_update()

    def set_sleep_window(self, start: int, end: int) -> None:
        """Change the nightly quiet window (hours of day, end exclusive)."""
        self.require_module(const.MODULE_WATER)
        window = SleepWindow(start % 24, end % 24)
        self.coordinator.water_data[const.DATA_WATER_SLEEP_WINDOW] = window.as_dict()
        const.LOGGER.info(
            "INFO: Water sleep window set to %02d:00-%02d:00", window.start, window.end
        )
        self.coordinator._persist_and_update()

    def simulate_scenario(self, scenario: str) -> None:
        """Overwrite the open cycle with a debug scenario."""
        self.require_module(const.MODULE_WATER)
        new_state = WaterEngine.apply_scenario(
            self.state, scenario, self.coordinator.now()
        )
        self._write_state(new_state)
        const.LOGGER.info(
            "INFO: Water scenario '%s' applied; level %.2f L",
            scenario,
            new_state.current_level,
        )
        self.coordinator._persist_and_update()
