"""Water Engine - Pure logic for the drinking-water tank cycle.

This engine provides stateless, pure Python functions for:
- Interpolating the current tank level from the open cycle
- Endurance prediction (wall-clock hours until the tank runs dry)
- Reset (refill) transitions with outlier-protected rate learning
- Calibration transitions from a user-asserted level
- Member-based baseline rates, capacity reconfiguration, debug scenarios

Cycle states:
    OBSERVING  --calibrate-->  CALIBRATED
    OBSERVING/CALIBRATED  --reset-->  OBSERVING

Every transition returns a NEW WaterCycleState; inputs are never mutated.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant state.
All functions are static methods that operate on passed-in data.
State management belongs in WaterManager.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import TYPE_CHECKING, Any, NamedTuple

from .. import const
from ..utils import dt_utils
from ..utils.math_utils import (
    calculate_percentage,
    clamp,
    round_value,
    safe_divide,
    weighted_average,
)
from .active_time_engine import (
    DEFAULT_SLEEP_WINDOW,
    MAX_SPAN_DAYS,
    ActiveTimeEngine,
    SleepWindow,
    iter_hour_segments,
)
from .trend_engine import TrendEngine

if TYPE_CHECKING:
    from datetime import datetime, tzinfo


class HistoryEntry(NamedTuple):
    """Archived consumption for one local calendar day."""

    date: str
    liters: float


@dataclass(frozen=True)
class WaterCycleState:
    """Snapshot of the water tank and its learned consumption model."""

    capacity: float = const.DEFAULT_WATER_CAPACITY
    current_level: float = const.DEFAULT_WATER_CAPACITY
    last_reset_at: datetime | None = None
    learned_rate: float = const.DEFAULT_WATER_LEARNED_RATE
    current_cycle_rate: float = const.DEFAULT_WATER_LEARNED_RATE
    has_calibrated: bool = False
    sleep_window: SleepWindow = DEFAULT_SLEEP_WINDOW
    history: tuple[HistoryEntry, ...] = field(default_factory=tuple)

    @property
    def is_configured(self) -> bool:
        """True once the tank has a capacity."""
        return self.capacity > 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WaterCycleState:
        """Build a state from its stored form."""
        history = tuple(
            HistoryEntry(
                str(entry[const.DATA_WATER_HISTORY_DATE]),
                float(entry.get(const.DATA_WATER_HISTORY_LITERS, 0.0)),
            )
            for entry in data.get(const.DATA_WATER_HISTORY, [])
            if const.DATA_WATER_HISTORY_DATE in entry
        )
        return cls(
            capacity=float(data.get(const.DATA_WATER_CAPACITY, 0.0)),
            current_level=float(data.get(const.DATA_WATER_CURRENT_LEVEL, 0.0)),
            last_reset_at=dt_utils.dt_to_utc(data.get(const.DATA_WATER_LAST_RESET_AT)),
            learned_rate=float(
                data.get(
                    const.DATA_WATER_LEARNED_RATE, const.DEFAULT_WATER_LEARNED_RATE
                )
            ),
            current_cycle_rate=float(
                data.get(
                    const.DATA_WATER_CURRENT_CYCLE_RATE,
                    const.DEFAULT_WATER_LEARNED_RATE,
                )
            ),
            has_calibrated=bool(data.get(const.DATA_WATER_HAS_CALIBRATED, False)),
            sleep_window=SleepWindow.from_dict(data.get(const.DATA_WATER_SLEEP_WINDOW)),
            history=history,
        )

    def as_dict(self) -> dict[str, Any]:
        """Return the stored form of this state."""
        return {
            const.DATA_WATER_CAPACITY: self.capacity,
            const.DATA_WATER_CURRENT_LEVEL: self.current_level,
            const.DATA_WATER_LAST_RESET_AT: dt_utils.dt_to_iso(self.last_reset_at),
            const.DATA_WATER_LEARNED_RATE: self.learned_rate,
            const.DATA_WATER_CURRENT_CYCLE_RATE: self.current_cycle_rate,
            const.DATA_WATER_HAS_CALIBRATED: self.has_calibrated,
            const.DATA_WATER_SLEEP_WINDOW: self.sleep_window.as_dict(),
            const.DATA_WATER_HISTORY: [
                {
                    const.DATA_WATER_HISTORY_DATE: entry.date,
                    const.DATA_WATER_HISTORY_LITERS: entry.liters,
                }
                for entry in self.history
            ],
        }


@dataclass(frozen=True)
class RefillReport:
    """One-shot result of a reset or calibration, for notifications."""

    timestamp: datetime
    action: str
    is_outlier: bool = False
    outlier_kind: str | None = None
    implied_rate: float | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return the stored / event payload form of this report."""
        return {
            const.DATA_REPORT_TIMESTAMP: dt_utils.dt_to_iso(self.timestamp),
            const.DATA_REPORT_ACTION: self.action,
            const.DATA_REPORT_IS_OUTLIER: self.is_outlier,
            const.DATA_REPORT_OUTLIER_KIND: self.outlier_kind,
            const.DATA_REPORT_IMPLIED_RATE: (
                None if self.implied_rate is None else round_value(self.implied_rate, 4)
            ),
        }


@dataclass(frozen=True)
class WaterView:
    """Derived, read-only view of the tank at a moment."""

    level: float
    percentage: float
    status: str
    endurance_hours: float
    rate: float


class WaterEngine:
    """Pure logic engine for the water cycle.

    All methods are static - no instance state. `now` is always passed in.
    """

    # --------------------------------------------------------------------------
    # Derived view
    # --------------------------------------------------------------------------

    @staticmethod
    def active_hours_since_reset(
        state: WaterCycleState, now: datetime, tz: tzinfo | None = None
    ) -> float:
        """Active hours elapsed in the open cycle."""
        if state.last_reset_at is None:
            return 0.0
        return ActiveTimeEngine.active_hours(
            state.last_reset_at, now, state.sleep_window, tz
        )

    @staticmethod
    def current_level(
        state: WaterCycleState, now: datetime, tz: tzinfo | None = None
    ) -> float:
        """Interpolate the tank level at `now` from the open cycle."""
        if not state.is_configured:
            return 0.0
        consumed = (
            WaterEngine.active_hours_since_reset(state, now, tz)
            * state.current_cycle_rate
        )
        return clamp(state.capacity - consumed, 0.0, state.capacity)

    @staticmethod
    def endurance_hours(
        level: float,
        rate: float,
        now: datetime,
        window: SleepWindow = DEFAULT_SLEEP_WINDOW,
        tz: tzinfo | None = None,
    ) -> float:
        """Predict wall-clock hours until the tank is empty.

        Walks forward from `now` over the same hour segments the active-time
        integration uses; quiet hours pass without consumption.

        Returns:
            WATER_ENDURANCE_UNBOUNDED_HOURS for a negligible rate, 0.0 for an
            empty tank, otherwise hours capped at MAX_SPAN_DAYS.
        """
        if rate <= const.WATER_MIN_RATE:
            return const.WATER_ENDURANCE_UNBOUNDED_HOURS
        if level <= 0:
            return 0.0

        remaining = level
        hours = 0.0
        horizon = now + timedelta(days=MAX_SPAN_DAYS)
        for segment in iter_hour_segments(now, horizon, window, tz):
            if not segment.quiet:
                consumption = segment.hours * rate
                if remaining <= consumption:
                    return hours + remaining / rate
                remaining -= consumption
            hours += segment.hours
        return hours

    @staticmethod
    def status(level: float, capacity: float) -> str:
        """Classify the tank level."""
        if capacity <= 0:
            return const.WATER_STATUS_UNCONFIGURED
        if level <= const.WATER_EMPTY_LEVEL:
            return const.WATER_STATUS_EMPTY
        percentage = calculate_percentage(level, capacity)
        if percentage < const.WATER_LOW_PERCENT:
            return const.WATER_STATUS_LOW
        if percentage < const.WATER_MEDIUM_PERCENT:
            return const.WATER_STATUS_MEDIUM
        return const.WATER_STATUS_OK

    @staticmethod
    def view(
        state: WaterCycleState, now: datetime, tz: tzinfo | None = None
    ) -> WaterView:
        """Build the derived view of the tank at `now`."""
        level = WaterEngine.current_level(state, now, tz)
        endurance = (
            WaterEngine.endurance_hours(
                level, state.current_cycle_rate, now, state.sleep_window, tz
            )
            if state.is_configured
            else 0.0
        )
        return WaterView(
            level=round_value(level),
            percentage=calculate_percentage(level, state.capacity, 1),
            status=WaterEngine.status(level, state.capacity),
            endurance_hours=round_value(endurance, 1),
            rate=round_value(state.current_cycle_rate, 4),
        )

    # --------------------------------------------------------------------------
    # Learning
    # --------------------------------------------------------------------------

    @staticmethod
    def implied_rate(state: WaterCycleState, elapsed_active_hours: float) -> float:
        """Rate observed over the closing cycle.

        A calibrated cycle already carries a corrected rate. Otherwise the
        whole capacity is assumed consumed over the elapsed active hours;
        cycles too short to measure fall back to the learned rate.
        """
        if state.has_calibrated:
            return state.current_cycle_rate
        if elapsed_active_hours > const.WATER_MIN_RESET_ACTIVE_HOURS:
            return state.capacity / elapsed_active_hours
        return state.learned_rate

    @staticmethod
    def classify_rate(implied: float, learned: float) -> str | None:
        """Return the outlier kind of an observation, or None if valid."""
        if implied < learned * const.WATER_OUTLIER_MIN_FACTOR:
            return const.OUTLIER_KIND_SLOW
        if implied > learned * const.WATER_OUTLIER_MAX_FACTOR:
            return const.OUTLIER_KIND_FAST
        return None

    @staticmethod
    def learn(learned: float, implied: float) -> float:
        """Blend a valid observation into the long-term rate."""
        blended = weighted_average(
            learned,
            implied,
            const.WATER_LEARNING_OLD_WEIGHT,
            const.WATER_LEARNING_NEW_WEIGHT,
        )
        return max(blended, const.WATER_MIN_RATE)

    # --------------------------------------------------------------------------
    # Transitions
    # --------------------------------------------------------------------------

    @staticmethod
    def process_reset(
        state: WaterCycleState,
        now: datetime,
        tz: tzinfo | None = None,
        *,
        learn: bool = True,
    ) -> tuple[WaterCycleState, RefillReport]:
        """Close the open cycle and start a full one.

        Args:
            state: Current cycle state
            now: Moment of the refill
            tz: Local timezone for active-hour and day-key calculations
            learn: When False the closing cycle is neither learned from nor
                archived (used for the very first capacity configuration)

        Returns:
            (new_state, report). Outliers are reported and skipped by the
            learner, but the cycle is still archived at its implied rate.
        """
        if not learn or state.last_reset_at is None:
            fresh = replace(
                state,
                last_reset_at=now,
                current_level=state.capacity,
                current_cycle_rate=state.learned_rate,
                has_calibrated=False,
            )
            return fresh, RefillReport(timestamp=now, action=const.WATER_ACTION_REFILL)

        elapsed = WaterEngine.active_hours_since_reset(state, now, tz)
        implied = WaterEngine.implied_rate(state, elapsed)
        outlier_kind = WaterEngine.classify_rate(implied, state.learned_rate)

        if outlier_kind is None:
            learned = WaterEngine.learn(state.learned_rate, implied)
        else:
            learned = state.learned_rate
            const.LOGGER.info(
                "INFO: Water cycle rate %.4f L/h flagged as %s (learned %.4f L/h)",
                implied,
                outlier_kind,
                state.learned_rate,
            )

        usage = TrendEngine.distribute_usage(
            state.last_reset_at,
            now,
            state.capacity,
            implied,
            state.sleep_window,
            tz,
        )
        history = TrendEngine.merge_history(
            [(entry.date, entry.liters) for entry in state.history],
            usage,
            const.WATER_HISTORY_RETENTION_DAYS,
        )

        new_state = replace(
            state,
            last_reset_at=now,
            current_level=state.capacity,
            learned_rate=learned,
            current_cycle_rate=learned,
            has_calibrated=False,
            history=tuple(HistoryEntry(day, liters) for day, liters in history),
        )
        report = RefillReport(
            timestamp=now,
            action=const.WATER_ACTION_REFILL,
            is_outlier=outlier_kind is not None,
            outlier_kind=outlier_kind,
            implied_rate=implied,
        )
        return new_state, report

    @staticmethod
    def process_calibration(
        state: WaterCycleState,
        now: datetime,
        asserted_level: float,
        tz: tzinfo | None = None,
    ) -> tuple[WaterCycleState, RefillReport]:
        """Correct the open cycle from a user-asserted level.

        With enough elapsed active time the cycle rate is re-derived from the
        consumption so far. For very short cycles the rate is kept and the
        cycle start is moved back instead, so the interpolated level at `now`
        equals the asserted one either way.
        """
        asserted = clamp(asserted_level, 0.0, state.capacity)
        consumed = state.capacity - asserted
        last_reset_at = state.last_reset_at or now
        elapsed = ActiveTimeEngine.active_hours(
            last_reset_at, now, state.sleep_window, tz
        )

        if elapsed >= const.WATER_MIN_CALIBRATION_ACTIVE_HOURS:
            rate = max(consumed / elapsed, const.WATER_MIN_RATE)
        else:
            rate = (
                state.current_cycle_rate
                if state.current_cycle_rate > 0
                else const.WATER_FALLBACK_RATE
            )
            last_reset_at = ActiveTimeEngine.backtrack_start(
                now, safe_divide(consumed, rate, 0.0), state.sleep_window, tz
            )

        new_state = replace(
            state,
            current_level=asserted,
            current_cycle_rate=rate,
            last_reset_at=last_reset_at,
            has_calibrated=True,
        )
        return new_state, RefillReport(
            timestamp=now, action=const.WATER_ACTION_CALIBRATE
        )

    # --------------------------------------------------------------------------
    # Reconfiguration
    # --------------------------------------------------------------------------

    @staticmethod
    def baseline_rate(human_count: int) -> float:
        """Starting consumption rate for a household of `human_count` people."""
        return max(
            const.WATER_MIN_BASELINE_RATE,
            round_value(human_count * const.WATER_PER_PERSON_RATE, 3),
        )

    @staticmethod
    def apply_member_baseline(
        state: WaterCycleState, human_count: int
    ) -> WaterCycleState:
        """Reset both rates to the member baseline until learning has started."""
        if state.history:
            return state
        rate = WaterEngine.baseline_rate(human_count)
        return replace(state, learned_rate=rate, current_cycle_rate=rate)

    @staticmethod
    def reconfigure_capacity(
        state: WaterCycleState,
        capacity: float,
        now: datetime,
        tz: tzinfo | None = None,
    ) -> tuple[WaterCycleState, RefillReport]:
        """Set a new tank capacity and start a full cycle.

        The first configuration of an unconfigured tank has no meaningful
        closing cycle, so it skips learning.
        """
        first_configuration = not state.is_configured
        resized = replace(state, capacity=max(0.0, capacity))
        return WaterEngine.process_reset(
            resized, now, tz, learn=not first_configuration
        )

    @staticmethod
    def apply_scenario(
        state: WaterCycleState,
        scenario: str,
        now: datetime,
        tz: tzinfo | None = None,
    ) -> WaterCycleState:
        """Overwrite the open cycle with a canned debug scenario."""
        if not state.is_configured:
            state = replace(
                state,
                capacity=const.DEMO_WATER_CAPACITY,
                current_level=const.DEMO_WATER_CAPACITY,
            )
        if state.last_reset_at is None:
            state = replace(state, last_reset_at=now)

        day = timedelta(days=1)
        if scenario == const.WATER_SCENARIO_LOW:
            state = replace(state, last_reset_at=now - 3 * day, current_cycle_rate=0.25)
        elif scenario == const.WATER_SCENARIO_ALMOST_EMPTY:
            state = replace(state, last_reset_at=now - 4 * day, current_cycle_rate=0.3)
        elif scenario == const.WATER_SCENARIO_FULL:
            state = replace(state, last_reset_at=now, current_cycle_rate=0.15)
        elif scenario == const.WATER_SCENARIO_STAGNANT:
            state = replace(
                state, last_reset_at=now - 10 * day, current_cycle_rate=0.05
            )
        elif scenario == const.WATER_SCENARIO_RATE_FAST:
            state = replace(state, current_cycle_rate=1.2)
        elif scenario == const.WATER_SCENARIO_RATE_SLOW:
            state = replace(state, current_cycle_rate=0.01)
        else:
            const.LOGGER.warning("WARNING: Unknown water scenario '%s'", scenario)
            return state

        return replace(state, current_level=WaterEngine.current_level(state, now, tz))
