"""Engine modules for HomeKeeper integration.

Contains the pure computation engines:
- active_time_engine: Quiet-window-aware elapsed time and its inverse
- entropy_engine: Freshness scores and tiers for hygiene and pet care
- water_engine: Water cycle state machine, learning and calibration
- inventory_engine: Rolling-window consumption rates and stock logs
- trend_engine: Daily water trend and inventory step charts
"""

# Use relative imports within package to avoid mypy module resolution issues
from .active_time_engine import (
    ActiveTimeEngine,
    HourSegment,
    SleepWindow,
    iter_hour_segments,
    iter_hour_segments_reverse,
)
from .entropy_engine import (
    HYGIENE_POLICY,
    PET_POLICY,
    EntropyEngine,
    EntropyResult,
    LoadFactorPolicy,
)
from .inventory_engine import InventoryEngine
from .trend_engine import ChartPoint, TrendEngine
from .water_engine import (
    HistoryEntry,
    RefillReport,
    WaterCycleState,
    WaterEngine,
    WaterView,
)

__all__ = [
    "HYGIENE_POLICY",
    "PET_POLICY",
    "ActiveTimeEngine",
    "ChartPoint",
    "EntropyEngine",
    "EntropyResult",
    "HistoryEntry",
    "HourSegment",
    "InventoryEngine",
    "LoadFactorPolicy",
    "RefillReport",
    "SleepWindow",
    "TrendEngine",
    "WaterCycleState",
    "WaterEngine",
    "WaterView",
    "iter_hour_segments",
    "iter_hour_segments_reverse",
]
