"""Entropy Engine - Pure logic for freshness decay of recurring household tasks.

This engine provides stateless, pure Python functions for:
- The generic progress score (elapsed time over an effective threshold)
- Load-factor policies that shorten thresholds for busy households
- Mapping a score onto a four-tier status

Hygiene items and pet-care tasks share the same score function. What differs
between them lives in a LoadFactorPolicy value (factor, trigger, time unit,
tier names), not in separate code paths.

ARCHITECTURE: This is a pure logic engine with NO Home Assistant state.
All functions are static methods that operate on passed-in data.
State management belongs in the freshness managers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING

from .. import const
from ..utils.math_utils import round_value

if TYPE_CHECKING:
    from datetime import datetime


# Upper score bound of each tier except the last (inclusive)
TIER_BREAKPOINTS: tuple[float, ...] = (0.5, 1.0, 1.5)


@dataclass(frozen=True)
class LoadFactorPolicy:
    """How a freshness domain scales its thresholds and names its tiers.

    Attributes:
        factor: Multiplier applied to the soiling rate when the policy triggers
        requires_shared: Only shared/public items are affected
        min_population: Population must exceed this count to trigger
        unit: Wall-clock unit of base thresholds
        tier_names: Status names for each tier, freshest first
    """

    factor: float
    requires_shared: bool
    min_population: int
    unit: timedelta
    tier_names: tuple[str, str, str, str]

    def load_factor(self, is_shared: bool, population: int) -> float:
        """Return the load factor for an item given the relevant population."""
        if self.requires_shared and not is_shared:
            return 1.0
        if population > self.min_population:
            return self.factor
        return 1.0


HYGIENE_POLICY = LoadFactorPolicy(
    factor=const.HYGIENE_LOAD_FACTOR,
    requires_shared=True,
    min_population=const.HYGIENE_LOAD_MIN_HOUSEHOLD,
    unit=timedelta(days=1),
    tier_names=(
        const.HYGIENE_STATUS_FRESH,
        const.HYGIENE_STATUS_NORMAL,
        const.HYGIENE_STATUS_DUSTY,
        const.HYGIENE_STATUS_MESSY,
    ),
)

PET_POLICY = LoadFactorPolicy(
    factor=const.PET_LOAD_FACTOR,
    requires_shared=True,
    min_population=const.PET_LOAD_MIN_PETS,
    unit=timedelta(hours=1),
    tier_names=(
        const.PET_STATUS_HAPPY,
        const.PET_STATUS_OKAY,
        const.PET_STATUS_STALE,
        const.PET_STATUS_CRISIS,
    ),
)


@dataclass(frozen=True)
class EntropyResult:
    """Evaluated freshness of a single item."""

    score: float
    status: str
    load_factor: float
    effective_threshold: float
    elapsed: float


class EntropyEngine:
    """Pure logic engine for freshness scoring.

    All methods are static - no instance state.
    """

    @staticmethod
    def score(elapsed: float, effective_threshold: float) -> float:
        """Return elapsed / threshold, saturating when the threshold is unusable."""
        if effective_threshold <= 0:
            return const.ENTROPY_SATURATED_SCORE
        return max(0.0, elapsed) / effective_threshold

    @staticmethod
    def effective_threshold(base_threshold: float, load_factor: float) -> float:
        """Shorten the base threshold by the load factor (non-positive → 1.0)."""
        if load_factor <= 0:
            load_factor = 1.0
        return base_threshold / load_factor

    @staticmethod
    def elapsed(
        last_reset_at: datetime | None, now: datetime, unit: timedelta
    ) -> float:
        """Return wall-clock time since the last reset in `unit`, never negative."""
        if last_reset_at is None:
            return 0.0
        return max(timedelta(0), now - last_reset_at) / unit

    @staticmethod
    def progress(
        last_reset_at: datetime | None,
        base_threshold: float,
        load_factor: float,
        now: datetime,
        unit: timedelta,
    ) -> float:
        """Return the normalized progress score of an item.

        Args:
            last_reset_at: When the item was last cleaned / performed
            base_threshold: Nominal interval in `unit`
            load_factor: Multiplier from the active policy
            now: Current (virtual) time
            unit: Wall-clock unit of `base_threshold`

        Returns:
            0.0 at reset, 1.0 when the effective threshold is reached,
            unbounded above.
        """
        return EntropyEngine.score(
            EntropyEngine.elapsed(last_reset_at, now, unit),
            EntropyEngine.effective_threshold(base_threshold, load_factor),
        )

    @staticmethod
    def tier_index(score: float) -> int:
        """Return 0-3 for the tier the score falls into."""
        for index, bound in enumerate(TIER_BREAKPOINTS):
            if score <= bound:
                return index
        return len(TIER_BREAKPOINTS)

    @staticmethod
    def tier(score: float, policy: LoadFactorPolicy) -> str:
        """Return the policy's status name for a score."""
        return policy.tier_names[EntropyEngine.tier_index(score)]

    @staticmethod
    def evaluate(
        policy: LoadFactorPolicy,
        last_reset_at: datetime | None,
        base_threshold: float,
        is_shared: bool,
        population: int,
        now: datetime,
    ) -> EntropyResult:
        """Score an item end to end under a policy."""
        load_factor = policy.load_factor(is_shared, population)
        threshold = EntropyEngine.effective_threshold(base_threshold, load_factor)
        elapsed = EntropyEngine.elapsed(last_reset_at, now, policy.unit)
        score = EntropyEngine.score(elapsed, threshold)
        return EntropyResult(
            score=round_value(score, 3),
            status=EntropyEngine.tier(score, policy),
            load_factor=load_factor,
            effective_threshold=round_value(threshold, 3),
            elapsed=round_value(elapsed, 3),
        )
