"""Unit tests for EntropyEngine - pure Python logic tests.

These tests verify freshness scoring for hygiene items and pet-care tasks
without any Home Assistant mocking.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from custom_components.homekeeper import const
from custom_components.homekeeper.engines.entropy_engine import (
    HYGIENE_POLICY,
    PET_POLICY,
    EntropyEngine,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
DAY = timedelta(days=1)
HOUR = timedelta(hours=1)


class TestScore:
    """Tests for raw scoring."""

    def test_ratio(self) -> None:
        """Score is elapsed over threshold."""
        assert EntropyEngine.score(3.0, 6.0) == pytest.approx(0.5)

    def test_unbounded_above(self) -> None:
        """Long-neglected items keep growing."""
        assert EntropyEngine.score(60.0, 2.0) == pytest.approx(30.0)

    @pytest.mark.parametrize("threshold", [0.0, -1.0])
    def test_unusable_threshold_saturates(self, threshold: float) -> None:
        """A zero threshold gives the worst score instead of dividing by zero."""
        assert EntropyEngine.score(1.0, threshold) == const.ENTROPY_SATURATED_SCORE

    def test_effective_threshold(self) -> None:
        """The load factor shortens the threshold; bad factors are ignored."""
        assert EntropyEngine.effective_threshold(6.0, 1.2) == pytest.approx(5.0)
        assert EntropyEngine.effective_threshold(6.0, 0.0) == pytest.approx(6.0)

    def test_elapsed(self) -> None:
        """Elapsed is wall-clock time in the policy unit, never negative."""
        assert EntropyEngine.elapsed(NOW - 36 * HOUR, NOW, DAY) == pytest.approx(1.5)
        assert EntropyEngine.elapsed(NOW + DAY, NOW, DAY) == 0.0
        assert EntropyEngine.elapsed(None, NOW, DAY) == 0.0

    def test_progress_ignores_sleep(self) -> None:
        """Freshness counts every wall-clock hour, nights included."""
        score = EntropyEngine.progress(NOW - 12 * HOUR, 24.0, 1.0, NOW, HOUR)
        assert score == pytest.approx(0.5)

    @pytest.mark.parametrize("load_factor", [1.0, 1.2, 1.5, 0.0])
    def test_progress_monotonic_in_elapsed(self, load_factor: float) -> None:
        """Older resets never score lower than newer ones."""
        scores = [
            EntropyEngine.progress(NOW - hours * HOUR, 48.0, load_factor, NOW, HOUR)
            for hours in range(0, 200, 7)
        ]
        assert scores[0] == 0.0
        assert all(later >= earlier for earlier, later in zip(scores, scores[1:]))


class TestTiers:
    """Tests for the four-tier classification."""

    @pytest.mark.parametrize(
        ("score", "index"),
        [
            (0.0, 0),
            (0.5, 0),
            (0.5001, 1),
            (1.0, 1),
            (1.2, 2),
            (1.5, 2),
            (1.5001, 3),
            (40.0, 3),
        ],
    )
    def test_breakpoints_are_inclusive(self, score: float, index: int) -> None:
        """Each breakpoint belongs to the tier below it."""
        assert EntropyEngine.tier_index(score) == index

    def test_names_follow_policy(self) -> None:
        """The same score maps to the policy's own vocabulary."""
        assert EntropyEngine.tier(1.2, HYGIENE_POLICY) == const.HYGIENE_STATUS_DUSTY
        assert EntropyEngine.tier(1.2, PET_POLICY) == const.PET_STATUS_STALE


class TestLoadFactor:
    """Tests for the population-driven load factor."""

    @pytest.mark.parametrize(
        ("is_shared", "population", "expected"),
        [(True, 3, 1.2), (True, 2, 1.0), (False, 5, 1.0), (True, 1, 1.0)],
    )
    def test_hygiene(self, is_shared: bool, population: int, expected: float) -> None:
        """Shared areas soil faster only with more than two occupants."""
        assert HYGIENE_POLICY.load_factor(is_shared, population) == expected

    @pytest.mark.parametrize(
        ("is_shared", "population", "expected"),
        [(True, 2, 1.5), (True, 1, 1.0), (False, 3, 1.0)],
    )
    def test_pet(self, is_shared: bool, population: int, expected: float) -> None:
        """Shared pet tasks come around sooner with more than one pet."""
        assert PET_POLICY.load_factor(is_shared, population) == expected


class TestEvaluate:
    """End-to-end evaluation."""

    def test_shared_hygiene_in_busy_household(self) -> None:
        """7-day item, 7 days old, three people → 7 / (7 / 1.2) = 1.2."""
        result = EntropyEngine.evaluate(
            HYGIENE_POLICY, NOW - 7 * DAY, 7.0, True, 3, NOW
        )
        assert result.load_factor == 1.2
        assert result.effective_threshold == pytest.approx(5.833)
        assert result.score == pytest.approx(1.2)
        assert result.status == const.HYGIENE_STATUS_DUSTY

    def test_private_item_is_not_scaled(self) -> None:
        """Bedding is not a public area and keeps its nominal interval."""
        result = EntropyEngine.evaluate(
            HYGIENE_POLICY, NOW - 7 * DAY, 14.0, False, 5, NOW
        )
        assert result.score == pytest.approx(0.5)
        assert result.status == const.HYGIENE_STATUS_FRESH

    def test_pet_task_in_hours(self) -> None:
        """Pet tasks are measured in hours."""
        result = EntropyEngine.evaluate(PET_POLICY, NOW - 18 * HOUR, 12.0, False, 1, NOW)
        assert result.elapsed == pytest.approx(18.0)
        assert result.score == pytest.approx(1.5)
        assert result.status == const.PET_STATUS_STALE

    def test_never_reset_is_fresh(self) -> None:
        """Items without a reset timestamp have not decayed."""
        result = EntropyEngine.evaluate(PET_POLICY, None, 24.0, True, 2, NOW)
        assert result.score == 0.0
        assert result.status == const.PET_STATUS_HAPPY

    def test_zero_interval_is_worst_tier(self) -> None:
        """A zero base interval saturates rather than failing."""
        result = EntropyEngine.evaluate(HYGIENE_POLICY, NOW, 0.0, True, 1, NOW)
        assert result.score == const.ENTROPY_SATURATED_SCORE
        assert result.status == const.HYGIENE_STATUS_MESSY
