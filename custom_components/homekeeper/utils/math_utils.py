# File: utils/math_utils.py
"""Math and calculation utilities for HomeKeeper.

Pure Python math functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed.

Functions:
    - round_value: Consistent rounding to configured precision
    - calculate_percentage: Fill percentage with division-by-zero protection
    - clamp: Bound a value to a closed range
    - weighted_average: Two-term exponential smoothing step
    - safe_divide: Division returning a fallback for non-positive divisors
"""

from __future__ import annotations

# ==============================================================================
# Constants (local copies to avoid circular imports)
# ==============================================================================

# Default float precision for displayed quantities
DATA_FLOAT_PRECISION = 2


# ==============================================================================
# Arithmetic Helpers
# ==============================================================================


def round_value(value: float, precision: int = DATA_FLOAT_PRECISION) -> float:
    """Round a quantity to the configured precision.

    Prevents float drift in displayed values (27.499999999999996 → 27.5).

    Examples:
        round_value(10.456) → 10.46
        round_value(0.21000000000000002, 3) → 0.21
    """
    return round(value, precision)


def calculate_percentage(
    current: float,
    target: float,
    precision: int = DATA_FLOAT_PRECISION,
) -> float:
    """Calculate a 0-100 fill percentage with proper rounding.

    Returns 0.0 when target is not positive. The result is clamped, so an
    over-full value reads as 100.

    Examples:
        calculate_percentage(9.45, 18.9) → 50.0
        calculate_percentage(5, 0) → 0.0
    """
    if target <= 0:
        return 0.0
    return round_value(clamp((current / target) * 100, 0.0, 100.0), precision)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between minimum and maximum bounds.

    Examples:
        clamp(150, 0, 100) → 100
        clamp(-5, 0, 100) → 0
    """
    return max(min_val, min(value, max_val))


def weighted_average(
    previous: float,
    observed: float,
    previous_weight: float,
    observed_weight: float,
) -> float:
    """Blend an observation into a running estimate.

    result = previous * previous_weight + observed * observed_weight

    Examples:
        weighted_average(0.2, 0.21, 0.7, 0.3) → 0.203
    """
    return previous * previous_weight + observed * observed_weight


def safe_divide(numerator: float, denominator: float, fallback: float) -> float:
    """Divide, returning `fallback` when the denominator is not positive."""
    if denominator <= 0:
        return fallback
    return numerator / denominator
