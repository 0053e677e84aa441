# File: utils/__init__.py
"""Pure Python utilities for HomeKeeper.

This module contains pure Python functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed in this module.

Submodules:
    - dt_utils: Timezone handling, local hour/day boundaries, interval conversion
    - math_utils: Rounding, clamping, percentage and smoothing arithmetic

Usage:
    from . import dt_utils
    from .math_utils import clamp
"""

from . import dt_utils, math_utils

__all__ = ["dt_utils", "math_utils"]
