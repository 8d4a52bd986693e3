from __future__ import annotations

import math

from sumsum.constants import (
    BIG_SUM_MULTIPLIER,
    BIG_SUM_THRESHOLD,
    COLUMN_CLEAR_MULTIPLIER,
    COMBO_STEP_BONUS,
    LARGE_SUM_MULTIPLIER,
    LARGE_SUM_THRESHOLD,
)


def match_multiplier(target: int, combo_count: int, cleared_columns: int = 0) -> float:
    """Multiplier for a match: combo chain, sum size and whole-column clears."""
    multiplier = 1.0
    if combo_count >= 2:
        multiplier *= 1 + (combo_count - 1) * COMBO_STEP_BONUS
    if target >= BIG_SUM_THRESHOLD:
        multiplier *= BIG_SUM_MULTIPLIER
    elif target >= LARGE_SUM_THRESHOLD:
        multiplier *= LARGE_SUM_MULTIPLIER
    if cleared_columns > 0:
        multiplier *= COLUMN_CLEAR_MULTIPLIER
    return multiplier


def match_points(target: int, cube_count: int, combo_count: int, cleared_columns: int = 0) -> int:
    return math.floor(target * cube_count * match_multiplier(target, combo_count, cleared_columns))
