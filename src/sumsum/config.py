"""Rule configuration shared by every system attached to a world."""
from __future__ import annotations

from dataclasses import dataclass

from sumsum import constants as C


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Board geometry, timing and generation knobs.

    Defaults mirror ``sumsum.constants``. A world carries exactly one instance
    as ``world.config``; tests build variants with ``dataclasses.replace``.
    """

    num_columns: int = C.NUM_COLUMNS
    max_column_height: int = C.MAX_COLUMN_HEIGHT
    warning_height: int = C.WARNING_HEIGHT
    danger_height: int = C.DANGER_HEIGHT
    min_cubes_for_sum: int = C.MIN_CUBES_FOR_SUM
    max_cubes_for_sum: int = C.MAX_CUBES_FOR_SUM
    min_target: int = C.MIN_TARGET
    max_target: int = C.MAX_TARGET
    queue_size: int = C.QUEUE_SIZE
    targets_ahead: int = C.TARGETS_AHEAD
    points_per_level: int = C.POINTS_PER_LEVEL
    combo_timeout_ms: float = C.COMBO_TIMEOUT_MS
    fall_duration_ms: float = C.FALL_DURATION_MS
    remove_duration_ms: float = C.REMOVE_DURATION_MS
    spawn_drop_row: int = C.SPAWN_DROP_ROW
    spawn_warning_lead_ms: float = C.SPAWN_WARNING_LEAD_MS
    initial_cubes_min: int = C.INITIAL_CUBES_MIN
    initial_cubes_max: int = C.INITIAL_CUBES_MAX
    rescue_exact_probability: float = C.RESCUE_EXACT_PROBABILITY
    rescue_max_cubes: int = C.RESCUE_MAX_CUBES
    search_pool_limit: int = C.SEARCH_POOL_LIMIT

    def __post_init__(self) -> None:
        for name in ("num_columns", "max_column_height", "min_cubes_for_sum", "min_target"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be positive")
        if self.max_cubes_for_sum < self.min_cubes_for_sum:
            raise ValueError("max_cubes_for_sum must not be below min_cubes_for_sum")
        if self.max_target < self.min_target:
            raise ValueError("max_target must not be below min_target")
        if not 0 < self.warning_height <= self.danger_height <= self.max_column_height:
            raise ValueError("expected 0 < warning_height <= danger_height <= max_column_height")
        if self.initial_cubes_max < self.initial_cubes_min or self.initial_cubes_min < 0:
            raise ValueError("invalid initial cube range")
        if self.queue_size < 0 or self.targets_ahead < 0:
            raise ValueError("queue depths cannot be negative")
        if self.search_pool_limit < self.max_cubes_for_sum:
            raise ValueError("search_pool_limit must hold at least one full combination")

    @property
    def target_queue_depth(self) -> int:
        """Current target plus the lookahead."""
        return self.targets_ahead + 1
