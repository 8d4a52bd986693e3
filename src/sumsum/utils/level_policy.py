"""Level -> difficulty lookup."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True, slots=True)
class LevelConfig:
    max_cube_value: int
    max_target: int
    spawn_interval_ms: float
    label: str


# Index 0 is level 1.
LEVEL_TABLE: Tuple[LevelConfig, ...] = (
    LevelConfig(max_cube_value=6, max_target=15, spawn_interval_ms=3000.0, label="Beginner"),
    LevelConfig(max_cube_value=6, max_target=15, spawn_interval_ms=2800.0, label="Beginner"),
    LevelConfig(max_cube_value=6, max_target=16, spawn_interval_ms=2600.0, label="Beginner"),
    LevelConfig(max_cube_value=9, max_target=25, spawn_interval_ms=2400.0, label="Advanced"),
    LevelConfig(max_cube_value=9, max_target=25, spawn_interval_ms=2200.0, label="Advanced"),
    LevelConfig(max_cube_value=9, max_target=27, spawn_interval_ms=2000.0, label="Advanced"),
    LevelConfig(max_cube_value=12, max_target=30, spawn_interval_ms=1800.0, label="Expert"),
    LevelConfig(max_cube_value=12, max_target=32, spawn_interval_ms=1600.0, label="Expert"),
    LevelConfig(max_cube_value=12, max_target=35, spawn_interval_ms=1500.0, label="Master"),
    LevelConfig(max_cube_value=12, max_target=35, spawn_interval_ms=1400.0, label="Master"),
)

MIN_LEVEL = 1
MAX_LEVEL = len(LEVEL_TABLE)


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(MAX_LEVEL, int(level)))


def config_for(level: int) -> LevelConfig:
    """Return the difficulty record for ``level``, clamped into the table."""
    return LEVEL_TABLE[clamp_level(level) - 1]
