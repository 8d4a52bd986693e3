"""Cube value, spawn column and target generation.

Targets are only ever issued when some combination of on-board or pending
cubes reaches them. When the current pool offers no sum in range, the
fallback path invents a target and plants the cubes that build it into the
per-column planned queues, which ``next_cube_value`` drains before anything
else.
"""
from __future__ import annotations

import logging
import random
from typing import Dict, List, Sequence

from esper import World

from sumsum.components.cube_queues import CubeQueues
from sumsum.components.planned_cubes import PlannedCubes
from sumsum.components.scoreboard import Scoreboard
from sumsum.components.target_queue import TargetQueue
from sumsum.config import GameConfig
from sumsum.constants import TARGET_THREE_CUBE_ROLL, TARGET_TWO_CUBE_ROLL
from sumsum.systems.board_ops import active_cube_values, board_value_counts, get_board, selected_sum
from sumsum.utils.combination_search import find_all_sums, min_combination_sizes, solve
from sumsum.utils.game_state import get_singleton
from sumsum.utils.level_policy import LevelConfig, config_for

logger = logging.getLogger(__name__)


class ContentGenerator:
    """Generation service bound to one world; all randomness comes from ``rng``."""

    def __init__(self, world: World, *, rng: random.Random | None = None) -> None:
        self.world = world
        self.config: GameConfig = getattr(world, "config", None) or GameConfig()
        self.random = rng or getattr(world, "random", None) or random.Random()

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    def _level_config(self) -> LevelConfig:
        return config_for(get_singleton(self.world, Scoreboard).level)

    def _planned(self) -> PlannedCubes:
        return get_singleton(self.world, PlannedCubes)

    def planned_for(self, col: int) -> List[int]:
        return list(self._planned().columns[col])

    def upcoming_values(self) -> List[int]:
        """Preview queue values followed by planned values."""
        queues = get_singleton(self.world, CubeQueues)
        return queues.upcoming_values() + self._planned().planned_values()

    def reset(self) -> None:
        self._planned().clear()

    # ------------------------------------------------------------------
    # Cube values
    # ------------------------------------------------------------------

    def next_cube_value(self, col: int) -> int:
        planned = self._planned().columns[col]
        if planned:
            value = planned.popleft()
            logger.debug("planned cube %d for column %d", value, col)
            return value
        level_config = self._level_config()
        height = len(get_board(self.world).columns[col])
        if height >= self.config.danger_height:
            return self._rescue_value(level_config)
        return self._balanced_value(level_config)

    def _random_value(self, level_config: LevelConfig) -> int:
        return self.random.randint(1, level_config.max_cube_value)

    def _rescue_value(self, level_config: LevelConfig) -> int:
        """Bias a near-full column toward values that finish the current target."""
        target = get_singleton(self.world, TargetQueue).current
        if target is None:
            return self._random_value(level_config)
        max_value = level_config.max_cube_value

        needed = target - selected_sum(self.world)
        if 1 <= needed <= max_value and self.random.random() < self.config.rescue_exact_probability:
            logger.debug("rescue: exact missing value %d", needed)
            return needed

        values = active_cube_values(self.world)
        for count in (2, 3):
            if solve(values, target, exact_count=count, limit=1):
                # A solution is already on the board.
                return self._random_value(level_config)

        helpful = self.helpful_values(values, target, max_value)
        if helpful:
            value = self.random.choice(helpful)
            logger.debug("rescue: %d unlocks target %d", value, target)
            return value
        return self._random_value(level_config)

    def helpful_values(self, values: Sequence[int], target: int, max_value: int) -> List[int]:
        """Single values that complete ``target`` together with 1..k-1 existing values."""
        helpful: List[int] = []
        max_partners = self.config.rescue_max_cubes - 1
        for candidate in range(1, max_value + 1):
            remainder = target - candidate
            if remainder <= 0:
                continue
            if solve(values, remainder, min_count=1, max_count=max_partners, limit=1):
                helpful.append(candidate)
        return helpful

    def _balanced_value(self, level_config: LevelConfig) -> int:
        """Sample a face value, damping values already common on the board."""
        counts = board_value_counts(self.world)
        faces = list(range(1, level_config.max_cube_value + 1))
        weights = [max(1, 10 - 2 * counts.get(face, 0)) for face in faces]
        return self.random.choices(faces, weights=weights, k=1)[0]

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def choose_column(self) -> int:
        """Pick a spawn column, favouring shorter ones. May return a full column."""
        board = get_board(self.world)
        candidates: List[int] = []
        for col, height in enumerate(board.heights()):
            if height >= board.max_height:
                continue
            candidates.extend([col] * max(1, board.max_height - height))
        if not candidates:
            return self.random.randrange(board.cols)
        return self.random.choice(candidates)

    # ------------------------------------------------------------------
    # Targets
    # ------------------------------------------------------------------

    def search_pool(self) -> List[int]:
        pool = active_cube_values(self.world) + self.upcoming_values()
        limit = self.config.search_pool_limit
        if len(pool) > limit:
            pool = self.random.sample(pool, limit)
        return pool

    def generate_target(self) -> int:
        level_config = self._level_config()
        pool = self.search_pool()
        logger.debug("target search pool: %s", pool)
        sums = find_all_sums(pool, self.config.min_cubes_for_sum, self.config.max_cubes_for_sum)
        valid = {
            total: combos
            for total, combos in sums.items()
            if self.config.min_target <= total <= level_config.max_target
        }
        if valid:
            target = self._choose_by_difficulty(min_combination_sizes(valid))
            logger.debug("target %d chosen from %d reachable sums", target, len(valid))
            return target
        return self._fallback_target(level_config)

    def _choose_by_difficulty(self, min_sizes: Dict[int, int]) -> int:
        by_two = sorted(total for total, size in min_sizes.items() if size == 2)
        by_three = sorted(total for total, size in min_sizes.items() if size == 3)
        by_more = sorted(total for total, size in min_sizes.items() if size >= 4)
        roll = self.random.random()
        if roll < TARGET_TWO_CUBE_ROLL:
            pool = by_two
        elif roll < TARGET_THREE_CUBE_ROLL:
            pool = by_three
        else:
            pool = by_more
        if not pool:
            pool = sorted(min_sizes)
        return self.random.choice(pool)

    def _fallback_target(self, level_config: LevelConfig) -> int:
        count = 2 if self.random.random() < 0.5 else 3
        max_value = level_config.max_cube_value
        values = [self.random.randint(1, max_value) for _ in range(count)]
        target = max(self.config.min_target, min(level_config.max_target, sum(values)))
        values = _rebalance(values, target, max_value)

        planned = self._planned()
        columns = list(range(self.config.num_columns))
        self.random.shuffle(columns)
        for index, value in enumerate(values):
            planned.columns[columns[index % len(columns)]].append(value)
        logger.debug("fallback target %d, planned cubes %s", target, values)
        return target


def _rebalance(values: List[int], target: int, max_value: int) -> List[int]:
    """Nudge values within ``1..max_value`` until they add up to ``target``.

    Only changes anything when the target was clamped; the clamped range
    always lies within what the values can express.
    """
    values = list(values)
    diff = target - sum(values)
    index = 0
    while diff != 0 and index < len(values):
        if diff > 0:
            step = min(diff, max_value - values[index])
        else:
            step = -min(-diff, values[index] - 1)
        values[index] += step
        diff -= step
        index += 1
    return values
