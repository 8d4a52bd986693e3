"""Read-only views of a world for presentation and persistence adapters."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from esper import World

from sumsum.components.combo_state import ComboState
from sumsum.components.cube_queues import CubeQueues
from sumsum.components.game_state import GameMode, GameState
from sumsum.components.scoreboard import Scoreboard
from sumsum.components.target_queue import TargetQueue
from sumsum.config import GameConfig
from sumsum.systems.board_ops import get_board, get_cube, is_falling, is_removing, selected_sum
from sumsum.utils.game_state import get_singleton
from sumsum.utils.level_policy import config_for


@dataclass(frozen=True, slots=True)
class CubeView:
    value: int
    row: int
    selected: bool
    falling: bool
    removing: bool


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    columns: Tuple[Tuple[CubeView, ...], ...]
    column_status: Tuple[str, ...]
    queues: Tuple[Tuple[int, ...], ...]
    targets: Tuple[int, ...]
    score: int
    level: int
    level_label: str
    combo_count: int
    selected_sum: int
    targets_cleared: int
    mode: GameMode

    @property
    def current_target(self) -> int | None:
        return self.targets[0] if self.targets else None


def column_status(height: int, config: GameConfig) -> str:
    if height >= config.danger_height:
        return "danger"
    if height >= config.warning_height:
        return "warning"
    return "safe"


def build_snapshot(world: World) -> BoardSnapshot:
    config: GameConfig = getattr(world, "config", None) or GameConfig()
    board = get_board(world)
    columns = tuple(
        tuple(
            CubeView(
                value=get_cube(world, ent).value,
                row=get_cube(world, ent).row,
                selected=get_cube(world, ent).selected,
                falling=is_falling(world, ent),
                removing=is_removing(world, ent),
            )
            for ent in column
        )
        for column in board.columns
    )
    scoreboard = get_singleton(world, Scoreboard)
    return BoardSnapshot(
        columns=columns,
        column_status=tuple(column_status(height, config) for height in board.heights()),
        queues=tuple(tuple(queue) for queue in get_singleton(world, CubeQueues).queues),
        targets=tuple(get_singleton(world, TargetQueue).targets),
        score=scoreboard.score,
        level=scoreboard.level,
        level_label=config_for(scoreboard.level).label,
        combo_count=get_singleton(world, ComboState).count,
        selected_sum=selected_sum(world),
        targets_cleared=scoreboard.targets_cleared,
        mode=get_singleton(world, GameState).mode,
    )
