import random
from collections import deque

from esper import World

from .config import GameConfig
from .events.bus import EventBus
from sumsum.components.board import Board
from sumsum.components.combo_state import ComboState
from sumsum.components.cube_queues import CubeQueues
from sumsum.components.game_state import GameMode, GameState
from sumsum.components.milestone_tracker import MilestoneTracker
from sumsum.components.planned_cubes import PlannedCubes
from sumsum.components.scoreboard import Scoreboard
from sumsum.components.spawn_timer import SpawnTimer
from sumsum.components.target_queue import TargetQueue


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.READY,
    *,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
) -> World:
    """Build a world holding one empty board and the session state singletons.

    The event bus is accepted for symmetry with system constructors; nothing is
    emitted while the world is assembled.
    """
    world = World()
    config = config or GameConfig()
    setattr(world, "random", rng or random.Random())
    setattr(world, "config", config)

    world.create_entity(
        GameState(mode=initial_mode),
        Scoreboard(),
        ComboState(),
        SpawnTimer(),
        MilestoneTracker(),
    )
    world.create_entity(TargetQueue(depth=config.target_queue_depth))
    world.create_entity(CubeQueues(queues=[[] for _ in range(config.num_columns)]))
    world.create_entity(PlannedCubes(columns=[deque() for _ in range(config.num_columns)]))
    world.create_entity(Board(cols=config.num_columns, max_height=config.max_column_height))
    return world
