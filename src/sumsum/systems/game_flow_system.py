"""Session lifecycle: start, pause, resume, reset and game over."""
from __future__ import annotations

import logging

from esper import World

from sumsum.components.combo_state import ComboState
from sumsum.components.cube_queues import CubeQueues
from sumsum.components.game_state import GameMode
from sumsum.components.scoreboard import Scoreboard
from sumsum.components.target_queue import TargetQueue
from sumsum.config import GameConfig
from sumsum.events.bus import (
    EVENT_BOARD_FULL,
    EVENT_GAME_OVER,
    EVENT_GAME_PAUSED,
    EVENT_GAME_RESET,
    EVENT_GAME_RESUMED,
    EVENT_GAME_STARTED,
    EVENT_TARGETS_CHANGED,
    EventBus,
)
from sumsum.systems.board_ops import clear_board
from sumsum.systems.content_generator import ContentGenerator
from sumsum.systems.spawn_system import SpawnSystem
from sumsum.utils.game_state import get_game_state, get_singleton, set_game_mode

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Central coordinator for mode transitions of a single session."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        generator: ContentGenerator,
        spawn_system: SpawnSystem,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.generator = generator
        self.spawn_system = spawn_system
        self.config: GameConfig = getattr(world, "config", None) or GameConfig()
        self.event_bus.subscribe(EVENT_BOARD_FULL, self._on_board_full)

    @property
    def mode(self) -> GameMode:
        return get_game_state(self.world).mode

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin a fresh session on a cleared board."""
        if self.mode != GameMode.READY:
            self.reset()
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)

        queue = get_singleton(self.world, TargetQueue)
        while len(queue.targets) < queue.depth:
            queue.targets.append(self.generator.generate_target())

        self.spawn_system.fill_queues()
        rng = self.generator.random
        initial = rng.randint(self.config.initial_cubes_min, self.config.initial_cubes_max)
        for index in range(initial):
            self.spawn_system.spawn_immediate(index % self.config.num_columns)
        self.spawn_system.rebase()

        logger.info("game started with %d cubes, targets %s", initial, queue.targets)
        self.event_bus.emit(EVENT_GAME_STARTED)
        self.event_bus.emit(EVENT_TARGETS_CHANGED, targets=list(queue.targets))

    def pause(self) -> bool:
        if self.mode != GameMode.PLAYING:
            return False
        set_game_mode(self.world, self.event_bus, GameMode.PAUSED)
        self.event_bus.emit(EVENT_GAME_PAUSED)
        return True

    def resume(self) -> bool:
        if self.mode != GameMode.PAUSED:
            return False
        # Time spent paused never counts toward the next spawn.
        self.spawn_system.rebase()
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)
        self.event_bus.emit(EVENT_GAME_RESUMED)
        return True

    def reset(self) -> None:
        """Drop every cube, queue and counter and return to READY."""
        clear_board(self.world)
        get_singleton(self.world, CubeQueues).queues = [[] for _ in range(self.config.num_columns)]
        get_singleton(self.world, TargetQueue).targets.clear()
        self.generator.reset()
        scoreboard = get_singleton(self.world, Scoreboard)
        scoreboard.score = 0
        scoreboard.level = 1
        scoreboard.targets_cleared = 0
        combo = get_singleton(self.world, ComboState)
        combo.count = 0
        combo.since_last_match_ms = 0.0
        combo.has_matched = False
        self.spawn_system.rebase()
        set_game_mode(self.world, self.event_bus, GameMode.READY)
        self.event_bus.emit(EVENT_GAME_RESET)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_board_full(self, sender, **payload) -> None:
        if self.mode != GameMode.PLAYING:
            return
        scoreboard = get_singleton(self.world, Scoreboard)
        combo = get_singleton(self.world, ComboState)
        set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
        logger.info("game over: score=%d level=%d", scoreboard.score, scoreboard.level)
        self.event_bus.emit(
            EVENT_GAME_OVER,
            score=scoreboard.score,
            level=scoreboard.level,
            combo_count=combo.count,
            targets_cleared=scoreboard.targets_cleared,
        )
