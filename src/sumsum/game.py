"""Headless SumSum session: event bus, world and every core system wired together.

Presentation, audio and persistence adapters subscribe to ``game.event_bus``
and read ``game.snapshot()``; the host calls ``tick`` once per frame.
"""
from __future__ import annotations

import random

from sumsum.components.game_state import GameMode
from sumsum.config import GameConfig
from sumsum.events.bus import EVENT_TICK, EventBus
from sumsum.systems.animation import AnimationSystem
from sumsum.systems.board import BoardSystem
from sumsum.systems.combo_system import ComboSystem
from sumsum.systems.content_generator import ContentGenerator
from sumsum.systems.game_flow_system import GameFlowSystem
from sumsum.systems.match_resolution import MatchResolutionSystem
from sumsum.systems.milestone_system import MilestoneSystem
from sumsum.systems.spawn_system import SpawnSystem
from sumsum.utils.game_state import get_game_state
from sumsum.utils.snapshot import BoardSnapshot, build_snapshot
from sumsum.world import create_world


class SumSumGame:
    def __init__(
        self,
        *,
        config: GameConfig | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.world = create_world(
            self.event_bus,
            config=config,
            rng=rng or random.Random(seed),
        )
        self.config: GameConfig = self.world.config

        self.generator = ContentGenerator(self.world)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.spawn_system = SpawnSystem(self.world, self.event_bus, self.generator)
        self.animation_system = AnimationSystem(self.world, self.event_bus)
        self.combo_system = ComboSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus, self.generator)
        self.milestone_system = MilestoneSystem(self.world, self.event_bus)
        self.game_flow_system = GameFlowSystem(
            self.world, self.event_bus, self.generator, self.spawn_system
        )

    @property
    def mode(self) -> GameMode:
        return get_game_state(self.world).mode

    @property
    def is_over(self) -> bool:
        return self.mode == GameMode.GAME_OVER

    def start(self) -> None:
        self.game_flow_system.start()

    def pause(self) -> bool:
        return self.game_flow_system.pause()

    def resume(self) -> bool:
        return self.game_flow_system.resume()

    def reset(self) -> None:
        self.game_flow_system.reset()

    def tick(self, dt: float) -> None:
        """Advance one frame of ``dt`` seconds. Ignored unless a game is in progress."""
        if self.mode == GameMode.PLAYING:
            self.event_bus.emit(EVENT_TICK, dt=dt)

    def toggle_selection(self, column: int, row: int) -> bool:
        return self.board_system.toggle_selection(column, row)

    def snapshot(self) -> BoardSnapshot:
        return build_snapshot(self.world)
