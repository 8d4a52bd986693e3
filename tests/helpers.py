from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from esper import World

from sumsum.components.game_state import GameMode
from sumsum.components.target_queue import TargetQueue
from sumsum.config import GameConfig
from sumsum.events.bus import EVENT_TICK, EventBus
from sumsum.systems.animation import AnimationSystem
from sumsum.systems.board import BoardSystem
from sumsum.systems.board_ops import place_cube
from sumsum.systems.combo_system import ComboSystem
from sumsum.systems.content_generator import ContentGenerator
from sumsum.systems.game_flow_system import GameFlowSystem
from sumsum.systems.match_resolution import MatchResolutionSystem
from sumsum.systems.spawn_system import SpawnSystem
from sumsum.utils.game_state import get_singleton
from sumsum.world import create_world


class ScriptedRandom(random.Random):
    """Seeded RNG that serves queued answers first for the calls a test cares about."""

    def __init__(
        self,
        *,
        floats: Sequence[float] = (),
        ints: Sequence[int] = (),
        shuffles: Sequence[Sequence[int]] = (),
        seed: int = 0,
    ) -> None:
        super().__init__(seed)
        self._floats = list(floats)
        self._ints = list(ints)
        self._shuffles = [list(order) for order in shuffles]

    def random(self) -> float:
        if self._floats:
            return self._floats.pop(0)
        return super().random()

    def randint(self, a: int, b: int) -> int:
        if self._ints:
            return self._ints.pop(0)
        return super().randint(a, b)

    def shuffle(self, x, *args, **kwargs) -> None:
        if self._shuffles:
            x[:] = self._shuffles.pop(0)
            return
        super().shuffle(x)


@dataclass
class Session:
    bus: EventBus
    world: World
    generator: ContentGenerator
    board: BoardSystem
    spawn: SpawnSystem
    animation: AnimationSystem
    combo: ComboSystem
    matcher: MatchResolutionSystem
    flow: GameFlowSystem


def make_session(
    *,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
    mode: GameMode = GameMode.PLAYING,
    targets: Sequence[int] = (),
) -> Session:
    bus = EventBus()
    world = create_world(bus, initial_mode=mode, config=config, rng=rng or random.Random(0))
    generator = ContentGenerator(world)
    board = BoardSystem(world, bus)
    spawn = SpawnSystem(world, bus, generator)
    animation = AnimationSystem(world, bus)
    combo = ComboSystem(world, bus)
    matcher = MatchResolutionSystem(world, bus, generator)
    flow = GameFlowSystem(world, bus, generator, spawn)
    if targets:
        get_singleton(world, TargetQueue).targets = list(targets)
    return Session(bus, world, generator, board, spawn, animation, combo, matcher, flow)


def place_column(world: World, col: int, values: Sequence[int]) -> List[int]:
    """Stack resting cubes bottom-up in ``col``."""
    return [place_cube(world, col, value) for value in values]


def drive_ticks(bus: EventBus, count: int = 30, dt: float = 0.02) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def record(bus: EventBus, name: str) -> List[Dict[str, Any]]:
    received: List[Dict[str, Any]] = []
    bus.subscribe(name, lambda sender, **payload: received.append(payload))
    return received
