from typing import Dict, List

from esper import World

from sumsum.components.animation_fade import FadeAnimation
from sumsum.components.animation_fall import FallAnimation
from sumsum.config import GameConfig
from sumsum.events.bus import (
    EVENT_COLUMN_SETTLED,
    EVENT_CUBE_LANDED,
    EVENT_CUBE_REMOVED,
    EVENT_TICK,
    EventBus,
)
from sumsum.systems.board_ops import get_cube, remove_cube, settle_column
from sumsum.utils.game_state import is_playing


class AnimationSystem:
    """Advances fall and fade progress; completed fades delete cubes and settle columns.

    Only progress values live here. Easing and pixels belong to whoever
    renders the snapshots.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.config: GameConfig = getattr(world, "config", None) or GameConfig()
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        if not is_playing(self.world):
            return
        dt = kwargs.get('dt', 1/60)
        self._advance_falls(dt)
        self._advance_fades(dt)

    def _advance_falls(self, dt: float) -> None:
        landed: List[int] = []
        for ent, fall in list(self.world.get_component(FallAnimation)):
            if fall.duration <= 0:
                fall.linear = 1.0
            elif fall.linear < 1.0:
                fall.linear = min(1.0, fall.linear + dt / fall.duration)
            if fall.linear >= 1.0:
                landed.append(ent)
        for ent in landed:
            self.world.remove_component(ent, FallAnimation)
            cube = get_cube(self.world, ent)
            self.event_bus.emit(EVENT_CUBE_LANDED, column=cube.column, row=cube.row, value=cube.value)

    def _advance_fades(self, dt: float) -> None:
        finished: List[int] = []
        for ent, fade in list(self.world.get_component(FadeAnimation)):
            if fade.duration <= 0:
                fade.alpha = 0.0
            elif fade.alpha > 0.0:
                fade.alpha = max(0.0, fade.alpha - dt / fade.duration)
            if fade.alpha <= 0.0:
                finished.append(ent)
        if not finished:
            return
        touched: Dict[int, None] = {}
        for ent in finished:
            cube = remove_cube(self.world, ent)
            touched[cube.column] = None
            self.event_bus.emit(EVENT_CUBE_REMOVED, column=cube.column, row=cube.row, value=cube.value)
        fall_seconds = self.config.fall_duration_ms / 1000.0
        for col in sorted(touched):
            moves = settle_column(self.world, col, fall_seconds)
            self.event_bus.emit(
                EVENT_COLUMN_SETTLED,
                column=col,
                moves=[(move.from_row, move.to_row) for move in moves],
            )
