from __future__ import annotations

from esper import World

from sumsum.components.cube_queues import CubeQueues
from sumsum.components.scoreboard import Scoreboard
from sumsum.components.spawn_timer import SpawnTimer
from sumsum.config import GameConfig
from sumsum.events.bus import (
    EVENT_BOARD_FULL,
    EVENT_COLUMN_WARNING,
    EVENT_CUBE_SPAWNED,
    EVENT_SPAWN_WARNING,
    EVENT_TICK,
    EventBus,
)
from sumsum.systems.board_ops import get_board, place_cube
from sumsum.systems.content_generator import ContentGenerator
from sumsum.utils.game_state import get_singleton, is_playing
from sumsum.utils.level_policy import config_for


class SpawnSystem:
    """Drops a new cube every spawn interval, announcing the column shortly before."""

    def __init__(self, world: World, event_bus: EventBus, generator: ContentGenerator):
        self.world = world
        self.event_bus = event_bus
        self.generator = generator
        self.config: GameConfig = getattr(world, "config", None) or GameConfig()
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def _timer(self) -> SpawnTimer:
        return get_singleton(self.world, SpawnTimer)

    def _queues(self) -> CubeQueues:
        return get_singleton(self.world, CubeQueues)

    def on_tick(self, sender, **kwargs):
        if not is_playing(self.world):
            return
        dt = kwargs.get('dt', 1/60)
        timer = self._timer()
        interval = config_for(get_singleton(self.world, Scoreboard).level).spawn_interval_ms
        timer.elapsed_ms += dt * 1000.0

        if not timer.armed and timer.elapsed_ms >= interval - self.config.spawn_warning_lead_ms:
            timer.armed = True
            timer.pending_column = self.choose_spawn_column()
            if timer.pending_column is not None:
                self.event_bus.emit(EVENT_SPAWN_WARNING, column=timer.pending_column)

        if timer.elapsed_ms >= interval:
            pending = timer.pending_column
            self.rebase()
            board = get_board(self.world)
            if pending is not None and not board.is_full(pending):
                self.spawn_in_column(pending)
            else:
                self.spawn_next()

    def rebase(self) -> None:
        timer = self._timer()
        timer.elapsed_ms = 0.0
        timer.armed = False
        timer.pending_column = None

    def choose_spawn_column(self) -> int | None:
        """Generator's pick, else the first column with room, else None."""
        board = get_board(self.world)
        col = self.generator.choose_column()
        if not board.is_full(col):
            return col
        for index in range(board.cols):
            if not board.is_full(index):
                return index
        return None

    def spawn_next(self) -> int | None:
        """Spawn into a freshly chosen column. Returns the column, or None on a full board."""
        board = get_board(self.world)
        col = self.generator.choose_column()
        if board.is_full(col):
            if not board.has_room():
                # Nothing is placed; the flow system ends the game.
                self.event_bus.emit(EVENT_BOARD_FULL, column=col)
                return None
            col = next(index for index in range(board.cols) if not board.is_full(index))
        self.spawn_in_column(col)
        return col

    def _take_value(self, col: int) -> int:
        queue = self._queues().queues[col]
        value = queue.pop(0) if queue else self.generator.next_cube_value(col)
        self.refill_queue(col)
        return value

    def refill_queue(self, col: int) -> None:
        queue = self._queues().queues[col]
        while len(queue) < self.config.queue_size:
            queue.append(self.generator.next_cube_value(col))

    def fill_queues(self) -> None:
        for col in range(self.config.num_columns):
            self.refill_queue(col)

    def spawn_in_column(self, col: int) -> int:
        """Drop the column's next cube from above the board."""
        value = self._take_value(col)
        entity = place_cube(
            self.world,
            col,
            value,
            drop_from_row=self.config.spawn_drop_row,
            fall_seconds=self.config.fall_duration_ms / 1000.0,
        )
        board = get_board(self.world)
        height = len(board.columns[col])
        self.event_bus.emit(EVENT_CUBE_SPAWNED, column=col, row=height - 1, value=value, animated=True)
        if height >= self.config.danger_height:
            self.event_bus.emit(EVENT_COLUMN_WARNING, column=col, height=height)
        return entity

    def spawn_immediate(self, col: int) -> int | None:
        """Place a resting cube without animation (initial layout). Full columns are skipped."""
        board = get_board(self.world)
        if board.is_full(col):
            return None
        value = self._take_value(col)
        entity = place_cube(self.world, col, value)
        self.event_bus.emit(
            EVENT_CUBE_SPAWNED,
            column=col,
            row=len(board.columns[col]) - 1,
            value=value,
            animated=False,
        )
        return entity
