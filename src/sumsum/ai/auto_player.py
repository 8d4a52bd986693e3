from __future__ import annotations

from typing import List, Optional

from esper import World

from sumsum.components.target_queue import TargetQueue
from sumsum.events.bus import EVENT_CUBE_CLICK, EVENT_SELECTION_CHANGED, EVENT_TICK, EventBus
from sumsum.systems.board_ops import clear_selection, get_cube, is_selectable, iter_cube_entities
from sumsum.utils.combination_search import solve
from sumsum.utils.game_state import get_singleton, is_playing


class AutoPlayer:
    """Bot that clicks a combination reaching the current target every ``decision_delay`` seconds.

    Solutions are entered through cube click events, exactly like a human
    input adapter would. A leftover selection is dropped in one step first,
    so deselecting can never resolve a match by itself.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        decision_delay: float = 1.0,
        max_cubes: Optional[int] = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.decision_delay = decision_delay
        self.max_cubes = max_cubes
        self.delay_remaining = decision_delay
        self.matches_attempted = 0
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def detach(self) -> None:
        """Stop reacting to ticks; the board is left as it is."""
        self.event_bus.unsubscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs) -> None:
        if not is_playing(self.world):
            return
        self.delay_remaining -= kwargs.get("dt", 1 / 60)
        if self.delay_remaining > 0:
            return
        self.delay_remaining = self.decision_delay
        self.act()

    def _click(self, entity: int) -> None:
        cube = get_cube(self.world, entity)
        self.event_bus.emit(EVENT_CUBE_CLICK, column=cube.column, row=cube.row)

    def find_solution(self) -> List[int]:
        """Entities of selectable cubes whose values reach the current target."""
        target = get_singleton(self.world, TargetQueue).current
        if target is None:
            return []
        candidates = [ent for ent in iter_cube_entities(self.world) if is_selectable(self.world, ent)]
        values = [get_cube(self.world, ent).value for ent in candidates]
        kwargs = {} if self.max_cubes is None else {"max_count": self.max_cubes}
        combos = solve(values, target, limit=1, **kwargs)
        if not combos:
            return []
        return [candidates[index] for index in combos[0]]

    def act(self) -> bool:
        """Clear the current selection, then select a solving combination if one exists."""
        if clear_selection(self.world):
            self.event_bus.emit(EVENT_SELECTION_CHANGED, selected_sum=0, count=0)
        solution = self.find_solution()
        if not solution:
            return False
        self.matches_attempted += 1
        for entity in solution:
            self._click(entity)
        return True
