from esper import World

from sumsum.events.bus import (
    EventBus,
    EVENT_CUBE_CLICK,
    EVENT_CUBE_DESELECTED,
    EVENT_CUBE_SELECTED,
    EVENT_SELECTION_CHANGED,
)
from sumsum.systems.board_ops import get_cube, get_entity_at, is_selectable, selected_entities, selected_sum
from sumsum.utils.game_state import is_playing


class BoardSystem:
    """Owns the player's only board mutation: toggling cube selection."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_CUBE_CLICK, self.on_cube_click)

    def on_cube_click(self, sender, **kwargs):
        col = kwargs.get('column')
        row = kwargs.get('row')
        if col is None or row is None:
            return
        self.toggle_selection(col, row)

    def toggle_selection(self, col: int, row: int) -> bool:
        """Flip selection of the cube at (col, row). Returns False when ignored.

        Missing, falling and removing cubes are ignored, as is any toggle
        outside active play.
        """
        if not is_playing(self.world):
            return False
        entity = get_entity_at(self.world, col, row)
        if entity is None or not is_selectable(self.world, entity):
            return False
        cube = get_cube(self.world, entity)
        cube.selected = not cube.selected
        total = selected_sum(self.world)
        event = EVENT_CUBE_SELECTED if cube.selected else EVENT_CUBE_DESELECTED
        self.event_bus.emit(event, column=col, row=row, value=cube.value, selected_sum=total)
        self.event_bus.emit(
            EVENT_SELECTION_CHANGED,
            selected_sum=total,
            count=len(selected_entities(self.world)),
        )
        return True
