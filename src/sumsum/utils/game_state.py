from __future__ import annotations

from typing import Type, TypeVar

from esper import World

from sumsum.components.game_state import GameMode, GameState
from sumsum.events.bus import EVENT_GAME_MODE_CHANGED, EventBus

T = TypeVar("T")


def get_singleton(world: World, component_type: Type[T]) -> T:
    """Return the single instance of a world-level state component."""
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} not found in world")


def get_game_state(world: World) -> GameState:
    return get_singleton(world, GameState)


def is_playing(world: World) -> bool:
    return get_game_state(world).mode == GameMode.PLAYING


def set_game_mode(world: World, event_bus: EventBus, mode: GameMode) -> None:
    """Update the global game mode and emit a change event when it differs."""
    state = get_game_state(world)
    previous_mode = state.mode
    if previous_mode == mode:
        return
    state.mode = mode
    event_bus.emit(EVENT_GAME_MODE_CHANGED, previous_mode=previous_mode, new_mode=mode)
