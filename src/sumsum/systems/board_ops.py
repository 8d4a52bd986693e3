from __future__ import annotations

from dataclasses import dataclass
from typing import List

from esper import World

from sumsum.components.animation_fade import FadeAnimation
from sumsum.components.animation_fall import FallAnimation
from sumsum.components.board import Board
from sumsum.components.cube import Cube


@dataclass(slots=True)
class SettleMove:
    column: int
    from_row: int
    to_row: int


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def get_entity_at(world: World, col: int, row: int) -> int | None:
    board = get_board(world)
    if not 0 <= col < board.cols:
        return None
    column = board.columns[col]
    if not 0 <= row < len(column):
        return None
    return column[row]


def get_cube(world: World, entity: int) -> Cube:
    return world.component_for_entity(entity, Cube)


def is_removing(world: World, entity: int) -> bool:
    return world.has_component(entity, FadeAnimation)


def is_falling(world: World, entity: int) -> bool:
    return world.has_component(entity, FallAnimation)


def iter_cube_entities(world: World) -> List[int]:
    """All cube entities, column by column, bottom to top."""
    board = get_board(world)
    return [entity for column in board.columns for entity in column]


def active_cube_values(world: World) -> List[int]:
    """Values of cubes still in play (not mid-removal)."""
    return [get_cube(world, ent).value for ent in iter_cube_entities(world) if not is_removing(world, ent)]


def board_value_counts(world: World) -> dict[int, int]:
    counts: dict[int, int] = {}
    for entity in iter_cube_entities(world):
        value = get_cube(world, entity).value
        counts[value] = counts.get(value, 0) + 1
    return counts


def selected_entities(world: World) -> List[int]:
    return [
        ent
        for ent in iter_cube_entities(world)
        if get_cube(world, ent).selected and not is_removing(world, ent)
    ]


def selected_sum(world: World) -> int:
    return sum(get_cube(world, ent).value for ent in selected_entities(world))


def is_selectable(world: World, entity: int) -> bool:
    return not is_removing(world, entity) and not is_falling(world, entity)


def place_cube(
    world: World,
    col: int,
    value: int,
    *,
    drop_from_row: int | None = None,
    fall_seconds: float = 0.0,
) -> int:
    """Append a cube on top of ``col``; with ``drop_from_row`` it starts falling."""
    board = get_board(world)
    column = board.columns[col]
    row = len(column)
    entity = world.create_entity(Cube(value=value, column=col, row=row))
    if drop_from_row is not None:
        world.add_component(entity, FallAnimation(src_row=drop_from_row, dst_row=row, duration=fall_seconds))
    column.append(entity)
    return entity


def mark_removing(world: World, entity: int, fade_seconds: float) -> None:
    cube = get_cube(world, entity)
    cube.selected = False
    world.add_component(entity, FadeAnimation(duration=fade_seconds))


def remove_cube(world: World, entity: int) -> Cube:
    """Detach a cube from its column and delete the entity. Rows are not touched."""
    cube = get_cube(world, entity)
    board = get_board(world)
    board.columns[cube.column].remove(entity)
    world.delete_entity(entity, immediate=True)
    return cube


def settle_column(world: World, col: int, fall_seconds: float) -> List[SettleMove]:
    """Re-index a column bottom-up; every cube whose row changed starts falling."""
    board = get_board(world)
    moves: List[SettleMove] = []
    for index, entity in enumerate(board.columns[col]):
        cube = get_cube(world, entity)
        if cube.row == index:
            continue
        moves.append(SettleMove(column=col, from_row=cube.row, to_row=index))
        if world.has_component(entity, FallAnimation):
            world.remove_component(entity, FallAnimation)
        world.add_component(entity, FallAnimation(src_row=cube.row, dst_row=index, duration=fall_seconds))
        cube.row = index
    return moves


def columns_fully_covered(world: World, entities: List[int]) -> int:
    """Count columns whose every cube is among ``entities``.

    Cubes still fading out count as occupying their column.
    """
    board = get_board(world)
    chosen = set(entities)
    touched = {get_cube(world, ent).column for ent in entities}
    cleared = 0
    for col in touched:
        column = board.columns[col]
        if column and all(ent in chosen for ent in column):
            cleared += 1
    return cleared


def clear_selection(world: World) -> int:
    """Deselect every cube without going through selection toggles. Returns how many were selected."""
    cleared = 0
    for entity in iter_cube_entities(world):
        cube = get_cube(world, entity)
        if cube.selected:
            cube.selected = False
            cleared += 1
    return cleared


def clear_board(world: World) -> None:
    board = get_board(world)
    for column in board.columns:
        for entity in column:
            world.delete_entity(entity, immediate=True)
        column.clear()
