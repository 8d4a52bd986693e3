from sumsum.components.game_state import GameMode
from sumsum.events.bus import EVENT_COLUMN_SETTLED, EVENT_CUBE_REMOVED, EventBus
from sumsum.systems.animation import AnimationSystem
from sumsum.systems.board_ops import get_board, get_cube, is_falling, mark_removing
from sumsum.world import create_world

from tests.helpers import drive_ticks, place_column, record


def column_state(world, col):
    return [(get_cube(world, ent).value, get_cube(world, ent).row) for ent in get_board(world).columns[col]]


def test_removed_cubes_leave_contiguous_column():
    bus = EventBus()
    world = create_world(bus, GameMode.PLAYING)
    AnimationSystem(world, bus)
    ents = place_column(world, 0, [1, 2, 3, 4, 5])
    place_column(world, 1, [9])
    removed = record(bus, EVENT_CUBE_REMOVED)
    settled = record(bus, EVENT_COLUMN_SETTLED)

    mark_removing(world, ents[1], 0.3)
    mark_removing(world, ents[3], 0.3)
    drive_ticks(bus, 7, 0.05)

    assert sorted((r["row"], r["value"]) for r in removed) == [(1, 2), (3, 4)]
    assert settled == [{"column": 0, "moves": [(2, 1), (4, 2)]}]
    assert column_state(world, 0) == [(1, 0), (3, 1), (5, 2)]
    assert column_state(world, 1) == [(9, 0)]
    assert not world.entity_exists(ents[1])
    assert is_falling(world, ents[2])

    drive_ticks(bus, 10, 0.05)
    assert not is_falling(world, ents[2])
    assert not is_falling(world, ents[4])


def test_removing_top_cube_moves_nothing():
    bus = EventBus()
    world = create_world(bus, GameMode.PLAYING)
    AnimationSystem(world, bus)
    ents = place_column(world, 2, [4, 6])
    settled = record(bus, EVENT_COLUMN_SETTLED)

    mark_removing(world, ents[1], 0.3)
    drive_ticks(bus, 10, 0.05)

    assert settled == [{"column": 2, "moves": []}]
    assert column_state(world, 2) == [(4, 0)]


def test_animations_freeze_outside_play():
    bus = EventBus()
    world = create_world(bus, GameMode.PAUSED)
    AnimationSystem(world, bus)
    ents = place_column(world, 0, [4])
    mark_removing(world, ents[0], 0.3)

    drive_ticks(bus, 20, 0.05)

    assert column_state(world, 0) == [(4, 0)]
