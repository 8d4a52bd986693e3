from sumsum.components.game_state import GameMode
from sumsum.components.scoreboard import Scoreboard
from sumsum.config import GameConfig
from sumsum.systems.board_ops import get_cube, mark_removing, place_cube
from sumsum.utils.game_state import get_singleton
from sumsum.utils.snapshot import CubeView, build_snapshot, column_status

from tests.helpers import make_session, place_column


def test_snapshot_reflects_board_and_session():
    session = make_session(targets=[7, 9, 11])
    world = session.world
    col1 = place_column(world, 1, [1, 2, 3, 4, 5])
    place_column(world, 2, [6] * 6)
    col3 = place_column(world, 3, [1] * 7)
    place_cube(world, 3, 2, drop_from_row=10, fall_seconds=0.35)
    get_cube(world, col1[0]).selected = True
    get_cube(world, col1[2]).selected = True
    mark_removing(world, col3[0], 0.3)
    get_singleton(world, Scoreboard).score = 120

    snap = build_snapshot(world)

    assert snap.column_status == ("safe", "warning", "danger", "danger")
    assert snap.columns[0] == ()
    assert snap.columns[1][0] == CubeView(value=1, row=0, selected=True, falling=False, removing=False)
    assert snap.columns[3][0].removing
    assert snap.columns[3][7] == CubeView(value=2, row=7, selected=False, falling=True, removing=False)
    assert snap.selected_sum == 4
    assert snap.current_target == 7
    assert snap.targets == (7, 9, 11)
    assert snap.score == 120
    assert snap.level == 1
    assert snap.level_label == "Beginner"
    assert snap.mode == GameMode.PLAYING


def test_column_status_thresholds():
    config = GameConfig()
    assert [column_status(h, config) for h in range(9)] == [
        "safe", "safe", "safe", "safe", "safe", "warning", "danger", "danger", "danger",
    ]


def test_empty_target_queue_has_no_current_target():
    session = make_session()
    assert build_snapshot(session.world).current_target is None
