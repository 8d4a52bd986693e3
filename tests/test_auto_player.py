from sumsum.ai.auto_player import AutoPlayer
from sumsum.components.target_queue import TargetQueue
from sumsum.events.bus import EVENT_TARGET_MATCHED
from sumsum.game import SumSumGame
from sumsum.systems.board_ops import active_cube_values, get_board, get_cube
from sumsum.utils.combination_search import can_reach
from sumsum.utils.game_state import get_singleton

from tests.helpers import drive_ticks, make_session, place_column, record


def test_find_solution_and_act_resolve_current_target():
    session = make_session(targets=[9, 8, 7])
    place_column(session.world, 0, [1, 4])
    place_column(session.world, 1, [5, 6])
    player = AutoPlayer(session.world, session.bus)
    matched = record(session.bus, EVENT_TARGET_MATCHED)

    solution = player.find_solution()
    assert sorted(get_cube(session.world, ent).value for ent in solution) == [4, 5]

    assert player.act()
    assert matched[0]["target"] == 9
    assert player.matches_attempted == 1


def test_act_clears_stale_selection_first():
    session = make_session(targets=[9, 8, 7])
    ents = place_column(session.world, 0, [1, 4, 5])
    session.board.toggle_selection(0, 0)
    player = AutoPlayer(session.world, session.bus)
    matched = record(session.bus, EVENT_TARGET_MATCHED)

    assert player.act()

    assert matched[0]["cubes"] == [(0, 1), (0, 2)]
    assert not get_cube(session.world, ents[0]).selected


def test_no_solution_leaves_board_alone():
    session = make_session(targets=[50, 8, 7])
    place_column(session.world, 0, [1, 2])
    player = AutoPlayer(session.world, session.bus)

    assert not player.act()
    assert player.matches_attempted == 0


def test_simulated_sessions_keep_board_consistent(monkeypatch):
    for seed in range(3):
        game = SumSumGame(seed=seed)
        generator = game.generator
        generate = generator.generate_target

        def checked_target():
            target = generate()
            pool = active_cube_values(game.world) + generator.upcoming_values()
            assert can_reach(pool, target), (pool, target)
            return target

        monkeypatch.setattr(generator, "generate_target", checked_target)
        AutoPlayer(game.world, game.event_bus, decision_delay=0.5)
        game.start()

        last_score = 0
        for step in range(3600):
            if game.is_over:
                break
            game.tick(1 / 30)
            if step % 10:
                continue
            snap = game.snapshot()
            assert snap.score >= last_score
            last_score = snap.score
            assert 1 <= snap.level <= 10
            assert len(snap.targets) == 3
            assert all(len(queue) == 2 for queue in snap.queues)
            for column in get_board(game.world).columns:
                assert len(column) <= 8
                assert [get_cube(game.world, ent).row for ent in column] == list(range(len(column)))

        assert game.snapshot().targets_cleared > 0
        assert len(get_singleton(game.world, TargetQueue).targets) == 3


def test_dropping_stale_selection_never_resolves_a_match():
    session = make_session(targets=[7, 9, 11])
    place_column(session.world, 0, [2, 3, 4, 5])
    for row in range(3):
        session.board.toggle_selection(0, row)
    player = AutoPlayer(session.world, session.bus)
    matched = record(session.bus, EVENT_TARGET_MATCHED)

    assert player.act()

    assert player.matches_attempted == 1
    assert len(matched) == 1
    assert matched[0]["cubes"] == [(0, 0), (0, 3)]


def test_detached_player_ignores_ticks():
    session = make_session(targets=[9, 8, 7])
    place_column(session.world, 0, [4, 5])
    player = AutoPlayer(session.world, session.bus, decision_delay=0.1)
    player.detach()
    matched = record(session.bus, EVENT_TARGET_MATCHED)

    drive_ticks(session.bus, 10, 0.05)

    assert matched == []
    assert player.matches_attempted == 0
