from dataclasses import replace

import pytest
from esper import World

from sumsum.components.scoreboard import Scoreboard
from sumsum.config import GameConfig
from sumsum.events.bus import EventBus
from sumsum.systems.board_ops import get_board
from sumsum.utils.game_state import get_singleton
from sumsum.world import create_world


def test_defaults():
    config = GameConfig()
    assert config.num_columns == 4
    assert config.max_column_height == 8
    assert config.queue_size == 2
    assert config.target_queue_depth == 3
    assert config.combo_timeout_ms == 5000
    assert config.points_per_level == 500


@pytest.mark.parametrize(
    "changes",
    [
        {"num_columns": 0},
        {"max_cubes_for_sum": 1},
        {"max_target": 4},
        {"warning_height": 7},
        {"danger_height": 9},
        {"initial_cubes_min": 11},
        {"queue_size": -1},
        {"search_pool_limit": 3},
    ],
)
def test_invalid_configs_rejected(changes):
    with pytest.raises(ValueError):
        replace(GameConfig(), **changes)


def test_world_follows_config():
    config = GameConfig(num_columns=5, max_column_height=10, targets_ahead=1)
    world = create_world(EventBus(), config=config)
    board = get_board(world)
    assert board.cols == 5
    assert board.max_height == 10
    assert world.config is config


def test_missing_singletons_raise():
    with pytest.raises(RuntimeError):
        get_singleton(World(), Scoreboard)
    with pytest.raises(RuntimeError):
        get_board(World())
