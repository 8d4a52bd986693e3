"""Game state resource describing the session lifecycle."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """High-level modes that decide whether ticks and input mutate the board."""
    READY = auto()
    PLAYING = auto()
    PAUSED = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the current mode."""
    mode: GameMode = GameMode.READY
