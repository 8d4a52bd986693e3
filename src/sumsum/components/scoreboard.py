from dataclasses import dataclass


@dataclass(slots=True)
class Scoreboard:
    score: int = 0
    level: int = 1
    targets_cleared: int = 0
