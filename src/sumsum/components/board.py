from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class Board:
    """Column layout: cube entity ids per column, index 0 is the bottom row."""
    cols: int
    max_height: int
    columns: List[List[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.columns:
            self.columns = [[] for _ in range(self.cols)]

    def heights(self) -> List[int]:
        return [len(column) for column in self.columns]

    def is_full(self, col: int) -> bool:
        return len(self.columns[col]) >= self.max_height

    def has_room(self) -> bool:
        return any(len(column) < self.max_height for column in self.columns)
